from cuid2 import cuid_wrapper

# Module-level generator, reused for every timeline item id
cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant identifier for a new timeline item"""
    result = cuid_generator()
    assert isinstance(result, str)
    return result
