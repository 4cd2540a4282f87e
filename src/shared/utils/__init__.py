from src.shared.utils.datetime import (
    ensure_utc,
    format_timestamp,
    parse_timestamp,
    utc_now,
)
from src.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "format_timestamp",
    "parse_timestamp",
]
