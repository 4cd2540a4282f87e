"""
Domain layer - Enterprise Business Rules.

This is the innermost layer containing the timeline entities and
domain exceptions. It depends only on shared utilities.
"""

from src.domain.entities import (RESERVED_FIELDS, AdminIdentity, Timeline,
                                 TimelineItem)
from src.domain.enums import ItemStatus
from src.domain.exceptions import (AuthenticationException,
                                   ResourceNotFoundException,
                                   TimelineException, TimelineInvariantError,
                                   ValidationException)

__all__ = [
    # Entities
    "AdminIdentity",
    "Timeline",
    "TimelineItem",
    "RESERVED_FIELDS",
    # Enums
    "ItemStatus",
    # Exceptions
    "TimelineException",
    "ValidationException",
    "AuthenticationException",
    "ResourceNotFoundException",
    "TimelineInvariantError",
]
