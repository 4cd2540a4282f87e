"""Domain entities."""

from src.domain.entities.admin import AdminIdentity
from src.domain.entities.timeline import RESERVED_FIELDS, Timeline, TimelineItem

__all__ = [
    "AdminIdentity",
    "RESERVED_FIELDS",
    "Timeline",
    "TimelineItem",
]
