"""Domain enumerations for the Event Timeline application."""

from enum import Enum


class ItemStatus(str, Enum):
    """Lifecycle status of a timeline item"""

    UPCOMING = "upcoming"
    LIVE = "live"
    COMPLETED = "completed"
    DELAYED = "delayed"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [status.value for status in cls]
