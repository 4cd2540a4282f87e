"""
Infrastructure exceptions for the Event Timeline application.

This module defines infrastructure-level exceptions related to
timeline storage.
"""

from src.domain.exceptions import TimelineException


class PersistenceException(TimelineException):
    """Base exception for timeline store operations."""

    pass


class TimelineSaveError(PersistenceException):
    """Writing the timeline to durable storage failed."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            f"Failed to save timeline: {file_path}",
            "TIMELINE_SAVE_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class TimelineLoadError(PersistenceException):
    """Reading the timeline from durable storage failed."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(
            f"Failed to load timeline: {file_path}",
            "TIMELINE_LOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )
