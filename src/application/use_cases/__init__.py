"""Application use cases."""

from src.application.use_cases.timeline import (CommandResult,
                                                TimelineDispatcher,
                                                TransitionEngine)

__all__ = [
    "TransitionEngine",
    "TimelineDispatcher",
    "CommandResult",
]
