"""Timeline use cases: commands, transitions and their serialized execution."""

from src.application.use_cases.timeline.commands import (CreateItem,
                                                         DelayItem,
                                                         DeleteItem, EndItem,
                                                         ResetItem, StartItem,
                                                         TimelineCommand,
                                                         UpdateItem,
                                                         UpdateRemark)
from src.application.use_cases.timeline.dispatcher import (CommandResult,
                                                           TimelineDispatcher)
from src.application.use_cases.timeline.transition_engine import (
    TransitionEngine, TransitionResult)

__all__ = [
    "CreateItem",
    "UpdateItem",
    "DeleteItem",
    "StartItem",
    "EndItem",
    "DelayItem",
    "UpdateRemark",
    "ResetItem",
    "TimelineCommand",
    "TransitionEngine",
    "TransitionResult",
    "TimelineDispatcher",
    "CommandResult",
]
