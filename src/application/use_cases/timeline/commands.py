"""
Timeline commands.

A command is a named, parameterized request to mutate the timeline.
Commands are plain values; the transition engine interprets them and
the dispatcher serializes their execution.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar


@dataclass(frozen=True)
class CreateItem:
    fields: Mapping[str, Any] = field(default_factory=dict)
    name: ClassVar[str] = "create_item"


@dataclass(frozen=True)
class UpdateItem:
    item_id: str
    fields: Mapping[str, Any] = field(default_factory=dict)
    name: ClassVar[str] = "update_item"


@dataclass(frozen=True)
class DeleteItem:
    item_id: str
    name: ClassVar[str] = "delete_item"


@dataclass(frozen=True)
class StartItem:
    item_id: str
    name: ClassVar[str] = "start_item"


@dataclass(frozen=True)
class EndItem:
    item_id: str
    name: ClassVar[str] = "end_item"


@dataclass(frozen=True)
class DelayItem:
    """Mark an item delayed. ``delay_minutes`` is recorded on the command only."""

    item_id: str
    delay_minutes: int | None = None
    name: ClassVar[str] = "delay_item"


@dataclass(frozen=True)
class UpdateRemark:
    item_id: str
    remark: str = ""
    name: ClassVar[str] = "update_remark"


@dataclass(frozen=True)
class ResetItem:
    item_id: str
    name: ClassVar[str] = "reset_item"


TimelineCommand = (
    CreateItem
    | UpdateItem
    | DeleteItem
    | StartItem
    | EndItem
    | DelayItem
    | UpdateRemark
    | ResetItem
)
