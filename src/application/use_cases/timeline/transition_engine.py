"""
Timeline transition engine.

Maps (timeline, command) to the next timeline. Pure with respect to its
inputs: the clock and the id factory are injected, nothing is persisted
or broadcast here, and the input timeline is never modified.

Status lifecycle of a single item:

    upcoming ──start──> live ──end──> completed
        ^                 │
        │                 └── another item started ──> completed
        └───── reset (from any status)
    any status ──delay──> delayed
    any non-live status ──start──> live (restart clears actual_end)

Only ``start`` can make an item live, and it demotes every other live
item in the same step, so at most one item is ever live.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from src.application.use_cases.timeline.commands import (CreateItem,
                                                         DelayItem,
                                                         DeleteItem, EndItem,
                                                         ResetItem, StartItem,
                                                         TimelineCommand,
                                                         UpdateItem,
                                                         UpdateRemark)
from src.domain.entities import Timeline, TimelineItem
from src.domain.exceptions import ValidationException
from src.shared.utils import generate_cuid, utc_now


@dataclass(frozen=True)
class TransitionResult:
    """
    Outcome of applying one command.

    Attributes:
        timeline: Next timeline (the input timeline when nothing changed)
        changed: Whether any item was added, removed or modified
        item: The target item after the transition (the removed item for delete)
        not_found: The command targeted an id absent from the timeline
    """

    timeline: Timeline
    changed: bool
    item: TimelineItem | None = None
    not_found: bool = False


def _replace_at(timeline: Timeline, index: int, item: TimelineItem) -> Timeline:
    items = timeline.items
    return Timeline(items[:index] + (item,) + items[index + 1 :])


class TransitionEngine:
    """Computes timeline transitions for every supported command"""

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = generate_cuid,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory
        self._handlers: dict[type, Callable[[Timeline, TimelineCommand], TransitionResult]] = {
            CreateItem: self._create,
            UpdateItem: self._update,
            DeleteItem: self._delete,
            StartItem: self._start,
            EndItem: self._end,
            DelayItem: self._delay,
            UpdateRemark: self._update_remark,
            ResetItem: self._reset,
        }

    def apply(self, timeline: Timeline, command: TimelineCommand) -> TransitionResult:
        """
        Apply a command to a timeline.

        Args:
            timeline: Current timeline (left untouched)
            command: Command to apply

        Returns:
            TransitionResult with the next timeline and the changed flag

        Raises:
            ValidationException: If the command type is not supported
        """
        handler = self._handlers.get(type(command))
        if handler is None:
            raise ValidationException(f"Unsupported command: {type(command).__name__}")
        return handler(timeline, command)

    def _create(self, timeline: Timeline, command: CreateItem) -> TransitionResult:
        # New items always start without remarks
        item = TimelineItem(id=self._id_factory()).merged(command.fields).with_remarks("")
        return TransitionResult(Timeline(timeline.items + (item,)), True, item)

    def _update(self, timeline: Timeline, command: UpdateItem) -> TransitionResult:
        index = timeline.index_of(command.item_id)
        if index == -1:
            return TransitionResult(timeline, False, not_found=True)

        item = timeline.items[index].merged(command.fields)
        return TransitionResult(_replace_at(timeline, index, item), True, item)

    def _delete(self, timeline: Timeline, command: DeleteItem) -> TransitionResult:
        index = timeline.index_of(command.item_id)
        if index == -1:
            # Deleting an absent item is acknowledged as a no-op
            return TransitionResult(timeline, False)

        items = timeline.items
        removed = items[index]
        return TransitionResult(Timeline(items[:index] + items[index + 1 :]), True, removed)

    def _start(self, timeline: Timeline, command: StartItem) -> TransitionResult:
        if timeline.find(command.item_id) is None:
            return TransitionResult(timeline, False, not_found=True)

        now = self._clock()
        changed = False
        target: TimelineItem | None = None
        items: list[TimelineItem] = []

        for item in timeline:
            if item.id == command.item_id:
                if not item.is_live:
                    item = item.start(now)
                    changed = True
                target = item
            elif item.is_live:
                item = item.complete(now)
                changed = True
            items.append(item)

        if not changed:
            return TransitionResult(timeline, False, target)
        return TransitionResult(Timeline(tuple(items)), True, target)

    def _end(self, timeline: Timeline, command: EndItem) -> TransitionResult:
        index = timeline.index_of(command.item_id)
        if index == -1:
            return TransitionResult(timeline, False, not_found=True)

        item = timeline.items[index]
        if not item.is_live:
            return TransitionResult(timeline, False, item)

        item = item.complete(self._clock())
        return TransitionResult(_replace_at(timeline, index, item), True, item)

    def _delay(self, timeline: Timeline, command: DelayItem) -> TransitionResult:
        # delay_minutes is not applied to any schedule field
        index = timeline.index_of(command.item_id)
        if index == -1:
            return TransitionResult(timeline, False, not_found=True)

        item = timeline.items[index].delay()
        return TransitionResult(_replace_at(timeline, index, item), True, item)

    def _update_remark(self, timeline: Timeline, command: UpdateRemark) -> TransitionResult:
        index = timeline.index_of(command.item_id)
        if index == -1:
            return TransitionResult(timeline, False, not_found=True)

        item = timeline.items[index].with_remarks(command.remark)
        return TransitionResult(_replace_at(timeline, index, item), True, item)

    def _reset(self, timeline: Timeline, command: ResetItem) -> TransitionResult:
        index = timeline.index_of(command.item_id)
        if index == -1:
            return TransitionResult(timeline, False, not_found=True)

        item = timeline.items[index].reset()
        return TransitionResult(_replace_at(timeline, index, item), True, item)
