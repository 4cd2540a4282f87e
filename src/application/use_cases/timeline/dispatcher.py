"""
Timeline command dispatcher.

Single owner of the mutable timeline. Every command, from any number of
concurrent operators, goes through ``execute``; a lock makes each
read-apply-commit-persist-broadcast step atomic relative to the others,
so commands take effect one at a time in arrival order and saves and
broadcasts leave in commit order.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from src.domain.entities import Timeline, TimelineItem
from src.domain.exceptions import ResourceNotFoundException
from src.infrastructure.exceptions import PersistenceException
from src.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from src.application.interfaces.services import (ISnapshotPublisher,
                                                     ITimelineStore)
    from src.application.use_cases.timeline.commands import TimelineCommand
    from src.application.use_cases.timeline.transition_engine import \
        TransitionEngine

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """
    What the originator of a command gets back.

    Attributes:
        sequence: Position of the command in the dispatcher's execution order
        command: Command name
        changed: Whether the timeline was modified (and saved and broadcast)
        item: Target item after the transition, if any
    """

    sequence: int
    command: str
    changed: bool
    item: TimelineItem | None = None


class TimelineDispatcher:
    """Serializes timeline commands and fans out committed snapshots"""

    def __init__(
        self,
        timeline: Timeline,
        engine: "TransitionEngine",
        store: "ITimelineStore",
        publisher: "ISnapshotPublisher",
    ) -> None:
        self._timeline = timeline
        self.engine = engine
        self.store = store
        self.publisher = publisher
        self._lock = asyncio.Lock()
        self._sequence = 0

    def snapshot(self) -> Timeline:
        """Current timeline. Immutable, so safe to hand to any reader."""
        return self._timeline

    async def execute(self, command: "TimelineCommand") -> CommandResult:
        """
        Apply a command, then persist and broadcast if it changed anything.

        Args:
            command: The command to apply

        Returns:
            CommandResult for the originator

        Raises:
            ResourceNotFoundException: If the command targets an unknown item.
                Nothing is saved or broadcast in that case.
        """
        async with self._lock:
            result = self.engine.apply(self._timeline, command)

            if result.not_found:
                item_id = getattr(command, "item_id", "")
                logger.info("Command %s rejected: item %s not found", command.name, item_id)
                raise ResourceNotFoundException("TimelineItem", item_id)

            self._sequence += 1
            sequence = self._sequence

            if result.changed:
                self._timeline = result.timeline
                logger.info(
                    "Committed #%d %s (item=%s, items=%d)",
                    sequence,
                    command.name,
                    result.item.id if result.item else None,
                    len(result.timeline),
                )
                await self._persist(result.timeline)
                await self.publisher.publish_snapshot(result.timeline)
            else:
                logger.debug("Command #%d %s left the timeline unchanged", sequence, command.name)

            return CommandResult(sequence, command.name, result.changed, result.item)

    async def subscribe(self, connection: Any) -> bool:
        """
        Register a new client and push it the current snapshot.

        Runs under the command lock so the client cannot receive an older
        snapshot after a newer broadcast.
        """
        async with self._lock:
            await self.publisher.register(connection)
            return await self.publisher.send_snapshot(connection, self._timeline)

    async def _persist(self, timeline: Timeline) -> None:
        # In-memory state stays authoritative when the save fails
        try:
            await self.store.save(timeline)
        except PersistenceException as e:
            logger.error("Error saving timeline: %s (%s)", e.message, e.details.get("reason"))
