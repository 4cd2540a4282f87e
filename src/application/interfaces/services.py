"""
Service interfaces (ports) for the application layer.

These protocols define the contracts the timeline use cases depend on.
Following Dependency Inversion Principle (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol

from src.domain.entities import AdminIdentity, Timeline


class ITimelineStore(Protocol):
    """Protocol for durable timeline storage (DIP)"""

    async def load(self) -> Timeline:
        """Load the stored timeline, or an empty one on failure"""
        ...

    async def save(self, timeline: Timeline) -> None:
        """Persist the full timeline; raises PersistenceException on failure"""
        ...


class ISnapshotPublisher(Protocol):
    """Protocol for pushing full timeline snapshots to connected clients (DIP)"""

    async def register(self, connection: Any) -> None:
        """Start delivering broadcasts to an accepted connection"""
        ...

    async def send_snapshot(self, connection: Any, timeline: Timeline) -> bool:
        """Push a snapshot to one connection"""
        ...

    async def publish_snapshot(self, timeline: Timeline) -> int:
        """Push a snapshot to every connection, returns delivery count"""
        ...


class ICredentialVerifier(Protocol):
    """Protocol for operator credential verification (DIP)"""

    def verify(self, email: str, password: str) -> AdminIdentity | None:
        """Return the operator identity for a valid pair, else None"""
        ...
