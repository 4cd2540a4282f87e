"""WebSocket connection manager for real-time timeline updates"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from fastapi import WebSocket

from src.domain.entities import Timeline

logger = logging.getLogger(__name__)

TIMELINE_DATA_EVENT = "timeline:data"
TIMELINE_ERROR_EVENT = "timeline:error"

# Seconds a single client may take to accept a frame before it is dropped
DEFAULT_SEND_TIMEOUT = 5.0


def timeline_message(timeline: Timeline) -> dict[str, Any]:
    """Full-state push message"""
    return {"event": TIMELINE_DATA_EVENT, "data": timeline.to_records()}


def error_message(error: dict[str, Any]) -> dict[str, Any]:
    return {"event": TIMELINE_ERROR_EVENT, "data": error}


class ConnectionManager:
    """
    Manages the WebSocket connections of timeline viewers and operators.

    Handles:
    - Connection registration/deregistration
    - Full-snapshot broadcasting to every client
    - Dropping clients whose sends fail or stall past send_timeout
    """

    def __init__(self, send_timeout: float = DEFAULT_SEND_TIMEOUT) -> None:
        self.active_connections: list[WebSocket] = []
        self.send_timeout = send_timeout
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket) -> None:
        """Accept a WebSocket connection (registration happens on subscribe)"""
        await websocket.accept()

    async def register(self, websocket: WebSocket) -> None:
        """
        Start delivering broadcasts to an accepted connection.

        Args:
            websocket: The accepted WebSocket connection
        """
        async with self._lock:
            if websocket not in self.active_connections:
                self.active_connections.append(websocket)

        logger.info(
            f"WebSocket connected. Total connections: {len(self.active_connections)}"
        )

    async def disconnect(self, websocket: WebSocket) -> None:
        """
        Remove a WebSocket connection.

        Args:
            websocket: The WebSocket connection to remove
        """
        async with self._lock:
            try:
                self.active_connections.remove(websocket)
            except ValueError:
                pass  # Connection already removed

        logger.info(
            f"WebSocket disconnected. Total connections: {len(self.active_connections)}"
        )

    async def _send(self, websocket: WebSocket, text: str) -> bool:
        """Send one frame, giving up after send_timeout seconds"""
        try:
            await asyncio.wait_for(websocket.send_text(text), timeout=self.send_timeout)
            return True
        except TimeoutError:
            logger.warning(f"WebSocket send timed out after {self.send_timeout}s")
            return False
        except Exception as e:
            logger.warning(f"Failed to send to WebSocket: {e}")
            return False

    async def broadcast(self, message: dict[str, Any]) -> int:
        """
        Send message to all connections.

        Clients are sent to concurrently; a client that fails or does not
        accept the frame within send_timeout is dropped.

        Args:
            message: Message data to send

        Returns:
            Number of connections that received the message
        """
        connections = self.active_connections.copy()
        if not connections:
            return 0

        message_text = json.dumps(message)
        results = await asyncio.gather(
            *(self._send(connection, message_text) for connection in connections)
        )
        failed_connections = [
            connection for connection, sent in zip(connections, results) if not sent
        ]

        # Clean up failed connections
        if failed_connections:
            async with self._lock:
                for conn in failed_connections:
                    try:
                        self.active_connections.remove(conn)
                    except ValueError:
                        pass

        sent_count = len(connections) - len(failed_connections)
        logger.debug(f"Broadcast: {sent_count}/{len(connections)} successful")
        return sent_count

    async def publish_snapshot(self, timeline: Timeline) -> int:
        """Push the full timeline to every connected client"""
        return await self.broadcast(timeline_message(timeline))

    async def send_snapshot(self, websocket: WebSocket, timeline: Timeline) -> bool:
        """Push the full timeline to one client"""
        return await self.send_personal(websocket, timeline_message(timeline))

    async def send_personal(self, websocket: WebSocket, message: dict[str, Any]) -> bool:
        """
        Send message to a specific connection.

        Args:
            websocket: Target WebSocket connection
            message: Message data to send

        Returns:
            True if sent successfully
        """
        return await self._send(websocket, json.dumps(message))

    def get_total_connections(self) -> int:
        """Get total number of active connections"""
        return len(self.active_connections)

    async def close_all(self) -> None:
        """Close all WebSocket connections (for shutdown)"""
        async with self._lock:
            for conn in self.active_connections:
                try:
                    await conn.close()
                except Exception as e:
                    logger.debug(f"Error closing WebSocket: {e}")
            self.active_connections.clear()
        logger.info("All WebSocket connections closed")


# Global connection manager instance
_manager: ConnectionManager | None = None


def get_connection_manager() -> ConnectionManager:
    """Get the global connection manager, creating if needed"""
    global _manager
    if _manager is None:
        _manager = ConnectionManager()
    return _manager


def set_connection_manager(manager: ConnectionManager | None) -> None:
    """Set the global connection manager (for testing)"""
    global _manager
    _manager = manager
