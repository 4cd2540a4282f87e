"""
JSON file store for the timeline.

The whole timeline is kept in one human-readable JSON document: an array
of item records in timeline order.

Write path:
- serialize the full snapshot
- write to a temp file in the target directory
- atomic replace onto the target path

A crash mid-write therefore leaves either the previous or the new
document on disk, never a truncated one.
"""

import json
import os
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

from src.domain.entities import Timeline
from src.domain.exceptions import TimelineException
from src.infrastructure.exceptions import TimelineLoadError, TimelineSaveError
from src.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class JsonFileTimelineStore:
    """Load/save the timeline as a JSON array of item records"""

    def __init__(self, file_path: str | Path) -> None:
        self.file_path = Path(file_path)

    async def read(self) -> Timeline:
        """
        Read the timeline from disk.

        Returns:
            Timeline: The stored timeline

        Raises:
            TimelineLoadError: If the file is missing, unreadable, not a JSON
                array, or holds records that break the timeline invariants
        """
        path = str(self.file_path)
        try:
            async with aiofiles.open(self.file_path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            raise TimelineLoadError(path, str(e)) from e

        try:
            records = json.loads(content)
        except json.JSONDecodeError as e:
            raise TimelineLoadError(path, f"invalid JSON: {e}") from e

        if not isinstance(records, list):
            raise TimelineLoadError(path, "top-level JSON value must be an array")

        try:
            return Timeline.from_records(records)
        except TimelineException as e:
            raise TimelineLoadError(path, e.message) from e

    async def load(self) -> Timeline:
        """
        Load the timeline, degrading to an empty one on any failure.

        Startup must never fail because of the data file.
        """
        try:
            timeline = await self.read()
        except TimelineLoadError as e:
            logger.error(
                "Error loading timeline, initializing empty: %s (%s)",
                e.message,
                e.details.get("reason"),
            )
            return Timeline.empty()

        logger.info("Timeline loaded: %d items from %s", len(timeline), self.file_path)
        return timeline

    async def save(self, timeline: Timeline) -> None:
        """
        Persist the full timeline with an atomic write.

        Raises:
            TimelineSaveError: If the document could not be written
        """
        target_path = self.file_path
        content = json.dumps(timeline.to_records(), indent=2, ensure_ascii=False)

        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent, prefix=".tmp_", suffix=target_path.suffix
            )
            os.close(temp_fd)
        except OSError as e:
            raise TimelineSaveError(str(target_path), str(e)) from e

        try:
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                await f.write(content)

            # Atomic replace
            await aiofiles.os.replace(temp_path, target_path)
        except OSError as e:
            try:
                await aiofiles.os.remove(temp_path)
            except OSError:
                pass
            raise TimelineSaveError(str(target_path), str(e)) from e

        logger.debug("Timeline saved: %d items to %s", len(timeline), target_path)
