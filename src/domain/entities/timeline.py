"""
Timeline domain entities.

A timeline is the ordered list of scheduled items for one live event.
Items and timelines are immutable values: lifecycle transitions return
new instances instead of mutating in place, so a reference handed out
as a snapshot can never change underneath its holder.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from src.domain.enums import ItemStatus
from src.domain.exceptions import TimelineInvariantError, ValidationException
from src.shared.utils.datetime import format_timestamp, parse_timestamp

# Fields owned by the lifecycle; callers cannot set them through create/update
RESERVED_FIELDS = frozenset({"id", "status", "actual_start", "actual_end"})


@dataclass(frozen=True)
class TimelineItem:
    """
    One scheduled entry of the timeline.

    Descriptive fields (title, scheduled time, speaker, ...) live in
    ``attributes`` and are passed through verbatim.
    """

    id: str
    status: ItemStatus = ItemStatus.UPCOMING
    actual_start: datetime | None = None
    actual_end: datetime | None = None
    remarks: str = ""
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id or not isinstance(self.id, str):
            raise ValidationException("Item id must be a non-empty string", field="id")
        object.__setattr__(self, "status", ItemStatus(self.status))
        object.__setattr__(self, "attributes", dict(self.attributes))

    @property
    def is_live(self) -> bool:
        return self.status == ItemStatus.LIVE

    def start(self, now: datetime) -> TimelineItem:
        """Go live; a restart clears any previous end time."""
        return replace(self, status=ItemStatus.LIVE, actual_start=now, actual_end=None)

    def complete(self, now: datetime) -> TimelineItem:
        return replace(self, status=ItemStatus.COMPLETED, actual_end=now)

    def delay(self) -> TimelineItem:
        return replace(self, status=ItemStatus.DELAYED)

    def reset(self) -> TimelineItem:
        return replace(
            self,
            status=ItemStatus.UPCOMING,
            actual_start=None,
            actual_end=None,
            remarks="",
        )

    def with_remarks(self, remarks: str) -> TimelineItem:
        return replace(self, remarks=remarks)

    def merged(self, fields: Mapping[str, Any]) -> TimelineItem:
        """
        Shallow-merge caller fields into the item.

        Reserved lifecycle fields are ignored; ``remarks`` updates the
        remarks, everything else overwrites or adds an attribute.
        """
        attributes = dict(self.attributes)
        remarks = self.remarks
        for key, value in fields.items():
            if key in RESERVED_FIELDS:
                continue
            if key == "remarks":
                remarks = "" if value is None else str(value)
            else:
                attributes[key] = value
        return replace(self, remarks=remarks, attributes=attributes)

    def to_record(self) -> dict[str, Any]:
        """Flatten to the JSON record shape used on the wire and on disk"""
        record: dict[str, Any] = {"id": self.id}
        record.update(self.attributes)
        record.update(
            {
                "status": self.status.value,
                "actual_start": format_timestamp(self.actual_start),
                "actual_end": format_timestamp(self.actual_end),
                "remarks": self.remarks,
            }
        )
        return record

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> TimelineItem:
        """Rebuild an item from a record produced by ``to_record``"""
        if not isinstance(record, Mapping):
            raise ValidationException("Timeline record must be an object")

        status = record.get("status", ItemStatus.UPCOMING.value)
        if status not in ItemStatus.values():
            raise ValidationException(f"Unknown item status: {status!r}", field="status")

        try:
            actual_start = parse_timestamp(record.get("actual_start"))
            actual_end = parse_timestamp(record.get("actual_end"))
        except ValueError as e:
            raise ValidationException(f"Invalid timestamp: {e}") from e

        remarks = record.get("remarks") or ""
        attributes = {
            key: value
            for key, value in record.items()
            if key not in RESERVED_FIELDS and key != "remarks"
        }
        return cls(
            id=record.get("id"),  # type: ignore[arg-type]
            status=ItemStatus(status),
            actual_start=actual_start,
            actual_end=actual_end,
            remarks=str(remarks),
            attributes=attributes,
        )


@dataclass(frozen=True)
class Timeline:
    """
    Ordered, immutable sequence of timeline items.

    Invariants (checked on construction):
    - item ids are unique
    - at most one item is live
    """

    items: tuple[TimelineItem, ...] = ()

    def __post_init__(self) -> None:
        items = tuple(self.items)
        object.__setattr__(self, "items", items)

        seen: set[str] = set()
        duplicates: list[str] = []
        for item in items:
            if item.id in seen:
                duplicates.append(item.id)
            seen.add(item.id)
        if duplicates:
            raise TimelineInvariantError("duplicate item ids", duplicates)

        live = [item.id for item in items if item.is_live]
        if len(live) > 1:
            raise TimelineInvariantError("more than one live item", live)

    @classmethod
    def empty(cls) -> Timeline:
        return cls(())

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[TimelineItem]:
        return iter(self.items)

    def find(self, item_id: str) -> TimelineItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def index_of(self, item_id: str) -> int:
        """Position of the item, or -1 when absent"""
        for index, item in enumerate(self.items):
            if item.id == item_id:
                return index
        return -1

    def live_item(self) -> TimelineItem | None:
        for item in self.items:
            if item.is_live:
                return item
        return None

    def to_records(self) -> list[dict[str, Any]]:
        return [item.to_record() for item in self.items]

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> Timeline:
        return cls(tuple(TimelineItem.from_record(record) for record in records))
