"""Unit tests for the timeline domain entities"""
from datetime import UTC, datetime

import pytest

from src.domain.entities import Timeline, TimelineItem
from src.domain.enums import ItemStatus
from src.domain.exceptions import TimelineInvariantError, ValidationException

NOW = datetime(2026, 10, 18, 9, 30, tzinfo=UTC)


class TestTimelineItem:
    """Tests for TimelineItem values."""

    def test_new_item_defaults(self):
        item = TimelineItem(id="a1")

        assert item.status == ItemStatus.UPCOMING
        assert item.actual_start is None
        assert item.actual_end is None
        assert item.remarks == ""
        assert item.attributes == {}

    def test_empty_id_is_rejected(self):
        with pytest.raises(ValidationException):
            TimelineItem(id="")

    def test_restart_clears_previous_end(self):
        item = TimelineItem(id="a1").start(NOW).complete(NOW)

        restarted = item.start(NOW)

        assert restarted.status == ItemStatus.LIVE
        assert restarted.actual_start == NOW
        assert restarted.actual_end is None

    def test_merged_ignores_lifecycle_fields(self):
        """
        GIVEN an upcoming item
        WHEN fields including id, status and timestamps are merged
        THEN only descriptive fields and remarks change
        """
        item = TimelineItem(id="a1", attributes={"title": "Opening"})

        merged = item.merged(
            {
                "id": "hijack",
                "status": "live",
                "actual_start": "2026-01-01T00:00:00Z",
                "title": "Opening keynote",
                "room": "Hall A",
                "remarks": "mic check",
            }
        )

        assert merged.id == "a1"
        assert merged.status == ItemStatus.UPCOMING
        assert merged.actual_start is None
        assert merged.remarks == "mic check"
        assert merged.attributes == {"title": "Opening keynote", "room": "Hall A"}
        # Original value untouched
        assert item.attributes == {"title": "Opening"}

    def test_to_record_flattens_attributes(self):
        item = TimelineItem(
            id="a1",
            status=ItemStatus.LIVE,
            actual_start=NOW,
            attributes={"title": "Opening", "time": "09:00"},
        )

        record = item.to_record()

        assert record == {
            "id": "a1",
            "title": "Opening",
            "time": "09:00",
            "status": "live",
            "actual_start": "2026-10-18T09:30:00+00:00",
            "actual_end": None,
            "remarks": "",
        }

    def test_from_record_accepts_javascript_timestamps(self):
        record = {
            "id": "1717000000000",
            "title": "Break",
            "status": "completed",
            "actual_start": "2026-10-18T09:00:00.000Z",
            "actual_end": "2026-10-18T09:15:00.000Z",
            "remarks": None,
        }

        item = TimelineItem.from_record(record)

        assert item.status == ItemStatus.COMPLETED
        assert item.actual_start == datetime(2026, 10, 18, 9, 0, tzinfo=UTC)
        assert item.actual_end == datetime(2026, 10, 18, 9, 15, tzinfo=UTC)
        assert item.remarks == ""
        assert item.attributes == {"title": "Break"}

    @pytest.mark.parametrize(
        "record",
        [
            {"title": "no id"},
            {"id": "a1", "status": "paused"},
            {"id": "a1", "actual_start": "yesterday"},
            ["not", "an", "object"],
        ],
    )
    def test_from_record_rejects_invalid_records(self, record):
        with pytest.raises(ValidationException):
            TimelineItem.from_record(record)


class TestTimeline:
    """Tests for Timeline invariants and lookups."""

    def test_duplicate_ids_are_rejected(self):
        with pytest.raises(TimelineInvariantError) as exc_info:
            Timeline((TimelineItem(id="a1"), TimelineItem(id="a1")))

        assert exc_info.value.details["item_ids"] == ["a1"]

    def test_two_live_items_are_rejected(self):
        with pytest.raises(TimelineInvariantError):
            Timeline(
                (
                    TimelineItem(id="a1", status=ItemStatus.LIVE),
                    TimelineItem(id="b1", status=ItemStatus.LIVE),
                )
            )

    def test_lookups(self):
        timeline = Timeline(
            (
                TimelineItem(id="a1"),
                TimelineItem(id="b1", status=ItemStatus.LIVE),
            )
        )

        assert len(timeline) == 2
        assert timeline.find("b1").id == "b1"
        assert timeline.find("zzz") is None
        assert timeline.index_of("b1") == 1
        assert timeline.index_of("zzz") == -1
        assert timeline.live_item().id == "b1"
        assert [item.id for item in timeline] == ["a1", "b1"]

    def test_records_round_trip_preserves_order_and_fields(self):
        timeline = Timeline(
            (
                TimelineItem(id="b1", attributes={"title": "Second"}),
                TimelineItem(
                    id="a1",
                    status=ItemStatus.LIVE,
                    actual_start=NOW,
                    remarks="running late",
                    attributes={"title": "First", "tags": ["keynote"]},
                ),
            )
        )

        assert Timeline.from_records(timeline.to_records()) == timeline
