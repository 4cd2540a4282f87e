from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.domain.enums import ItemStatus


class TimelineItemFields(BaseModel):
    """
    Caller-supplied item fields for create and update.

    Descriptive fields (title, time, speaker, ...) are opaque and accepted
    as extra keys. Lifecycle fields (id, status, actual_start, actual_end)
    are ignored if sent, and so is remarks on create: new items start
    without remarks.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {"title": "Opening keynote", "time": "09:00", "speaker": "Jane Doe"}
        },
    )

    remarks: str | None = Field(None, max_length=2000)

    def to_fields(self) -> dict[str, Any]:
        """Fields to merge into the item, without an unset remarks key"""
        data = self.model_dump()
        if data.get("remarks") is None:
            data.pop("remarks", None)
        return data


class TimelineItemResponse(BaseModel):
    """A timeline item record, descriptive fields flattened alongside"""

    model_config = ConfigDict(extra="allow")

    id: str
    status: ItemStatus
    actual_start: str | None = None
    actual_end: str | None = None
    remarks: str = ""


class DeleteResponse(BaseModel):
    success: bool = True
