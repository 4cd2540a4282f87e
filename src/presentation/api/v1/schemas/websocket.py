"""
Inbound push-channel messages.

Clients send JSON text frames shaped ``{"event": <name>, "data": <payload>}``.
Item-targeted events accept either the bare item id or ``{"id": ...}`` as data.
"""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.application.use_cases.timeline.commands import (DelayItem, EndItem,
                                                         ResetItem, StartItem,
                                                         TimelineCommand,
                                                         UpdateRemark)
from src.domain.exceptions import ValidationException


class InboundMessage(BaseModel):
    event: str = Field(..., min_length=1)
    data: Any = None


class ItemReference(BaseModel):
    id: str = Field(..., min_length=1)


class DelayItemPayload(ItemReference):
    model_config = ConfigDict(populate_by_name=True)

    # Accepted and validated, not applied to the schedule
    delay_minutes: int | None = Field(None, ge=0, alias="delayMinutes")


class UpdateRemarkPayload(ItemReference):
    remark: str = Field("", max_length=2000)


def _item_reference(data: Any) -> ItemReference:
    if isinstance(data, str):
        data = {"id": data}
    return ItemReference.model_validate(data)


_COMMAND_BUILDERS: dict[str, Callable[[Any], TimelineCommand]] = {
    "admin:start_item": lambda data: StartItem(item_id=_item_reference(data).id),
    "admin:end_item": lambda data: EndItem(item_id=_item_reference(data).id),
    "admin:reset_item": lambda data: ResetItem(item_id=_item_reference(data).id),
    "admin:delay_item": lambda data: _delay_command(DelayItemPayload.model_validate(data)),
    "admin:update_remark": lambda data: _remark_command(UpdateRemarkPayload.model_validate(data)),
}

ADMIN_EVENTS = frozenset(_COMMAND_BUILDERS)


def _delay_command(payload: DelayItemPayload) -> DelayItem:
    return DelayItem(item_id=payload.id, delay_minutes=payload.delay_minutes)


def _remark_command(payload: UpdateRemarkPayload) -> UpdateRemark:
    return UpdateRemark(item_id=payload.id, remark=payload.remark)


def parse_inbound_message(text: str) -> InboundMessage:
    """
    Parse a raw text frame.

    Raises:
        ValidationException: If the frame is not a JSON event envelope
    """
    try:
        return InboundMessage.model_validate_json(text)
    except ValidationError as e:
        raise ValidationException(f"Malformed message: {e.errors()[0]['msg']}") from e


def build_command(message: InboundMessage) -> TimelineCommand:
    """
    Turn an admin event into a timeline command.

    Raises:
        ValidationException: If the event is unknown or its payload is invalid
    """
    builder = _COMMAND_BUILDERS.get(message.event)
    if builder is None:
        raise ValidationException(f"Unknown event: {message.event}", field="event")
    try:
        return builder(message.data)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or None
        raise ValidationException(f"Invalid payload for {message.event}: {error['msg']}", field) from e
