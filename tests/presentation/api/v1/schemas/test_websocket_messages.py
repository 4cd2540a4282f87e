"""Test parsing of inbound WebSocket events"""

import pytest

from src.application.use_cases.timeline.commands import (DelayItem, EndItem,
                                                         ResetItem, StartItem,
                                                         UpdateRemark)
from src.domain.exceptions import ValidationException
from src.presentation.api.v1.schemas.websocket import (ADMIN_EVENTS,
                                                       build_command,
                                                       parse_inbound_message)


def command_for(text: str):
    return build_command(parse_inbound_message(text))


@pytest.mark.parametrize(
    "event, command_type",
    [
        ("admin:start_item", StartItem),
        ("admin:end_item", EndItem),
        ("admin:reset_item", ResetItem),
    ],
)
def test_item_events_accept_bare_id_or_reference(event, command_type):
    bare = command_for(f'{{"event": "{event}", "data": "a1"}}')
    wrapped = command_for(f'{{"event": "{event}", "data": {{"id": "a1"}}}}')

    assert bare == wrapped == command_type(item_id="a1")


def test_delay_item_reads_camel_case_minutes():
    command = command_for('{"event": "admin:delay_item", "data": {"id": "a1", "delayMinutes": 15}}')

    assert command == DelayItem(item_id="a1", delay_minutes=15)


def test_delay_item_minutes_optional():
    command = command_for('{"event": "admin:delay_item", "data": {"id": "a1"}}')

    assert command == DelayItem(item_id="a1", delay_minutes=None)


def test_update_remark():
    command = command_for('{"event": "admin:update_remark", "data": {"id": "a1", "remark": "late"}}')

    assert command == UpdateRemark(item_id="a1", remark="late")


def test_admin_events():
    assert ADMIN_EVENTS == {
        "admin:start_item",
        "admin:end_item",
        "admin:delay_item",
        "admin:update_remark",
        "admin:reset_item",
    }


@pytest.mark.parametrize("text", ["not json", "[]", '{"data": "a1"}', '{"event": ""}'])
def test_malformed_envelope(text):
    with pytest.raises(ValidationException):
        parse_inbound_message(text)


def test_unknown_event():
    with pytest.raises(ValidationException) as exc_info:
        command_for('{"event": "admin:explode", "data": "a1"}')

    assert exc_info.value.details == {"field": "event"}


@pytest.mark.parametrize(
    "text",
    [
        '{"event": "admin:start_item"}',
        '{"event": "admin:start_item", "data": ""}',
        '{"event": "admin:delay_item", "data": {"id": "a1", "delayMinutes": -1}}',
        '{"event": "admin:update_remark", "data": "a1"}',
    ],
)
def test_invalid_payload(text):
    with pytest.raises(ValidationException):
        command_for(text)
