"""WebSocket endpoints for the real-time timeline channel"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect

from src.application.services.authentication_service import AuthenticationService
from src.application.use_cases.timeline.dispatcher import TimelineDispatcher
from src.domain.entities import AdminIdentity
from src.domain.exceptions import AuthenticationException, TimelineException
from src.presentation.api.dependencies import (get_authentication_service,
                                               get_timeline_dispatcher)
from src.presentation.api.v1.schemas.websocket import (ADMIN_EVENTS,
                                                       build_command,
                                                       parse_inbound_message)
from src.presentation.api.websocket.manager import (ConnectionManager,
                                                    error_message,
                                                    get_connection_manager)
from src.shared.context import reset_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

router = APIRouter()


def resolve_operator(
    auth_service: AuthenticationService, token: str | None
) -> AdminIdentity | None:
    """
    Resolve the optional token query parameter.

    Returns:
        The operator for a valid admin token, None when no token was given

    Raises:
        AuthenticationException: If a token was given but is not valid
    """
    if not token:
        return None
    return auth_service.identify(token)


async def handle_client_message(
    websocket: WebSocket,
    text: str,
    operator: AdminIdentity | None,
    dispatcher: TimelineDispatcher,
    manager: ConnectionManager,
) -> None:
    """
    Execute one inbound event.

    Errors go back to the sending client only; successful commands reach
    every client through the dispatcher's broadcast.
    """
    token = set_correlation_id(str(uuid.uuid4()))
    try:
        message = parse_inbound_message(text)
        if message.event in ADMIN_EVENTS and operator is None:
            raise AuthenticationException("Admin session required for timeline commands")

        command = build_command(message)
        result = await dispatcher.execute(command)
        logger.debug(
            "WebSocket command %s by %s -> #%d changed=%s",
            command.name,
            operator.email if operator else None,
            result.sequence,
            result.changed,
        )
    except TimelineException as e:
        logger.info(f"WebSocket command rejected: {e.error_code} {e.message}")
        await manager.send_personal(websocket, error_message(e.to_dict()))
    finally:
        reset_correlation_id(token)


@router.websocket("/ws")
async def timeline_websocket(
    websocket: WebSocket,
    token: str | None = Query(None, description="Operator session token (optional)"),
):
    """
    WebSocket endpoint for the live timeline.

    Query Parameters:
        token: operator session token; viewers connect without one

    Message Format (outgoing):
        {"event": "timeline:data", "data": [<item record>, ...]}
        {"event": "timeline:error", "data": {"error": ..., "message": ..., "details": ...}}

    Message Format (incoming, operators only):
        {"event": "admin:start_item", "data": "<item id>"}
        {"event": "admin:end_item", "data": "<item id>"}
        {"event": "admin:delay_item", "data": {"id": "...", "delayMinutes": 10}}
        {"event": "admin:update_remark", "data": {"id": "...", "remark": "..."}}
        {"event": "admin:reset_item", "data": "<item id>"}
    """
    dispatcher = get_timeline_dispatcher()
    auth_service = get_authentication_service()
    manager = get_connection_manager()

    # Validate token before accepting connection
    try:
        operator = resolve_operator(auth_service, token)
    except AuthenticationException as e:
        logger.warning(f"WebSocket auth failed: {e.message}")
        await websocket.close(code=4001, reason="Invalid authentication token")
        return

    await manager.connect(websocket)
    try:
        # Initial snapshot
        await dispatcher.subscribe(websocket)

        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text("pong")
                continue
            await handle_client_message(websocket, data, operator, dispatcher, manager)

    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected")
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
        try:
            await websocket.close(code=1011, reason="Internal server error")
        except Exception:
            pass
    finally:
        await manager.disconnect(websocket)


@router.get("/ws/status")
async def websocket_status():
    """
    Get WebSocket connection status.

    Returns connection counts for monitoring.
    """
    manager = get_connection_manager()
    return {"total_connections": manager.get_total_connections()}
