"""Request/response surface for the timeline: query and CRUD"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from src.application.use_cases.timeline.commands import (CreateItem,
                                                         DeleteItem,
                                                         UpdateItem)
from src.application.use_cases.timeline.dispatcher import TimelineDispatcher
from src.domain.entities import AdminIdentity
from src.presentation.api.dependencies import (get_current_admin,
                                               get_timeline_dispatcher)
from src.presentation.api.v1.schemas.timeline import (DeleteResponse,
                                                      TimelineItemFields,
                                                      TimelineItemResponse)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[TimelineItemResponse])
async def get_timeline(
    dispatcher: Annotated[TimelineDispatcher, Depends(get_timeline_dispatcher)],
) -> list[dict[str, Any]]:
    """Full current timeline, in display order"""
    return dispatcher.snapshot().to_records()


@router.post("", response_model=TimelineItemResponse, status_code=status.HTTP_200_OK)
async def create_item(
    fields: TimelineItemFields,
    dispatcher: Annotated[TimelineDispatcher, Depends(get_timeline_dispatcher)],
    admin: Annotated[AdminIdentity, Depends(get_current_admin)],
) -> dict[str, Any]:
    """Append a new upcoming item; broadcasts the new timeline"""
    result = await dispatcher.execute(CreateItem(fields=fields.to_fields()))
    assert result.item is not None
    logger.info("Item %s created by %s", result.item.id, admin.email)
    return result.item.to_record()


@router.put("/{item_id}", response_model=TimelineItemResponse)
async def update_item(
    item_id: str,
    fields: TimelineItemFields,
    dispatcher: Annotated[TimelineDispatcher, Depends(get_timeline_dispatcher)],
    admin: Annotated[AdminIdentity, Depends(get_current_admin)],
) -> dict[str, Any]:
    """
    Shallow-merge fields into an item.

    Raises 404 (via the TimelineException handler) for unknown ids.
    """
    result = await dispatcher.execute(UpdateItem(item_id=item_id, fields=fields.to_fields()))
    assert result.item is not None
    logger.info("Item %s updated by %s", item_id, admin.email)
    return result.item.to_record()


@router.delete("/{item_id}", response_model=DeleteResponse)
async def delete_item(
    item_id: str,
    dispatcher: Annotated[TimelineDispatcher, Depends(get_timeline_dispatcher)],
    admin: Annotated[AdminIdentity, Depends(get_current_admin)],
) -> DeleteResponse:
    """Remove an item. Unknown ids are acknowledged too."""
    result = await dispatcher.execute(DeleteItem(item_id=item_id))
    if result.changed:
        logger.info("Item %s deleted by %s", item_id, admin.email)
    return DeleteResponse(success=True)
