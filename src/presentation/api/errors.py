"""Mapping of domain exceptions to HTTP responses"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.domain.exceptions import (AuthenticationException,
                                   ResourceNotFoundException,
                                   TimelineException, ValidationException)

logger = logging.getLogger(__name__)

_STATUS_CODES: dict[type[TimelineException], int] = {
    ResourceNotFoundException: status.HTTP_404_NOT_FOUND,
    AuthenticationException: status.HTTP_401_UNAUTHORIZED,
    ValidationException: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def status_code_for(exc: TimelineException) -> int:
    for exc_type, code in _STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def timeline_exception_handler(request: Request, exc: TimelineException) -> JSONResponse:
    """Render a TimelineException as its to_dict() body"""
    code = status_code_for(exc)
    logger.info(f"{request.method} {request.url.path} -> {code} {exc.error_code}")
    return JSONResponse(status_code=code, content=exc.to_dict())
