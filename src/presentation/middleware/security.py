"""Security middleware for HTTP security headers, request size and correlation ids"""
import logging
import uuid
from collections.abc import Callable

from fastapi import Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from src.shared.context import reset_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# API documentation pages load Swagger UI / ReDoc assets from a CDN
_DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add security headers to all HTTP responses.

    Headers added:
    - X-Frame-Options: Prevents clickjacking attacks
    - X-Content-Type-Options: Prevents MIME type sniffing
    - Referrer-Policy: Controls referrer information
    - Strict-Transport-Security: Forces HTTPS (https requests only)
    - Content-Security-Policy: Restricts resource loading
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Add security headers to response."""
        response = await call_next(request)

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["X-Permitted-Cross-Domain-Policies"] = "none"

        if request.url.scheme == "https":
            response.headers[
                "Strict-Transport-Security"
            ] = "max-age=63072000; includeSubDomains"  # 2 years

        if request.url.path in _DOCS_PATHS:
            response.headers["Content-Security-Policy"] = (
                "default-src 'self'; "
                "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
                "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
                "img-src 'self' data: https:; "
                "frame-ancestors 'none';"
            )
        else:
            response.headers["Content-Security-Policy"] = (
                "default-src 'none'; frame-ancestors 'none'; base-uri 'none';"
            )

        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject request bodies larger than the configured limit.

    Timeline items are small JSON documents, so the default is 1MB.
    """

    def __init__(self, app, max_request_size: int = 1024 * 1024) -> None:
        super().__init__(app)
        self.max_request_size = max_request_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Check Content-Length before processing."""
        content_length = request.headers.get("content-length")
        if not content_length:
            return await call_next(request)

        try:
            size = int(content_length)
        except ValueError:
            logger.error(f"Invalid Content-Length header: {content_length}")
            return JSONResponse(
                status_code=400,
                content={
                    "error": "INVALID_CONTENT_LENGTH",
                    "message": "Invalid Content-Length header",
                    "details": {},
                },
            )

        if size > self.max_request_size:
            logger.warning(
                f"Request size {size} exceeds limit {self.max_request_size} "
                f"from {request.client.host if request.client else 'unknown'}"
            )
            return JSONResponse(
                status_code=413,
                content={
                    "error": "PAYLOAD_TOO_LARGE",
                    "message": f"Request body too large. Maximum size: {self.max_request_size} bytes",
                    "details": {
                        "max_size_bytes": self.max_request_size,
                        "received_size_bytes": size,
                    },
                },
            )

        return await call_next(request)


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Tag every request with a correlation id.

    Accepts an incoming X-Correlation-ID header or generates one, makes
    it available to logging for the duration of the request, and echoes
    it on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        token = set_correlation_id(correlation_id)
        try:
            response = await call_next(request)
        finally:
            reset_correlation_id(token)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response
