"""
Middleware layer for the Event Timeline application.

This package contains middleware components for request processing:
security headers, request size limits, correlation ids and rate limiting.
"""

from src.presentation.middleware.rate_limit import limiter
from src.presentation.middleware.security import (CorrelationIDMiddleware,
                                                  RequestSizeLimitMiddleware,
                                                  SecurityHeadersMiddleware)

__all__ = [
    "limiter",
    "CorrelationIDMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
]
