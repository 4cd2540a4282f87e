"""
Request context management using contextvars.

Holds the correlation id of the request or WebSocket message being
handled so that log records emitted anywhere below can carry it.

Usage:
    # In middleware:
    token = set_correlation_id("3f2c...")
    ...
    reset_correlation_id(token)

    # Anywhere else:
    correlation_id = get_correlation_id()  # "" outside a request
"""

from contextvars import ContextVar, Token

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str) -> Token[str]:
    """Bind a correlation id to the current async task"""
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


def get_correlation_id() -> str:
    """Get the correlation id for the current request, or an empty string"""
    return _correlation_id.get()
