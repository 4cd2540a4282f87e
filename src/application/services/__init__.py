"""Application services."""

from src.application.services.authentication_service import (
    AuthenticationService, LoginResult)

__all__ = [
    "AuthenticationService",
    "LoginResult",
]
