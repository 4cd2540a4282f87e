from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.application.services.authentication_service import AuthenticationService
from src.application.use_cases.timeline.dispatcher import TimelineDispatcher
from src.domain.entities import AdminIdentity
from src.domain.exceptions import AuthenticationException

security = HTTPBearer(auto_error=False)

# Global service instances (singletons), registered on app startup in main.py
_dispatcher: TimelineDispatcher | None = None
_auth_service: AuthenticationService | None = None


def get_timeline_dispatcher() -> TimelineDispatcher:
    """
    Timeline dispatcher dependency (singleton)

    Returns the dispatcher registered on app startup.
    """
    if _dispatcher is None:
        raise RuntimeError("Timeline dispatcher is not initialized")
    return _dispatcher


def set_timeline_dispatcher(dispatcher: TimelineDispatcher | None) -> None:
    """Set global timeline dispatcher (called on app startup and in tests)"""
    global _dispatcher
    _dispatcher = dispatcher


def is_timeline_dispatcher_set() -> bool:
    return _dispatcher is not None


def get_authentication_service() -> AuthenticationService:
    """Authentication service dependency (singleton)"""
    if _auth_service is None:
        raise RuntimeError("Authentication service is not initialized")
    return _auth_service


def set_authentication_service(service: AuthenticationService | None) -> None:
    """Set global authentication service (called on app startup and in tests)"""
    global _auth_service
    _auth_service = service


def is_authentication_service_set() -> bool:
    return _auth_service is not None


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth_service: AuthenticationService = Depends(get_authentication_service),
) -> AdminIdentity:
    """
    Validate the bearer token and return the authenticated operator.
    Token must carry 'sub' (operator email) and role 'admin'.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return auth_service.identify(credentials.credentials)
    except AuthenticationException as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid authentication credentials: {e.message}",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
