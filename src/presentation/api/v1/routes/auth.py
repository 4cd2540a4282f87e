import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from src.application.services.authentication_service import AuthenticationService
from src.domain.exceptions import AuthenticationException
from src.infrastructure.config.settings import get_settings
from src.presentation.api.dependencies import get_authentication_service
from src.presentation.api.v1.schemas.auth import LoginRequest, LoginResponse, OperatorOut
from src.presentation.middleware.rate_limit import limiter

router = APIRouter()
settings = get_settings()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit)
async def login(
    request: Request,  # Required by slowapi for rate limiting (extracts remote address)
    login_request: LoginRequest,
    auth_service: Annotated[AuthenticationService, Depends(get_authentication_service)],
):
    """
    Authenticate an operator and issue a session token.

    Token contains:
    - sub: operator email
    - name: operator display name
    - role: always "admin"
    - exp / iat: expiry and issue timestamps
    """
    try:
        result = auth_service.authenticate(login_request.email, login_request.password)
    except AuthenticationException as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    identity = result.identity
    return LoginResponse(
        user=OperatorOut(email=identity.email, name=identity.name, role=identity.role),
        token=result.token,
    )
