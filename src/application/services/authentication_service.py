"""
Operator authentication.

Turns an email/password pair into an admin session token and a session
token back into an operator identity. The credential check itself is an
injected ICredentialVerifier, so this service does not know where the
operator list comes from.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from src.domain.entities import AdminIdentity
from src.domain.exceptions import AuthenticationException
from src.infrastructure.security.credentials import ADMIN_ROLE
from src.infrastructure.security.jwt import create_access_token, verify_token
from src.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from src.application.interfaces.services import ICredentialVerifier

logger = get_logger(__name__)


@dataclass(frozen=True)
class LoginResult:
    identity: AdminIdentity
    token: str


class AuthenticationService:
    """Issues and checks operator session tokens"""

    def __init__(
        self,
        verifier: "ICredentialVerifier",
        token_factory: Callable[[dict[str, Any]], str] = create_access_token,
        token_decoder: Callable[[str], dict[str, Any]] = verify_token,
    ) -> None:
        self.verifier = verifier
        self.token_factory = token_factory
        self.token_decoder = token_decoder

    def authenticate(self, email: str, password: str) -> LoginResult:
        """
        Verify credentials and issue a session token.

        Raises:
            AuthenticationException: If the email/password pair is unknown
        """
        identity = self.verifier.verify(email, password)
        if identity is None:
            logger.warning("Failed login attempt for: %s", email)
            raise AuthenticationException("Invalid credentials")

        token = self.token_factory(
            {"sub": identity.email, "name": identity.name, "role": identity.role}
        )
        logger.info("Successful login for operator: %s", identity.email)
        return LoginResult(identity=identity, token=token)

    def identify(self, token: str) -> AdminIdentity:
        """
        Resolve a session token to an admin identity.

        Raises:
            AuthenticationException: If the token is invalid, expired or not an admin token
        """
        try:
            payload = self.token_decoder(token)
        except (ValueError, TypeError) as e:
            raise AuthenticationException(str(e)) from e

        email = payload.get("sub")
        if not email or payload.get("role") != ADMIN_ROLE:
            raise AuthenticationException("Token does not grant admin access")

        return AdminIdentity(email=email, name=payload.get("name", ""), role=ADMIN_ROLE)
