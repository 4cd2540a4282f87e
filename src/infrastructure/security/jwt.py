"""JWT session tokens for authenticated operators."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from src.infrastructure.config.settings import get_settings

# Claims every operator session token must carry
_REQUIRED_CLAIMS = {"require_sub": True, "require_exp": True, "require_iat": True}


def create_access_token(
    claims: dict[str, Any], expires_delta: timedelta | None = None
) -> str:
    """
    Sign an operator session token.

    Args:
        claims: Operator claims (sub, name, role)
        expires_delta: Lifetime override; defaults to the configured session length

    Returns:
        Encoded JWT
    """
    settings = get_settings()
    issued_at = datetime.now(UTC)
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)

    payload = {**claims, "iat": issued_at, "exp": issued_at + lifetime}
    return str(jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm))


def verify_token(token: str) -> dict[str, Any]:
    """
    Decode a session token and check its signature, expiry and required claims.

    Raises:
        ValueError: If the token is malformed, expired or incomplete
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options=_REQUIRED_CLAIMS,
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e}") from e

    if not isinstance(claims, dict):
        raise ValueError("Invalid token: payload is not an object")
    return claims
