"""Security infrastructure - JWT, password hashing and operator credentials."""

from src.infrastructure.security.credentials import ADMIN_ROLE, StaticCredentialVerifier
from src.infrastructure.security.jwt import create_access_token, verify_token
from src.infrastructure.security.password import get_password_hash, verify_password

__all__ = [
    "ADMIN_ROLE",
    "StaticCredentialVerifier",
    "create_access_token",
    "verify_token",
    "verify_password",
    "get_password_hash",
]
