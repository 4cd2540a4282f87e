"""
Static credential verification.

Operators are a short fixed list taken from configuration. Passwords are
hashed once at construction so plaintext never sits in the lookup table.
"""

from collections.abc import Iterable

from src.domain.entities import AdminIdentity
from src.infrastructure.config.settings import AdminAccount
from src.infrastructure.security.password import get_password_hash, verify_password
from src.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

ADMIN_ROLE = "admin"

# Compared against when the email is unknown, so both failure paths cost one bcrypt check
_DUMMY_HASH = get_password_hash("not-a-real-password", rounds=4)


class StaticCredentialVerifier:
    """ICredentialVerifier backed by a configured list of admin accounts"""

    def __init__(self, accounts: Iterable[AdminAccount], rounds: int = 12) -> None:
        self._accounts: dict[str, tuple[str, str]] = {}
        for account in accounts:
            email = account.email.strip().lower()
            self._accounts[email] = (
                account.name,
                get_password_hash(account.password, rounds=rounds),
            )
        logger.info("Credential verifier loaded with %d operators", len(self._accounts))

    def verify(self, email: str, password: str) -> AdminIdentity | None:
        """Return the operator identity for a matching pair, else None"""
        entry = self._accounts.get(email.strip().lower())
        if entry is None:
            verify_password(password, _DUMMY_HASH)
            return None

        name, password_hash = entry
        if not verify_password(password, password_hash):
            return None
        return AdminIdentity(email=email.strip().lower(), name=name, role=ADMIN_ROLE)
