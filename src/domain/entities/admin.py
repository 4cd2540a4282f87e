"""Authenticated operator identity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AdminIdentity:
    """Who an authenticated operator is and what role they hold"""

    email: str
    name: str
    role: str
