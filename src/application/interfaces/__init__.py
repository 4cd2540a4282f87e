"""
Application layer interfaces (ports).

These protocols define the contracts between the application layer
and the infrastructure/presentation layers, following the Dependency
Inversion Principle.
"""

from src.application.interfaces.services import (ICredentialVerifier,
                                                 ISnapshotPublisher,
                                                 ITimelineStore)

__all__ = [
    "ITimelineStore",
    "ISnapshotPublisher",
    "ICredentialVerifier",
]
