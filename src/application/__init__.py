"""
Application layer - Application Business Rules.

This layer contains application-specific business rules, including:
- Interfaces (ports) for storage, broadcast and credential checks
- The timeline transition engine and command dispatcher
- Operator authentication
"""

from src.application.interfaces import (ICredentialVerifier,
                                        ISnapshotPublisher, ITimelineStore)
from src.application.services import AuthenticationService, LoginResult
from src.application.use_cases import (CommandResult, TimelineDispatcher,
                                       TransitionEngine)

__all__ = [
    # Interfaces
    "ITimelineStore",
    "ISnapshotPublisher",
    "ICredentialVerifier",
    # Services
    "AuthenticationService",
    "LoginResult",
    # Use Cases
    "TransitionEngine",
    "TimelineDispatcher",
    "CommandResult",
]
