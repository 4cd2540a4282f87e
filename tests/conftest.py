"""Shared test fixtures for pytest"""
import os

# Settings are read once and cached; configure them before the app is imported
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOGIN_RATE_LIMIT", "1000/minute")

from datetime import UTC, datetime, timedelta
from itertools import count

import pytest
from httpx import ASGITransport, AsyncClient
from starlette.testclient import TestClient

from main import app
from src.application.services.authentication_service import AuthenticationService
from src.application.use_cases.timeline.dispatcher import TimelineDispatcher
from src.application.use_cases.timeline.transition_engine import TransitionEngine
from src.domain.entities import Timeline
from src.infrastructure.config.settings import get_settings
from src.infrastructure.persistence.json_store import JsonFileTimelineStore
from src.infrastructure.security.credentials import StaticCredentialVerifier
from src.presentation.api.dependencies import (set_authentication_service,
                                               set_timeline_dispatcher)
from src.presentation.api.websocket.manager import (ConnectionManager,
                                                    set_connection_manager)

ADMIN_EMAIL = "admin1@event.com"
ADMIN_PASSWORD = "password123"

START_TIME = datetime(2026, 10, 18, 9, 0, tzinfo=UTC)


class FakeClock:
    """Deterministic clock: returns the same instant until advanced"""

    def __init__(self, start: datetime = START_TIME) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: int = 1) -> datetime:
        self.now += timedelta(minutes=minutes)
        return self.now


class RecordingPublisher:
    """ISnapshotPublisher that keeps every snapshot it is asked to push"""

    def __init__(self) -> None:
        self.published: list[Timeline] = []
        self.registered: list[object] = []
        self.sent: list[tuple[object, Timeline]] = []

    async def register(self, connection) -> None:
        self.registered.append(connection)

    async def send_snapshot(self, connection, timeline: Timeline) -> bool:
        self.sent.append((connection, timeline))
        return True

    async def publish_snapshot(self, timeline: Timeline) -> int:
        self.published.append(timeline)
        return len(self.registered)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def id_factory():
    """Sequential ids: item-1, item-2, ..."""
    counter = count(1)
    return lambda: f"item-{next(counter)}"


@pytest.fixture
def engine(clock, id_factory) -> TransitionEngine:
    return TransitionEngine(clock=clock, id_factory=id_factory)


@pytest.fixture
def store(tmp_path) -> JsonFileTimelineStore:
    return JsonFileTimelineStore(tmp_path / "data" / "timeline.json")


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def connection_manager():
    """Fresh global connection manager for the app under test"""
    manager = ConnectionManager()
    set_connection_manager(manager)
    yield manager
    set_connection_manager(None)


@pytest.fixture
def dispatcher(store, connection_manager):
    """Dispatcher wired like the app: JSON store + WebSocket broadcast"""
    timeline_dispatcher = TimelineDispatcher(
        timeline=Timeline.empty(),
        engine=TransitionEngine(),
        store=store,
        publisher=connection_manager,
    )
    set_timeline_dispatcher(timeline_dispatcher)
    yield timeline_dispatcher
    set_timeline_dispatcher(None)


@pytest.fixture(scope="session")
def credential_verifier() -> StaticCredentialVerifier:
    return StaticCredentialVerifier(get_settings().admin_accounts, rounds=4)


@pytest.fixture
def auth_service(credential_verifier):
    service = AuthenticationService(credential_verifier)
    set_authentication_service(service)
    yield service
    set_authentication_service(None)


@pytest.fixture
async def client(dispatcher, auth_service):
    """HTTP client for API testing"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def ws_client(dispatcher, auth_service):
    """Starlette test client; one event loop shared by REST calls and WebSockets"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_token(auth_service) -> str:
    return auth_service.authenticate(ADMIN_EMAIL, ADMIN_PASSWORD).token


@pytest.fixture
def auth_headers(admin_token) -> dict[str, str]:
    """Generate auth headers with an operator JWT"""
    return {"Authorization": f"Bearer {admin_token}"}
