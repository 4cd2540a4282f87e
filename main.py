import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.application.services.authentication_service import AuthenticationService
from src.application.use_cases.timeline.dispatcher import TimelineDispatcher
from src.application.use_cases.timeline.transition_engine import TransitionEngine
from src.domain.exceptions import TimelineException
from src.infrastructure.config.settings import get_settings
from src.infrastructure.persistence.json_store import JsonFileTimelineStore
from src.infrastructure.security.credentials import StaticCredentialVerifier
from src.presentation.api.dependencies import (
    get_timeline_dispatcher,
    is_authentication_service_set,
    is_timeline_dispatcher_set,
    set_authentication_service,
    set_timeline_dispatcher,
)
from src.presentation.api.errors import timeline_exception_handler
from src.presentation.api.v1.routes import auth, timeline, websocket
from src.presentation.api.websocket.manager import get_connection_manager
from src.presentation.middleware.rate_limit import limiter
from src.presentation.middleware.security import (
    CorrelationIDMiddleware,
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
)
from src.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for application initialization and cleanup"""
    # Initialize logging
    setup_logging()

    manager = get_connection_manager()

    # Components registered beforehand (tests) are kept as-is
    if not is_timeline_dispatcher_set():
        store = JsonFileTimelineStore(settings.data_file)
        initial = await store.load()
        set_timeline_dispatcher(
            TimelineDispatcher(
                timeline=initial,
                engine=TransitionEngine(),
                store=store,
                publisher=manager,
            )
        )
        logger.info(f"Timeline dispatcher initialized with {len(initial)} items")

    if not is_authentication_service_set():
        verifier = StaticCredentialVerifier(
            settings.admin_accounts, rounds=settings.bcrypt_rounds
        )
        set_authentication_service(AuthenticationService(verifier))

    yield

    # Shutdown: close client connections
    await manager.close_all()
    logger.info("Event Timeline shut down")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Configure rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(TimelineException, timeline_exception_handler)

# Security middleware (order matters - applied in reverse)
# 1. Request size limit (first check)
app.add_middleware(RequestSizeLimitMiddleware, max_request_size=settings.max_request_size)

# 2. Correlation ID for request tracing
app.add_middleware(CorrelationIDMiddleware)

# 3. Security headers
app.add_middleware(SecurityHeadersMiddleware)

# 4. CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.allowed_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth.router, prefix="/api/auth", tags=["authentication"])
app.include_router(timeline.router, prefix="/api/timeline", tags=["timeline"])
app.include_router(websocket.router, tags=["realtime"])


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint for load balancers and monitoring.

    Reports:
    - API is responsive
    - Number of timeline items and the live item, if any
    - Number of connected WebSocket clients
    """
    snapshot = get_timeline_dispatcher().snapshot()
    live = snapshot.live_item()
    return {
        "status": "healthy",
        "checks": {
            "api": True,
            "items": len(snapshot),
            "live_item": live.id if live else None,
            "connections": get_connection_manager().get_total_connections(),
        },
    }
