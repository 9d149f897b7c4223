from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from shared.config.database import Database
from shared.config.settings import Settings, get_settings
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from shared.security import create_limiter, warn_missing_credentials
from .router import build_intake_router, router, public_router
from .models import Order  # noqa: F401 - registers model with SQLAlchemy Base

logger = structlog.get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One storage client per process; a failed connect aborts start-up
        db = Database(settings.database_url, echo=settings.db_echo)
        await db.connect(create_tables=settings.db_create_tables)
        app.state.db = db
        logger.info("order_service_started")
        try:
            yield
        finally:
            await db.dispose()
            logger.info("order_service_stopped")

    order_app = FastAPI(title="Order Service", version="1.0.0", lifespan=lifespan)
    order_app.state.settings = settings

    # --- OBSERVABILITY BOOTSTRAP ---
    setup_observability(order_app, "order_service", settings)

    # --- RATE LIMITING (public intake only) ---
    limiter = create_limiter()
    order_app.state.limiter = limiter
    order_app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(order_app)
    warn_missing_credentials(settings)

    order_app.include_router(public_router)
    order_app.include_router(build_intake_router(limiter, settings.order_rate_limit))
    order_app.include_router(router)
    return order_app
