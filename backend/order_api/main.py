"""OrderItem API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map OrderApiError → response envelopes
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup, disposed on shutdown, via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from order_api.api.error_handlers import register_error_handlers
from order_api.api.routes import health, order_item
from order_api.config import get_settings
from order_api.infrastructure import database
from order_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("OrderItem API started")
    yield
    logger.info("OrderItem API shutting down")
    if database.db_manager:
        await database.db_manager.dispose()


app = FastAPI(
    title="OrderItem API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(order_item.router)

register_error_handlers(app)
