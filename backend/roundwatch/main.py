"""Roundwatch API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RoundwatchError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - The materializer trigger (cron, k8s CronJob, ...) lives outside this
      process and calls POST /api/v1/rounds/materialize once per tick
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roundwatch.api.error_handlers import register_error_handlers
from roundwatch.api.routes import health, round_setup, round_status
from roundwatch.config import get_settings
from roundwatch.infrastructure.database import close_db, init_db
from roundwatch.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Roundwatch API started")
    yield
    await close_db()
    logger.info("Roundwatch API shutting down")


app = FastAPI(
    title="Roundwatch API", version="0.1.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(round_setup.router)
app.include_router(round_status.router)

register_error_handlers(app)
