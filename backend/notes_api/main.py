"""Notes API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map NotesApiError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and the rate-window reset task live exactly as long as the lifespan
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notes_api.api.dependencies import AUTH_TOKEN_HEADER, get_rate_limiter
from notes_api.api.error_handlers import register_error_handlers
from notes_api.api.request_logging import register_request_logging
from notes_api.api.routes import health, notes, users
from notes_api.config import get_settings
from notes_api.infrastructure.database import init_db
from notes_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_auto_create:
        await manager.create_tables()
    reset_task = asyncio.create_task(get_rate_limiter().run_reset_loop())
    logger.info(
        f"Notes API started (rate policy={settings.rate_limit_policy.value}, "
        f"limit={settings.rate_limit_per_minute}/{settings.rate_window_seconds:g}s)",
    )
    yield
    logger.info("Notes API shutting down")
    reset_task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await reset_task
    await manager.dispose()


app = FastAPI(title="Notes API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[AUTH_TOKEN_HEADER],
)
register_request_logging(app)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(notes.router)

register_error_handlers(app)
