"""Donation Drive API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DonationDriveError → {success: false, message}
    - CORS configured from settings (not hardcoded)
    - Store created and initialized on startup, closed on shutdown, via lifespan
    - A storage failure at startup is logged, never fatal: the process keeps
      serving /api/health while data endpoints answer 500

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Store kept on app.state and injected through get_store
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from donation_drive.api.error_handlers import register_error_handlers
from donation_drive.api.routes import donations, health, stats
from donation_drive.config import get_settings
from donation_drive.infrastructure.observability import log_requests, setup_logging
from donation_drive.infrastructure.storage_factory import build_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    try:
        store = build_store(settings)
    except ValueError as e:
        logger.error(f"Storage disabled: {e}")
        store = None
    if store is not None:
        await store.initialize()
    app.state.store = store
    logger.info("Donation Drive API started")
    yield
    logger.info("Donation Drive API shutting down")
    if store is not None:
        await store.shutdown()
    app.state.store = None


app = FastAPI(
    title="Donation Drive API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(donations.router)
app.include_router(stats.router)

# Registration form and dashboard pages, when shipped alongside the API.
# Mounted AFTER API routes so /api/* takes precedence.
if os.path.isdir(settings.static_dir):
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
