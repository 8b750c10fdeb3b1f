"""foopoc API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FooPocError → JSON responses
    - Settings, logging, the database engine and the OIDC provider are built
      once in the lifespan handler and released on shutdown
    - Startup fails if the provider discovery document or keys cannot be loaded
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from foopoc import __version__
from foopoc.api.error_handlers import register_error_handlers
from foopoc.api.routes import authc, foos, health
from foopoc.config import get_settings
from foopoc.infrastructure.database import close_db, init_db
from foopoc.infrastructure.observability import setup_logging
from foopoc.infrastructure.oidc import discover_provider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(
        settings.log_level,
        settings.log_format,
        log_to_file=settings.log_to_file,
        log_file_path=settings.log_file_path,
    )
    init_db(
        settings.postgresql_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    http = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    try:
        app.state.oidc_provider = await discover_provider(
            http,
            provider_url=settings.oidc_provider_url,
            client_id=settings.oidc_client_id,
            client_secret=settings.oidc_client_secret,
            redirect_uri=settings.redirect_uri,
        )
        app.state.http_client = http
        logger.info("foopoc API started")
        yield
        logger.info("foopoc API shutting down")
    finally:
        await http.aclose()
        await close_db()


app = FastAPI(title="foopoc API", version=__version__, lifespan=lifespan)

app.include_router(health.router)
app.include_router(authc.router)
app.include_router(foos.router)

register_error_handlers(app)
