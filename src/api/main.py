"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, the published OpenAPI document,
and lifespan events.
"""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from psycopg_pool import AsyncConnectionPool
from pydantic import ValidationError

from src.adapters.repository.postgres import run_migrations
from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp import SmtpEmailSender
from src.api.errors import register_exception_handlers
from src.api.openapi import API_TITLE, API_VERSION, build_openapi_schema
from src.api.v1 import router as api_router
from src.config.settings import Settings, get_settings
from src.domain.ports import EmailSender

logger = logging.getLogger(__name__)


def build_email_sender(settings: Settings) -> EmailSender:
    """SMTP sender when a mail host is configured, console sender otherwise."""
    if settings.email_service_host is None:
        logger.warning("EMAIL_SERVICE_HOST not set - verification emails will be logged, not sent")
        return ConsoleEmailSender()

    return SmtpEmailSender(
        hostname=settings.email_service_host,
        port=settings.email_service_port,
        from_address=settings.email_from_address,
        username=settings.email_service_user,
        password=settings.email_service_pass,
        implicit_tls=settings.smtp_implicit_tls,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Loads settings (aborts startup if the database settings are missing)
    - Creates database connection pool and runs migrations
    - Builds the email sender
    - Closes connection pool on shutdown
    """
    settings = get_settings()
    logging.getLogger("src").setLevel(settings.log_level.upper())

    logger.info("Starting application...")

    if settings.insecure_mode:
        logger.warning("GPT_API_KEY not set - the API is open to unauthenticated requests!")

    logger.info("Connecting to database...")
    pool = AsyncConnectionPool(
        conninfo=settings.database_url,
        kwargs={"password": settings.database_service_key},
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=False,
    )
    await pool.open()

    logger.info("Running database migrations...")
    await run_migrations(pool)

    # Shared handles for dependency injection
    app.state.pool = pool
    app.state.email_sender = build_email_sender(settings)

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    await pool.close()
    logger.info("Database connection pool closed")


app = FastAPI(
    title=API_TITLE,
    version=API_VERSION,
    lifespan=lifespan,
)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api")


def custom_openapi() -> dict[str, Any]:
    """Serve the hand-written agent schema instead of the generated one."""
    return build_openapi_schema(get_settings().public_base_url)


app.openapi = custom_openapi


@app.get("/health", include_in_schema=False)
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and database are healthy.
    Raises exception if database connection fails.
    """
    pool = request.app.state.pool
    async with pool.connection() as conn:
        await conn.execute("SELECT 1")

    return {"status": "healthy"}


def run() -> None:
    """Console entry point: validate settings, then serve with uvicorn."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error("Invalid configuration, DATABASE_URL and DATABASE_SERVICE_KEY are required:\n%s", e)
        sys.exit(1)

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
