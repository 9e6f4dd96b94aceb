"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes,
plus the bearer token check applied to every API route.
"""

from datetime import timedelta

from fastapi import Depends, Header, Request
from psycopg_pool import AsyncConnectionPool

from src.adapters.repository.postgres import PostgresUserDirectory, PostgresVerificationCodeRepository
from src.api.errors import ApiError
from src.api.security import AuthOutcome, BearerTokenGuard
from src.config.settings import Settings, get_settings
from src.domain.ports import EmailSender
from src.domain.verification import VerificationService


def get_pool(request: Request) -> AsyncConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_user_directory(
    request: Request, settings: Settings = Depends(get_settings)
) -> PostgresUserDirectory:
    """Create directory client with connection pool from app state."""
    return PostgresUserDirectory(get_pool(request), function_name=settings.directory_function)


def get_code_repository(request: Request) -> PostgresVerificationCodeRepository:
    """Create code repository with connection pool from app state."""
    return PostgresVerificationCodeRepository(get_pool(request))


def get_email_sender(request: Request) -> EmailSender:
    """
    Get the mail sender built at startup.

    SMTP when a mail host is configured, console otherwise.
    """
    return request.app.state.email_sender


def get_verification_service(
    request: Request, settings: Settings = Depends(get_settings)
) -> VerificationService:
    """
    Create verification service with injected dependencies.

    Wires together the directory, code repository and email sender.
    """
    return VerificationService(
        directory=get_user_directory(request, settings),
        repository=get_code_repository(request),
        email_sender=get_email_sender(request),
        code_ttl=timedelta(seconds=settings.code_ttl_seconds),
    )


def require_api_key(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Reject the request with 401 unless it carries the configured bearer token.

    Runs before the route body is handled, so rejected requests cause no
    directory, store or mail traffic. With no token configured every
    request passes.
    """
    outcome = BearerTokenGuard(settings.gpt_api_key).check(authorization)

    if outcome is AuthOutcome.MISSING_OR_MALFORMED:
        raise ApiError.unauthorized("Bearer token missing or malformed.")
    if outcome is AuthOutcome.INVALID_KEY:
        raise ApiError.unauthorized("Invalid API key.")
