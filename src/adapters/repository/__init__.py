"""Repository adapters - Database implementations."""

from .postgres import PostgresUserDirectory, PostgresVerificationCodeRepository, run_migrations

__all__ = ["PostgresUserDirectory", "PostgresVerificationCodeRepository", "run_migrations"]
