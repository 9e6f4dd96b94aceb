"""
PostgreSQL adapters - Implement the UserDirectory and VerificationCodeRepository protocols.

This module provides the PostgreSQL implementations of the domain's
directory and code store ports using psycopg3 (async) with raw SQL.

The directory is a SQL function owned by the purchase database
(``check_user_exists_by_email`` by default); this service only calls it.
The code store is the ``codigos_verificacao`` table created by the
migrations in ``migrations/``.

All psycopg errors are re-raised as the domain's DatabaseError with the
provider message preserved.
"""

import logging
from datetime import datetime
from pathlib import Path

import psycopg
from psycopg import sql
from psycopg_pool import AsyncConnectionPool

from src.domain.exceptions import DatabaseError
from src.domain.ports import VerificationCode

logger = logging.getLogger(__name__)


class PostgresUserDirectory:
    """
    Implements UserDirectory protocol via a remote SQL function.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, pool: AsyncConnectionPool, function_name: str = "check_user_exists_by_email") -> None:
        """
        Initialize directory client with connection pool.

        Args:
            pool: psycopg3 AsyncConnectionPool for database connections
            function_name: SQL function answering "does this email exist",
                optionally schema-qualified ("public.check_user_exists_by_email")
        """
        self._pool = pool
        self._query = sql.SQL("SELECT {}(%s)").format(sql.Identifier(*function_name.split(".")))

    async def exists(self, email: str) -> bool:
        try:
            async with self._pool.connection() as conn, conn.cursor() as cursor:
                await cursor.execute(self._query, (email,))
                row = await cursor.fetchone()
        except psycopg.Error as e:
            logger.error("Directory lookup failed for %s: %s", email, e)
            raise DatabaseError(str(e)) from e

        return bool(row and row[0])


class PostgresVerificationCodeRepository:
    """
    Implements VerificationCodeRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 AsyncConnectionPool for database connections
        """
        self._pool = pool

    async def upsert(self, email: str, code: str, expires_at: datetime) -> None:
        """
        Store a code for an email, replacing any previous one.

        Uses INSERT ... ON CONFLICT DO UPDATE so concurrent writers for the
        same email resolve atomically in the database (last writer wins).
        """
        upsert_sql = """
            INSERT INTO codigos_verificacao (email, code, expires_at, created_at)
            VALUES (%s, %s, %s, NOW())
            ON CONFLICT (email) DO UPDATE
            SET code = EXCLUDED.code,
                expires_at = EXCLUDED.expires_at,
                created_at = NOW()
        """

        try:
            async with self._pool.connection() as conn, conn.cursor() as cursor:
                await cursor.execute(upsert_sql, (email, code, expires_at))
                await conn.commit()
        except psycopg.Error as e:
            logger.error("Failed to store verification code for %s: %s", email, e)
            raise DatabaseError(str(e)) from e

    async def get(self, email: str) -> VerificationCode | None:
        select_sql = """
            SELECT code, expires_at
            FROM codigos_verificacao
            WHERE email = %s
        """

        try:
            async with self._pool.connection() as conn, conn.cursor() as cursor:
                await cursor.execute(select_sql, (email,))
                row = await cursor.fetchone()
        except psycopg.Error as e:
            logger.error("Failed to read verification code for %s: %s", email, e)
            raise DatabaseError(str(e)) from e

        # No row is absence, not an error
        if row is None:
            return None
        return VerificationCode(email=email, code=row[0], expires_at=row[1])

    async def delete(self, email: str) -> bool:
        delete_sql = "DELETE FROM codigos_verificacao WHERE email = %s"

        try:
            async with self._pool.connection() as conn, conn.cursor() as cursor:
                await cursor.execute(delete_sql, (email,))
                await conn.commit()
                return cursor.rowcount > 0
        except psycopg.Error as e:
            logger.error("Failed to delete verification code for %s: %s", email, e)
            raise DatabaseError(str(e)) from e


async def run_migrations(pool: AsyncConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 AsyncConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            async with pool.connection() as conn:
                await conn.execute(sql_content)
                await conn.commit()

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
