"""
Verification domain service - purchase email checks and one-time codes.

This module contains the core business logic of the verification flow:

1. validate_email: ask the directory whether a purchaser exists (no side effects)
2. send_code: re-check the directory, store a fresh code, mail it
3. verify_code: compare a submitted code against the stored one

Code Lifecycle
==============

    (none) --send_code--> STORED --verify_code (match)--> (deleted)
                            |  ^
                            |  +-- send_code (overwrites, last writer wins)
                            +-- expires_at passes: treated as absent on read

Expiry is evaluated lazily on verification; expired rows stay in storage
until the next send_code for the same email overwrites them.

Known gap: send_code persists the code before mailing it. If delivery fails
the stored code is not rolled back and remains valid until it expires.
"""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from .exceptions import EmailNotFound
from .ports import (
    EmailSender,
    UserDirectory,
    VerificationCode,
    VerificationCodeRepository,
    VerifyResult,
)

logger = logging.getLogger(__name__)

DEFAULT_CODE_TTL = timedelta(minutes=10)


def generate_verification_code() -> str:
    """
    Generate a cryptographically secure verification code.

    3 random bytes rendered as 6 uppercase hexadecimal characters.
    """
    return secrets.token_hex(3).upper()


def build_code_email(code: str, ttl: timedelta) -> tuple[str, str, str]:
    """Return (subject, text_body, html_body) for a verification code message."""
    minutes = int(ttl.total_seconds() // 60)
    subject = "Seu Código de Verificação de Compra"
    text_body = f"Seu código de verificação é: {code}. Ele é válido por {minutes} minutos."
    html_body = (
        f"<p>Seu código de verificação para sua compra é: <strong>{code}</strong>.</p>"
        f"<p>Ele é válido por {minutes} minutos.</p>"
    )
    return subject, text_body, html_body


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class VerificationService:
    """
    Domain service for purchase email verification.

    Orchestrates the directory lookup, code persistence and delivery.
    Infrastructure failures surface as DatabaseError / DeliveryError
    raised by the adapters and are not caught here.
    """

    directory: UserDirectory
    repository: VerificationCodeRepository
    email_sender: EmailSender
    code_ttl: timedelta = DEFAULT_CODE_TTL
    clock: Callable[[], datetime] = field(default=_utcnow)

    async def validate_email(self, email: str) -> bool:
        """
        Check whether the email belongs to a known purchaser.

        The directory receives the address as given (whitespace stripped);
        its own matching rules decide case sensitivity.

        Raises:
            DatabaseError: If the directory call fails
        """
        return await self.directory.exists(email.strip())

    async def send_code(self, email: str) -> VerificationCode:
        """
        Issue a new verification code and mail it to the purchaser.

        The directory is consulted again on every call; no state is shared
        with validate_email. Unknown emails never get a code.

        Returns:
            The persisted verification code

        Raises:
            EmailNotFound: If the email is not in the directory
            DatabaseError: If the lookup or the upsert fails
            DeliveryError: If the mail could not be sent (code stays stored)
        """
        address = email.strip()

        if not await self.directory.exists(address):
            logger.info("Email %s not found in directory, no code sent", address)
            raise EmailNotFound(address)

        issued = VerificationCode(
            email=self._store_key(address),
            code=generate_verification_code(),
            expires_at=self.clock() + self.code_ttl,
        )
        await self.repository.upsert(issued.email, issued.code, issued.expires_at)

        subject, text_body, html_body = build_code_email(issued.code, self.code_ttl)
        await self.email_sender.send(address, subject, text_body, html_body)

        logger.info("Verification code sent to %s", address)
        return issued

    async def verify_code(self, email: str, code: str) -> VerifyResult:
        """
        Compare a submitted code against the stored one.

        Comparison is case-insensitive. A matching code is deleted so it
        cannot be reused; a wrong code leaves the row in place so the
        purchaser can retry until expiry.

        Raises:
            DatabaseError: If the lookup or the delete fails
        """
        key = self._store_key(email)

        stored = await self.repository.get(key)
        if stored is None:
            return VerifyResult.NOT_FOUND

        if stored.expires_at < self.clock():
            return VerifyResult.EXPIRED

        if not secrets.compare_digest(stored.code.upper().encode(), code.upper().encode()):
            logger.info("Incorrect verification code submitted for %s", key)
            return VerifyResult.INVALID_CODE

        # A concurrent request may have consumed the code between get and delete
        if not await self.repository.delete(key):
            return VerifyResult.INVALID_CODE

        return VerifyResult.SUCCESS

    def _store_key(self, email: str) -> str:
        """
        Key under which a code is stored for an email.

        Applies: strip whitespace + lowercase, so verification does not
        depend on how the purchaser capitalizes the address.
        """
        return email.strip().lower()
