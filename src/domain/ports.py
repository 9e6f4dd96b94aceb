"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol


@dataclass(frozen=True)
class VerificationCode:
    """
    A single outstanding verification attempt.

    At most one exists per email; issuing a new code replaces the previous one.
    Expired codes are never swept, they are simply treated as invalid on read.
    """

    email: str
    code: str
    expires_at: datetime


class VerifyResult(Enum):
    """
    Result of verification attempt.

    Used by verify_code() to indicate success or specific failure.
    """

    SUCCESS = "success"
    INVALID_CODE = "invalid_code"
    EXPIRED = "expired"
    NOT_FOUND = "not_found"


class UserDirectory(Protocol):
    """Port interface for the external purchase directory."""

    async def exists(self, email: str) -> bool:
        """
        Check whether an account with this email exists.

        Every call is a fresh round trip; results are not cached.

        Raises:
            DatabaseError: If the directory call fails
        """
        ...


class VerificationCodeRepository(Protocol):
    """Port interface for verification code persistence."""

    async def upsert(self, email: str, code: str, expires_at: datetime) -> None:
        """
        Insert or replace the code for an email (last writer wins).

        Raises:
            DatabaseError: If the write fails
        """
        ...

    async def get(self, email: str) -> VerificationCode | None:
        """
        Fetch the current code for an email.

        Returns:
            The stored code, or None when no row exists for the email

        Raises:
            DatabaseError: On any failure other than absence
        """
        ...

    async def delete(self, email: str) -> bool:
        """
        Remove the code for an email. Deleting a missing row is not an error.

        Returns:
            True if a row was removed, False if none existed
        """
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    async def send(self, to_address: str, subject: str, text_body: str, html_body: str) -> None:
        """
        Deliver a message with plain-text and HTML alternatives.

        Raises:
            DeliveryError: If the transport fails
        """
        ...
