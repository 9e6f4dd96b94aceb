"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core logic of the purchase email verification
flow. It defines its own port interfaces for infrastructure abstraction,
keeping the directory, code store and mail transport swappable.
"""

from .exceptions import DatabaseError, DeliveryError, EmailNotFound, VerificationError
from .ports import (
    EmailSender,
    UserDirectory,
    VerificationCode,
    VerificationCodeRepository,
    VerifyResult,
)
from .verification import VerificationService, build_code_email, generate_verification_code

__all__ = [
    "DatabaseError",
    "DeliveryError",
    "EmailNotFound",
    "EmailSender",
    "UserDirectory",
    "VerificationCode",
    "VerificationCodeRepository",
    "VerificationError",
    "VerificationService",
    "VerifyResult",
    "build_code_email",
    "generate_verification_code",
]
