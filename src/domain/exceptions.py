"""
Domain exceptions - Semantic error types for email verification.

This module defines domain-specific exceptions that communicate
failures of the verification flow without leaking infrastructure types.
"""


class VerificationError(Exception):
    """Base class for verification domain errors."""

    pass


class DatabaseError(VerificationError):
    """Directory lookup or code store call failed; message comes from the provider."""

    pass


class DeliveryError(VerificationError):
    """Mail transport rejected or could not deliver the message."""

    pass


class EmailNotFound(VerificationError):
    """Email is not present in the purchase directory."""

    pass
