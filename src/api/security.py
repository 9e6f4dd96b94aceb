"""
Bearer token guard for the agent-facing API.

The calling agent authenticates with a single static secret sent as
``Authorization: Bearer <token>``. When no secret is configured the guard
admits every request (insecure mode, reported at startup).
"""

import secrets
from dataclasses import dataclass
from enum import Enum

BEARER_PREFIX = "Bearer "


class AuthOutcome(Enum):
    """Decision of the guard for one request."""

    ALLOW = "allow"
    MISSING_OR_MALFORMED = "missing_or_malformed"
    INVALID_KEY = "invalid_key"


@dataclass(frozen=True)
class BearerTokenGuard:
    token: str | None

    @property
    def insecure(self) -> bool:
        return not self.token

    def check(self, authorization: str | None) -> AuthOutcome:
        if self.insecure:
            return AuthOutcome.ALLOW

        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return AuthOutcome.MISSING_OR_MALFORMED

        presented = authorization[len(BEARER_PREFIX):]
        if not secrets.compare_digest(presented.encode(), self.token.encode()):
            return AuthOutcome.INVALID_KEY

        return AuthOutcome.ALLOW
