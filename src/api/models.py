"""
API request and response models.

Pydantic models for FastAPI endpoint parsing and serialization.

Request fields are optional at the model level so that a missing field
produces the API's own 400 payload. A numeric ``codigo`` is accepted
as its decimal text, since an all-digit code is easily sent as a JSON number.
"""

from pydantic import BaseModel, field_validator


class EmailRequest(BaseModel):
    """Request model for email validation and code sending."""

    email: str | None = None


class VerifyCodeRequest(BaseModel):
    """Request model for code verification."""

    email: str | None = None
    codigo: str | None = None

    @field_validator("codigo", mode="before")
    @classmethod
    def _number_as_text(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class ValidateEmailResponse(BaseModel):
    """Response model for email validation."""

    isValid: bool
    message: str


class SendCodeResponse(BaseModel):
    """Response model for code sending."""

    success: bool
    message: str


class VerifyCodeResponse(BaseModel):
    """Response model for code verification."""

    isCorrect: bool
    message: str
