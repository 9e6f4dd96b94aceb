"""
API error responses.

Routes raise ApiError with the exact JSON body the agent expects
(``{error, details}``, ``{error, message}`` or ``{success, message}``);
the registered handler renders it unchanged. Bodies FastAPI cannot parse
or validate are reported as 400 ``{error, details}`` rather than 422.
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class ApiError(Exception):
    """HTTP error carrying a ready-made JSON payload."""

    def __init__(self, status_code: int, payload: dict[str, Any]) -> None:
        super().__init__(payload)
        self.status_code = status_code
        self.payload = payload

    @classmethod
    def bad_request(cls, error: str, details: str) -> "ApiError":
        return cls(status.HTTP_400_BAD_REQUEST, {"error": error, "details": details})

    @classmethod
    def unauthorized(cls, message: str) -> "ApiError":
        return cls(status.HTTP_401_UNAUTHORIZED, {"error": "Unauthorized", "message": message})

    @classmethod
    def database_error(cls, details: str) -> "ApiError":
        return cls(status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": "Database error", "details": details})

    @classmethod
    def server_error(cls, details: str) -> "ApiError":
        return cls(status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": "Server error", "details": details})


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    error = ApiError.bad_request("Invalid request", f"Corpo da requisição inválido ({problems}).")
    return await api_error_handler(request, error)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
