"""
API routes.

Defines the agent-facing endpoints of the Purchase Verification API:
- POST /api/validar-email - Check that an email belongs to a purchaser
- POST /api/enviar-codigo-verificacao - Issue and mail a verification code
- POST /api/verificar-codigo - Check a submitted verification code

Every route requires the bearer token (see require_api_key).
"""

import logging

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_verification_service, require_api_key
from src.api.errors import ApiError
from src.api.models import (
    EmailRequest,
    SendCodeResponse,
    ValidateEmailResponse,
    VerifyCodeRequest,
    VerifyCodeResponse,
)
from src.domain.exceptions import DatabaseError, DeliveryError, EmailNotFound
from src.domain.ports import VerifyResult
from src.domain.verification import VerificationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"], dependencies=[Depends(require_api_key)])


@router.post("/validar-email", response_model=ValidateEmailResponse)
async def validate_email(
    request_data: EmailRequest | None = None,
    service: VerificationService = Depends(get_verification_service),
) -> ValidateEmailResponse:
    """Report whether the email is registered as a purchaser. No side effects."""
    email = request_data.email if request_data else None
    if not email:
        raise ApiError.bad_request("Missing email", 'O campo "email" é obrigatório.')

    try:
        is_valid = await service.validate_email(email)
    except DatabaseError as e:
        raise ApiError.database_error(str(e)) from None
    except Exception as e:
        logger.exception("Unexpected error validating email %s", email)
        raise ApiError.server_error(str(e)) from None

    if is_valid:
        return ValidateEmailResponse(isValid=True, message="Email encontrado e válido.")
    return ValidateEmailResponse(
        isValid=False, message="Email não encontrado em nossos registros de compra."
    )


@router.post(
    "/enviar-codigo-verificacao",
    response_model=SendCodeResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"description": "Missing email or unknown purchaser"}},
)
async def send_verification_code(
    request_data: EmailRequest | None = None,
    service: VerificationService = Depends(get_verification_service),
) -> SendCodeResponse:
    """
    Send a new verification code to a known purchaser.

    The email is checked against the directory again; unknown emails get
    a 400 and no code. If the mail fails after the code was stored, the
    code is kept and the request fails with 500.
    """
    email = request_data.email if request_data else None
    if not email:
        raise ApiError.bad_request("Missing email", 'O campo "email" é obrigatório.')

    try:
        await service.send_code(email)
    except EmailNotFound:
        raise ApiError(
            status.HTTP_400_BAD_REQUEST,
            {
                "success": False,
                "message": "Não é possível enviar código. Email não encontrado em nossos registros.",
            },
        ) from None
    except DatabaseError as e:
        raise ApiError.database_error(str(e)) from None
    except DeliveryError as e:
        raise ApiError.server_error(str(e)) from None
    except Exception as e:
        logger.exception("Unexpected error sending verification code to %s", email)
        raise ApiError.server_error(str(e)) from None

    return SendCodeResponse(success=True, message="Código de verificação enviado com sucesso.")


@router.post("/verificar-codigo", response_model=VerifyCodeResponse)
async def verify_code(
    request_data: VerifyCodeRequest | None = None,
    service: VerificationService = Depends(get_verification_service),
) -> VerifyCodeResponse:
    """
    Check a submitted code (case-insensitive).

    Wrong, expired or unknown codes are reported with isCorrect=false and
    status 200. A correct code is consumed and cannot be used again.
    """
    email = request_data.email if request_data else None
    code = request_data.codigo if request_data else None
    if not email or not code:
        raise ApiError.bad_request(
            "Missing parameters", 'Os campos "email" e "codigo" são obrigatórios.'
        )

    try:
        result = await service.verify_code(email, code)
    except DatabaseError as e:
        raise ApiError.database_error(str(e)) from None
    except Exception as e:
        logger.exception("Unexpected error verifying code for %s", email)
        raise ApiError.server_error(str(e)) from None

    if result == VerifyResult.SUCCESS:
        return VerifyCodeResponse(isCorrect=True, message="Código de verificação correto.")
    if result == VerifyResult.INVALID_CODE:
        return VerifyCodeResponse(isCorrect=False, message="Código de verificação incorreto.")
    return VerifyCodeResponse(
        isCorrect=False, message="Código de verificação incorreto ou expirado."
    )
