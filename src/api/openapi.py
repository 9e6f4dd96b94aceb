"""
Static OpenAPI document consumed by the calling agent.

The agent imports this document as its action schema, so it is written
out by hand rather than generated from the routes: operationIds,
descriptions and the security requirement are part of the agent contract.
Only the server URL depends on configuration.
"""

from typing import Any

API_TITLE = "API de Verificação de Compras"
API_VERSION = "1.0.0"

_STANDARD_RESPONSES = {
    "400": {"description": "Requisição inválida."},
    "401": {"description": "Não autorizado (API Key inválida)."},
    "500": {"description": "Erro interno do servidor."},
}


def _json_body(properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {
        "required": True,
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "properties": properties,
                    "required": required,
                }
            }
        },
    }


def _post(operation_id: str, summary: str, body: dict[str, Any], ok: str) -> dict[str, Any]:
    return {
        "post": {
            "operationId": operation_id,
            "summary": summary,
            "requestBody": body,
            "responses": {"200": {"description": ok}, **_STANDARD_RESPONSES},
        }
    }


def build_openapi_schema(public_base_url: str) -> dict[str, Any]:
    """Return the OpenAPI 3.1 document served at /openapi.json."""
    return {
        "openapi": "3.1.0",
        "info": {
            "title": API_TITLE,
            "version": API_VERSION,
            "description": "API para validar e-mails de compra e gerenciar códigos de verificação.",
        },
        "servers": [{"url": public_base_url}],
        "paths": {
            "/api/validar-email": _post(
                "validarEmailDeCompra",
                "Valida um email de compra no Supabase.",
                _json_body(
                    {
                        "email": {
                            "type": "string",
                            "format": "email",
                            "description": "O email de compra a ser validado.",
                        }
                    },
                    ["email"],
                ),
                "Resposta da validação do email.",
            ),
            "/api/enviar-codigo-verificacao": _post(
                "enviarCodigoDeVerificacao",
                "Envia um código de verificação para o email fornecido.",
                _json_body(
                    {
                        "email": {
                            "type": "string",
                            "format": "email",
                            "description": "O email para o qual o código será enviado.",
                        }
                    },
                    ["email"],
                ),
                "Confirmação de envio do código.",
            ),
            "/api/verificar-codigo": _post(
                "verificarCodigo",
                "Verifica se o código digitado corresponde ao email.",
                _json_body(
                    {
                        "email": {
                            "type": "string",
                            "format": "email",
                            "description": "O email do usuário.",
                        },
                        "codigo": {
                            "type": "string",
                            "description": "O código de verificação digitado.",
                        },
                    },
                    ["email", "codigo"],
                ),
                "Resultado da verificação do código.",
            ),
        },
        "components": {
            "schemas": {},
            "securitySchemes": {
                "BearerAuth": {
                    "type": "http",
                    "scheme": "bearer",
                    "bearerFormat": "JWT",
                    "description": "Autenticação usando um Bearer token (API Key do GPT).",
                }
            },
        },
        "security": [{"BearerAuth": []}],
    }
