# app/core/errors.py
"""
Errores HTTP de la API de posts.

Todos heredan de HTTPException, así FastAPI los serializa como
{"detail": ...} sin handlers extra. La única excepción es la validación
propia de FastAPI (body ausente, path param no numérico), que se reescribe
al mismo formato de mensajes que `ValidationError`.
"""
from typing import Any

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError

from app.core.json import UTF8JSONResponse, error_response

# prefijos que FastAPI agrega al loc y que el cliente no necesita ver
_REQUEST_PARTS = {"body", "path", "query", "header", "cookie"}


def format_error(err: dict[str, Any]) -> str:
    """{"loc": ("body", "link"), "msg": "Field required"} → '"link" Field required'."""
    loc = tuple(err.get("loc", ()))
    if len(loc) > 1 and loc[0] in _REQUEST_PARTS:
        loc = loc[1:]
    field = ".".join(str(p) for p in loc)
    msg = err.get("msg", "invalid value")
    return f'"{field}" {msg}' if field else msg


class ValidationError(HTTPException):
    def __init__(self, messages: list[str]):
        super().__init__(
            status_code=422,
            detail=list(messages),
        )
        self.messages = list(messages)


class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Post not made by user"):
        super().__init__(status_code=401, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "User not found"):
        super().__init__(status_code=404, detail=detail)


class ServerError(HTTPException):
    """
    500 genérico. El error real se loguea, nunca viaja al cliente.
    """

    def __init__(self, detail: str = "internal error"):
        super().__init__(
            status_code=500, detail=detail
        )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> UTF8JSONResponse:
    return error_response(422, [format_error(err) for err in exc.errors()])
