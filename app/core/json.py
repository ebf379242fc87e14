# app/core/json.py
import json
from typing import Any

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse


class UTF8JSONResponse(JSONResponse):
    """
    JSON en UTF-8 sin escapes \\uXXXX: descripciones, trends y títulos de
    preview llegan con acentos/emojis tal cual ("URL inválida!").
    Sin espacios entre separadores; NaN/Infinity se rechazan.
    """
    media_type = "application/json; charset=utf-8"

    def render(self, content: Any) -> bytes:
        return json.dumps(
            jsonable_encoder(content),
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        ).encode("utf-8")


def error_response(status_code: int, detail: str | list[str]) -> UTF8JSONResponse:
    """Mismo cuerpo que un HTTPException: {"detail": ...}."""
    return UTF8JSONResponse(status_code=status_code, content={"detail": detail})
