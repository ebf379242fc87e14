# app/posts/validation.py
import re
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.core.errors import ValidationError, format_error

INVALID_URL_MESSAGE = "URL inválida!"

# host (labels o IPv4) + puerto/path/query/fragment opcionales; esquema opcional
URL_PATTERN = re.compile(
    r"^(https?://)?"
    r"((([a-z\d]([a-z\d-]*[a-z\d])?)\.)+[a-z]{2,}|"
    r"((\d{1,3}\.){3}\d{1,3}))"
    r"(:\d+)?(/[-a-z\d%_.~+]*)*"
    r"(\?[;&a-z\d%_.~+=-]*)?"
    r"(#[-a-z\d_]*)?$",
    re.IGNORECASE,
)

M = TypeVar("M", bound=BaseModel)


def is_valid_url(link: str) -> bool:
    return URL_PATTERN.match(link) is not None


def validate_payload(schema: type[M], body: Any, *, abort_early: bool = True) -> M:
    """
    Valida `body` contra `schema`.

    abort_early=True  → solo se reporta el primer campo inválido.
    abort_early=False → se reportan todos.
    """
    try:
        return schema.model_validate(body)
    except PydanticValidationError as e:
        messages = [format_error(err) for err in e.errors()]
        if abort_early:
            messages = messages[:1]
        raise ValidationError(messages)
