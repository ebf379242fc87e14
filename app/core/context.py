# app/core/context.py
from dataclasses import dataclass

from fastapi import Header, HTTPException, Query

from app.core.security import decode_access_token


@dataclass(frozen=True)
class RequestContext:
    """Quién hace la request (ya autenticado)."""

    user_id: int


def _extract_token(token: str | None, authorization: str | None) -> str:
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1]
    if not token:
        raise HTTPException(status_code=401, detail="missing token")
    return token


async def get_request_context(
    token: str | None = Query(None),
    authorization: str | None = Header(None),
) -> RequestContext:
    """
    Dependencia común de los endpoints: token por query o Authorization
    → RequestContext con el id del usuario.
    """
    tok = _extract_token(token, authorization)
    try:
        user_id = int(decode_access_token(tok))
    except Exception:
        raise HTTPException(status_code=401, detail="invalid token")
    return RequestContext(user_id=user_id)
