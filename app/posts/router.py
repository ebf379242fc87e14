# app/posts/router.py
import logging
from typing import Any, List

import httpx
from fastapi import (
    APIRouter,
    Body,
    Depends,
    HTTPException,
    Response,
)
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.json import UTF8JSONResponse
from app.core.context import RequestContext, get_request_context
from app.core.errors import ServerError
from app.db.session import get_session
from app.posts import service as svc
from app.posts.metadata import get_metadata_client
from app.posts.schemas import EnrichedPostOut, UserPostsOut

log = logging.getLogger("uvicorn")

router = APIRouter(
    prefix="/api/posts",
    tags=["posts"],
    default_response_class=UTF8JSONResponse,
)


@router.post("/", status_code=201)
async def create_post_endpoint(
    body: Any = Body(...),
    db: AsyncSession = Depends(get_session),
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Publicar un link: {link, description, trends}.
    """
    payload = svc.parse_create_payload(body)

    try:
        await svc.create_post(db, ctx, payload)
        await db.commit()
    except HTTPException:
        await db.rollback()
        raise
    except Exception:
        await db.rollback()
        log.exception("❌ create_post falló")
        raise ServerError()

    return Response(status_code=201)


@router.get("/", response_model=List[EnrichedPostOut])
async def all_posts_endpoint(
    db: AsyncSession = Depends(get_session),
    client: httpx.AsyncClient = Depends(get_metadata_client),
    _: RequestContext = Depends(get_request_context),
):
    try:
        return await svc.all_posts(db, client)
    except HTTPException:
        raise
    except Exception:
        log.exception("❌ all_posts falló")
        raise ServerError()


@router.get("/user/{user_id}/", response_model=UserPostsOut)
async def posts_by_user_endpoint(
    user_id: int,
    db: AsyncSession = Depends(get_session),
    client: httpx.AsyncClient = Depends(get_metadata_client),
    _: RequestContext = Depends(get_request_context),
):
    try:
        return await svc.posts_by_user(db, client, user_id)
    except HTTPException:
        raise
    except Exception:
        log.exception(f"❌ posts_by_user falló (user {user_id})")
        raise ServerError()


@router.put("/{post_id}/", status_code=204)
async def update_post_endpoint(
    post_id: int,
    body: Any = Body(...),
    db: AsyncSession = Depends(get_session),
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Edita descripción y trends: {newDescription, newTrends}.
    Solo el autor puede editar.
    """
    payload = svc.parse_update_payload(body)

    try:
        await svc.update_post(db, ctx, post_id, payload)
        await db.commit()
    except HTTPException:
        await db.rollback()
        raise
    except Exception:
        await db.rollback()
        log.exception(f"❌ update_post falló (post {post_id})")
        raise ServerError()

    return Response(status_code=204)


@router.delete("/{post_id}/", status_code=202)
async def delete_post_endpoint(
    post_id: int,
    db: AsyncSession = Depends(get_session),
    ctx: RequestContext = Depends(get_request_context),
):
    """
    Elimina una publicación. Solo el autor puede borrar.
    """
    try:
        await svc.delete_post(db, ctx, post_id)
        await db.commit()
    except HTTPException:
        await db.rollback()
        raise
    except Exception:
        await db.rollback()
        log.exception(f"❌ delete_post falló (post {post_id})")
        raise ServerError()

    return Response(status_code=202)


@router.post("/{post_id}/share/", status_code=201)
async def share_post_endpoint(
    post_id: int,
    db: AsyncSession = Depends(get_session),
    ctx: RequestContext = Depends(get_request_context),
):
    try:
        await svc.share_post(db, ctx, post_id)
        await db.commit()
    except HTTPException:
        await db.rollback()
        raise
    except Exception:
        await db.rollback()
        log.exception(f"❌ share_post falló (post {post_id})")
        raise ServerError()

    return Response(status_code=201)
