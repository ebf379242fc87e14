# app/posts/service.py
from __future__ import annotations

from typing import Any

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.context import RequestContext
from app.core.errors import AuthorizationError, NotFoundError, ValidationError
from app.posts import repository as repo
from app.posts.metadata import enrich_posts
from app.posts.models import Post
from app.posts.schemas import PostCreate, PostUpdate
from app.posts.validation import INVALID_URL_MESSAGE, is_valid_url, validate_payload
from app.trends import repository as trends_repo
from app.users import repository as users_repo


def parse_create_payload(body: Any) -> PostCreate:
    """
    Schema (se corta en el primer error) + forma del link.
    """
    payload = validate_payload(PostCreate, body, abort_early=True)
    if not is_valid_url(payload.link):
        raise ValidationError([INVALID_URL_MESSAGE])
    return payload


def parse_update_payload(body: Any) -> PostUpdate:
    return validate_payload(PostUpdate, body, abort_early=False)


async def create_post(db: AsyncSession, ctx: RequestContext, payload: PostCreate) -> Post:
    return await repo.insert_post_data(
        db, ctx.user_id, payload.link, payload.description, payload.trends
    )


async def update_post(
    db: AsyncSession,
    ctx: RequestContext,
    post_id: int,
    payload: PostUpdate,
) -> None:
    post = await repo.check_if_post_is_posted_by_user(db, post_id, ctx.user_id)
    if post is None:
        raise AuthorizationError()
    await repo.update_post_data(db, post, payload.new_description, payload.new_trends)


async def delete_post(db: AsyncSession, ctx: RequestContext, post_id: int) -> None:
    post = await repo.check_if_post_is_posted_by_user(db, post_id, ctx.user_id)
    if post is None:
        raise AuthorizationError()
    await repo.delete_post_data(db, post)


async def share_post(db: AsyncSession, ctx: RequestContext, post_id: int) -> Post:
    """
    Re-post: copia link, descripción y trends del original y guarda la referencia.
    """
    original = await repo.get_post_by_id(db, post_id)
    if original is None:
        # sin 404: un share de un post inexistente termina en 500
        raise LookupError(f"post {post_id} not found")

    trends = await trends_repo.get_post_trend_names(db, post_id)
    return await repo.insert_post_data(
        db,
        ctx.user_id,
        original.link,
        original.description,
        trends,
        shared_from_post_id=post_id,
    )


async def posts_by_user(
    db: AsyncSession,
    client: httpx.AsyncClient,
    user_id: int,
) -> dict[str, Any]:
    user = await users_repo.get_by_id(db, user_id)
    if not user:
        raise NotFoundError()

    posts = await repo.get_posts_by_user(db, user.id)
    posts = await enrich_posts(client, posts, fail_soft=settings.METADATA_FAIL_SOFT)
    return {
        "user": {"username": user.username, "picture": user.picture},
        "posts": posts,
    }


async def all_posts(db: AsyncSession, client: httpx.AsyncClient) -> list[dict[str, Any]]:
    posts = await repo.get_all_posts(db)
    return await enrich_posts(client, posts, fail_soft=settings.METADATA_FAIL_SOFT)
