# app/posts/repository.py
from typing import Any

from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from app.posts.models import Post
from app.users.models import User
from app.trends import repository as trends_repo


# -------------------------
# ESCRITURA
# -------------------------
async def insert_post_data(
    db: AsyncSession,
    user_id: int,
    link: str,
    description: str,
    trends: list[str],
    shared_from_post_id: int | None = None,
) -> Post:
    post = Post(
        user_id=user_id,
        link=link,
        description=description,
        shared_from_post_id=shared_from_post_id,
    )
    db.add(post)
    await db.flush()
    await db.refresh(post)
    await trends_repo.set_post_trends(db, post.id, trends)
    return post


async def update_post_data(
    db: AsyncSession,
    post: Post,
    description: str,
    trends: list[str],
) -> Post:
    post.description = description
    await db.flush()
    await trends_repo.set_post_trends(db, post.id, trends)
    return post


async def delete_post_data(db: AsyncSession, post: Post) -> None:
    # post_trends se van en cascada; los shares quedan con shared_from_post_id = NULL
    await db.delete(post)
    await db.flush()


# -------------------------
# LECTURA
# -------------------------
async def get_post_by_id(db: AsyncSession, post_id: int) -> Post | None:
    res = await db.execute(select(Post).where(Post.id == post_id))
    return res.scalar_one_or_none()


async def check_if_post_is_posted_by_user(
    db: AsyncSession,
    post_id: int,
    user_id: int,
) -> Post | None:
    res = await db.execute(
        select(Post).where(Post.id == post_id, Post.user_id == user_id)
    )
    return res.scalar_one_or_none()


def _feed_query():
    return (
        select(Post, User)
        .join(User, User.id == Post.user_id)
        .order_by(desc(Post.created_at), desc(Post.id))
    )


async def _to_rows(db: AsyncSession, result) -> list[dict[str, Any]]:
    pairs = result.all()
    trend_names = await trends_repo.get_trend_names_for_posts(
        db, [post.id for post, _ in pairs]
    )

    items: list[dict[str, Any]] = []
    for post, user in pairs:
        items.append(
            {
                "id": post.id,
                "user_id": post.user_id,
                "username": user.username,
                "picture": user.picture,
                "link": post.link,
                "description": post.description,
                "trends": trend_names.get(post.id, []),
                "shared_from_post_id": post.shared_from_post_id,
                "created_at": post.created_at,
            }
        )
    return items


async def get_posts_by_user(db: AsyncSession, user_id: int) -> list[dict[str, Any]]:
    """
    Publicaciones de un usuario (más nuevas primero) con autor y trends.
    """
    res = await db.execute(_feed_query().where(Post.user_id == user_id))
    return await _to_rows(db, res)


async def get_all_posts(db: AsyncSession) -> list[dict[str, Any]]:
    res = await db.execute(_feed_query())
    return await _to_rows(db, res)
