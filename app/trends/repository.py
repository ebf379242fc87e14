# app/trends/repository.py
from __future__ import annotations

from collections import defaultdict

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.trends.models import Trend, PostTrend


async def get_or_create_trends(db: AsyncSession, names: list[str]) -> list[Trend]:
    """
    Devuelve los Trend de `names` (en el mismo orden), creando los que falten.
    """
    if not names:
        return []

    res = await db.execute(select(Trend).where(Trend.name.in_(names)))
    by_name = {t.name: t for t in res.scalars()}

    for name in names:
        if name not in by_name:
            trend = Trend(name=name)
            db.add(trend)
            by_name[name] = trend
    await db.flush()

    return [by_name[n] for n in names]


async def set_post_trends(db: AsyncSession, post_id: int, names: list[str]) -> None:
    """
    Reemplaza el set de trends de un post.
    """
    await db.execute(delete(PostTrend).where(PostTrend.post_id == post_id))
    for trend in await get_or_create_trends(db, names):
        db.add(PostTrend(post_id=post_id, trend_id=trend.id))
    await db.flush()


async def get_post_trend_names(db: AsyncSession, post_id: int) -> list[str]:
    res = await db.execute(
        select(Trend.name)
        .join(PostTrend, PostTrend.trend_id == Trend.id)
        .where(PostTrend.post_id == post_id)
        .order_by(PostTrend.id.asc())
    )
    return [row[0] for row in res.all()]


async def get_trend_names_for_posts(
    db: AsyncSession,
    post_ids: list[int],
) -> dict[int, list[str]]:
    """
    {post_id: [nombres]} para varios posts en una sola query.
    """
    if not post_ids:
        return {}
    res = await db.execute(
        select(PostTrend.post_id, Trend.name)
        .join(Trend, Trend.id == PostTrend.trend_id)
        .where(PostTrend.post_id.in_(post_ids))
        .order_by(PostTrend.id.asc())
    )
    out: dict[int, list[str]] = defaultdict(list)
    for post_id, name in res.all():
        out[post_id].append(name)
    return dict(out)
