# app/db/session.py
"""
Engine + sesiones async.

Postgres (asyncpg) en producción; SQLite (aiosqlite) para tests y desarrollo
local. `build_engine` es el único lugar donde se decide cómo conectarse.
"""
from typing import Any, AsyncIterator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.core.config import settings


def _connect_args(drivername: str) -> dict[str, Any]:
    # si la DB no responde → falla rápido (5s)
    if drivername == "postgresql+psycopg":
        return {"connect_timeout": 5}
    if drivername == "postgresql+asyncpg":
        return {"timeout": 5, "server_settings": {"client_encoding": "UTF8"}}
    return {}


def _enable_sqlite_fks(engine: AsyncEngine) -> None:
    # SQLite ignora ON DELETE CASCADE / SET NULL sin este pragma
    @event.listens_for(engine.sync_engine, "connect")
    def _fk_on(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()


def build_engine(url: str) -> AsyncEngine:
    parsed = make_url(url)

    if parsed.get_backend_name() == "sqlite":
        kwargs: dict[str, Any] = {}
        if parsed.database in (None, "", ":memory:"):
            # una sola conexión, si no cada sesión vería una DB vacía
            kwargs["poolclass"] = StaticPool
        engine = create_async_engine(url, **kwargs)
        _enable_sqlite_fks(engine)
        return engine

    return create_async_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=5,
        max_overflow=10,
        connect_args=_connect_args(parsed.drivername),
    )


def make_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # objetos siguen legibles después del commit (el router commitea)
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.DATABASE_URL)
AsyncSessionLocal = make_sessionmaker(engine)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as session:
        yield session
