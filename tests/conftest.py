"""Shared fixtures: fake DB session, fixed caller and a mocked web for link previews."""

from collections.abc import AsyncIterator, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.context import RequestContext, get_request_context
from app.db.session import get_session
from app.main import app
from app.posts.metadata import get_metadata_client

CALLER_ID = 1


class FakeSession:
    """Stands in for AsyncSession; repository functions are monkeypatched."""

    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def web() -> dict[str, object]:
    """URL → HTML string, or an exception to raise for that URL."""
    return {}


def mock_transport(web: dict[str, object]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        target = web.get(str(request.url))
        if target is None:
            return httpx.Response(404, text="not found")
        if isinstance(target, Exception):
            raise target
        return httpx.Response(200, text=str(target), headers={"content-type": "text/html"})

    return httpx.MockTransport(handler)


@pytest.fixture
def client(session: FakeSession, web: dict[str, object]) -> Iterator[TestClient]:
    async def _session() -> AsyncIterator[FakeSession]:
        yield session

    async def _context() -> RequestContext:
        return RequestContext(user_id=CALLER_ID)

    async def _metadata_client() -> AsyncIterator[httpx.AsyncClient]:
        async with httpx.AsyncClient(transport=mock_transport(web)) as c:
            yield c

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_request_context] = _context
    app.dependency_overrides[get_metadata_client] = _metadata_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
