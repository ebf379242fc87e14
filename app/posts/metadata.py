# app/posts/metadata.py
"""
Preview de links: título, descripción e imagen de la página enlazada.

Se calcula en cada lectura del feed, nunca se guarda en DB.
"""
from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, AsyncIterator
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from app.core.config import settings

log = logging.getLogger("uvicorn")

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


@dataclass(frozen=True)
class LinkMetadata:
    title: str | None = None
    description: str | None = None
    image: str | None = None


EMPTY_METADATA = LinkMetadata()


def with_scheme(url: str) -> str:
    """El link puede venir sin esquema ("google.com") → se pide por https."""
    url = url.strip()
    if _SCHEME_RE.match(url):
        return url
    return f"https://{url}"


def _meta_content(soup: BeautifulSoup, *selectors: tuple[str, str]) -> str | None:
    for attr, value in selectors:
        tag = soup.find("meta", {attr: value})
        if not tag:
            continue
        content = (tag.get("content") or "").strip()
        if content:
            return content
    return None


def parse_metadata(html: str, base_url: str) -> LinkMetadata:
    """
    OpenGraph primero, luego twitter cards y por último los tags HTML normales.
    """
    soup = BeautifulSoup(html, "html.parser")

    title = _meta_content(soup, ("property", "og:title"), ("name", "twitter:title"))
    if not title and soup.title and soup.title.string:
        title = soup.title.string.strip() or None

    description = _meta_content(
        soup,
        ("property", "og:description"),
        ("name", "twitter:description"),
        ("name", "description"),
    )

    image = _meta_content(soup, ("property", "og:image"), ("name", "twitter:image"))
    if image:
        # og:image relativo ("/img/cover.png") → absoluto
        image = urljoin(base_url, image)

    return LinkMetadata(title=title, description=description, image=image)


async def fetch_url_metadata(client: httpx.AsyncClient, url: str) -> LinkMetadata:
    """
    Descarga la página y extrae el preview.
    Errores de red, status != 2xx (httpx.HTTPError) o host inválido
    (httpx.InvalidURL) se propagan.
    """
    r = await client.get(with_scheme(url))
    r.raise_for_status()
    return parse_metadata(r.text, str(r.url))


async def get_metadata_client() -> AsyncIterator[httpx.AsyncClient]:
    """
    Un cliente HTTP por request, compartido por todos los fetches del batch.
    """
    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.METADATA_TIMEOUT_SECONDS),
        follow_redirects=True,
        headers={"User-Agent": settings.METADATA_USER_AGENT},
    ) as client:
        yield client


async def insert_url_metadata(
    client: httpx.AsyncClient,
    post: dict[str, Any],
    *,
    fail_soft: bool = False,
) -> dict[str, Any]:
    """
    Agrega link_title / link_description / link_image al dict del post.
    """
    try:
        meta = await fetch_url_metadata(client, post["link"])
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        # InvalidURL no hereda de HTTPError (p.ej. "http://999.999.999.999/x" pasa el regex)
        if not fail_soft:
            raise
        log.warning(f"⚠️ preview falló para post {post.get('id')} ({post['link']}): {e!r}")
        meta = EMPTY_METADATA

    post["link_title"] = meta.title
    post["link_description"] = meta.description
    post["link_image"] = meta.image
    return post


async def enrich_posts(
    client: httpx.AsyncClient,
    posts: list[dict[str, Any]],
    *,
    max_concurrency: int | None = None,
    fail_soft: bool = False,
) -> list[dict[str, Any]]:
    """
    Enriquece todos los posts con a lo sumo `max_concurrency` fetches en vuelo.
    El orden de salida es el mismo que el de entrada.
    """
    limit = asyncio.Semaphore(max(1, max_concurrency or settings.METADATA_MAX_CONCURRENCY))

    async def _one(post: dict[str, Any]) -> dict[str, Any]:
        async with limit:
            return await insert_url_metadata(client, post, fail_soft=fail_soft)

    tasks = [asyncio.ensure_future(_one(p)) for p in posts]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        # si uno falla, ningún fetch sigue vivo después de la request
        for t in tasks:
            t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
