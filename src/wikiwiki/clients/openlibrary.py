from __future__ import annotations

import re

import httpx

from wikiwiki.http import HttpClientFactory, transient_retry

COVERS_URL = "https://covers.openlibrary.org/b/id/{cover_id}-L.jpg"

_AUTHOR_ID = re.compile(r"^OL\d+A$")
_WORK_ID = re.compile(r"^OL\d+W$")


def record_kind(olid: str) -> str | None:
    """'author' for OL…A ids, 'work' for OL…W ids, None otherwise (e.g. editions)."""
    if _AUTHOR_ID.match(olid):
        return "author"
    if _WORK_ID.match(olid):
        return "work"
    return None


class OpenLibraryClient:
    """Open Library JSON API client.

    Docs: https://openlibrary.org/developers/api
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client or HttpClientFactory.client(base_url="https://openlibrary.org")

    async def aclose(self):
        await self._client.aclose()

    @transient_retry()
    async def author(self, olid: str) -> dict:
        r = await self._client.get(f"/authors/{olid}.json")
        r.raise_for_status()
        return r.json()

    @transient_retry()
    async def work(self, olid: str) -> dict:
        r = await self._client.get(f"/works/{olid}.json")
        r.raise_for_status()
        return r.json()
