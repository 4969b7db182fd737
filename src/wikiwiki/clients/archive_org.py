from __future__ import annotations

import httpx

from wikiwiki.http import HttpClientFactory, transient_retry

DEFAULT_FIELDS = ("identifier", "title", "mediatype", "date", "creator", "downloads")


class ArchiveOrgClient:
    """Internet Archive advanced search.

    Docs: https://archive.org/advancedsearch.php
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client or HttpClientFactory.client(base_url="https://archive.org")

    async def aclose(self):
        await self._client.aclose()

    @transient_retry()
    async def search(
        self,
        query: str,
        rows: int = 5,
        fields: tuple[str, ...] = DEFAULT_FIELDS,
        sort: str = "downloads desc",
    ) -> dict:
        """Raw `response` block: `{"numFound": ..., "docs": [...]}`."""
        params: list[tuple[str, str | int]] = [("q", query)]
        params += [("fl[]", f) for f in fields]
        params += [("sort[]", sort), ("rows", rows), ("output", "json")]
        r = await self._client.get("/advancedsearch.php", params=params)
        r.raise_for_status()
        return r.json().get("response") or {}
