from __future__ import annotations

import httpx

from wikiwiki.http import HttpClientFactory, transient_retry
from wikiwiki.settings import settings

FILE_NAMESPACE = 6


class CommonsClient:
    """Wikimedia Commons file search."""

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client or HttpClientFactory.client(base_url="https://commons.wikimedia.org")

    async def aclose(self):
        await self._client.aclose()

    @transient_retry()
    async def search_files(self, term: str, limit: int = 5, thumb_width: int | None = None) -> list[dict]:
        """File pages matching `term` in relevance order, with image info.

        Asking for `iiurlwidth` makes Commons render a thumbnail (`thumburl`),
        which is always a web format even when the original is TIFF/SVG.
        """
        r = await self._client.get(
            "/w/api.php",
            params={
                "action": "query",
                "generator": "search",
                "gsrsearch": term,
                "gsrnamespace": FILE_NAMESPACE,
                "gsrlimit": limit,
                "prop": "imageinfo",
                "iiprop": "url|size|thumburl",
                "iiurlwidth": thumb_width or settings.commons_thumb_width,
                "format": "json",
                "formatversion": 2,
            },
        )
        r.raise_for_status()
        pages = (r.json().get("query") or {}).get("pages") or []
        # generator results are not returned in rank order; `index` carries it
        return sorted(pages, key=lambda p: p.get("index", 0))
