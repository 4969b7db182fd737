from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from wikiwiki.http import HttpClientFactory, transient_retry
from wikiwiki.language import LanguageContext, default_context


class WikipediaClient:
    """MediaWiki action API + REST API client for one language edition.

    The language is read from the context on every call, so a language switch
    takes effect immediately.
    """

    def __init__(self, language: LanguageContext | None = None, client: httpx.AsyncClient | None = None):
        self.language = language or default_context
        self._client = client or HttpClientFactory.client()

    async def aclose(self):
        await self._client.aclose()

    @property
    def api_url(self) -> str:
        return f"https://{self.language.get()}.wikipedia.org/w/api.php"

    @property
    def rest_url(self) -> str:
        return f"https://{self.language.get()}.wikipedia.org/api/rest_v1"

    async def _action(self, **params: Any) -> dict:
        r = await self._client.get(
            self.api_url, params={**params, "format": "json", "formatversion": 2}
        )
        r.raise_for_status()
        return r.json()

    @transient_retry()
    async def opensearch(self, query: str, limit: int = 10) -> list[str]:
        """Titles matching `query`, best first."""
        r = await self._client.get(
            self.api_url,
            params={"action": "opensearch", "search": query, "limit": limit, "format": "json"},
        )
        r.raise_for_status()
        data = r.json()
        # [query, [titles], [descriptions], [urls]]
        if isinstance(data, list) and len(data) > 1 and isinstance(data[1], list):
            return [t for t in data[1] if isinstance(t, str)]
        return []

    @transient_retry()
    async def wikibase_item(self, title: str) -> dict[str, str | None] | None:
        """Follow redirects for `title` and return `{"id", "title"}`.

        `title` is the post-redirect title. Returns None for missing pages;
        `id` is None for pages without a linked Wikidata item.
        """
        data = await self._action(
            action="query", prop="pageprops", ppprop="wikibase_item", titles=title, redirects=1
        )
        pages = (data.get("query") or {}).get("pages") or []
        if not pages:
            return None
        page = pages[0]
        if page.get("missing") or page.get("invalid"):
            return None
        return {
            "id": (page.get("pageprops") or {}).get("wikibase_item"),
            "title": page.get("title") or title,
        }

    @transient_retry()
    async def summary(self, title: str) -> dict:
        r = await self._client.get(f"{self.rest_url}/page/summary/{quote(title.replace(' ', '_'), safe='')}")
        r.raise_for_status()
        return r.json()

    @transient_retry()
    async def links(self, title: str) -> list[str]:
        """Internal article links in page order."""
        data = await self._action(action="parse", page=title, prop="links")
        links = (data.get("parse") or {}).get("links") or []
        return [link["title"] for link in links if link.get("title")]

    @transient_retry()
    async def external_links(self, title: str) -> list[str]:
        data = await self._action(action="parse", page=title, prop="externallinks")
        return [u for u in (data.get("parse") or {}).get("externallinks") or [] if isinstance(u, str)]
