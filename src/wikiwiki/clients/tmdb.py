from __future__ import annotations

import httpx

from wikiwiki.http import HttpClientFactory, transient_retry
from wikiwiki.language import LanguageContext, default_context
from wikiwiki.settings import settings

IMAGE_BASE = "https://image.tmdb.org/t/p"


class TmdbClient:
    """The Movie Database v3 client.

    Docs: https://developer.themoviedb.org/reference

    Requires an API key (WIKIWIKI_TMDB_API_KEY); without one `enabled` is False.
    """

    def __init__(
        self,
        api_key: str | None = None,
        language: LanguageContext | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.tmdb_api_key
        self.language = language or default_context
        self._client = client or HttpClientFactory.client(base_url="https://api.themoviedb.org/3")

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def aclose(self):
        await self._client.aclose()

    @transient_retry()
    async def movie(self, tmdb_id: str) -> dict:
        r = await self._client.get(
            f"/movie/{tmdb_id}",
            params={"api_key": self.api_key, "language": self.language.get()},
        )
        r.raise_for_status()
        return r.json()
