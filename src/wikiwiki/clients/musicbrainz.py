from __future__ import annotations

import httpx

from wikiwiki.http import HttpClientFactory, RateLimiter, transient_retry
from wikiwiki.settings import settings


class MusicBrainzClient:
    """MusicBrainz web service v2 client.

    Docs: https://musicbrainz.org/doc/MusicBrainz_API

    MusicBrainz allows one request per second per client; every request goes
    through the client's own limiter.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, min_interval: float | None = None):
        self._client = client or HttpClientFactory.client(base_url="https://musicbrainz.org/ws/2")
        self.limiter = RateLimiter(
            settings.musicbrainz_min_interval if min_interval is None else min_interval
        )

    async def aclose(self):
        await self._client.aclose()

    @transient_retry()
    async def artist(self, mbid: str, inc: str = "recordings+releases+url-rels") -> dict:
        async with self.limiter:
            r = await self._client.get(f"/artist/{mbid}", params={"fmt": "json", "inc": inc})
        r.raise_for_status()
        return r.json()
