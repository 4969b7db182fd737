from __future__ import annotations

import httpx

from wikiwiki.http import HttpClientFactory, RateLimiter, transient_retry
from wikiwiki.settings import settings


class NominatimClient:
    """OpenStreetMap Nominatim reverse geocoding.

    Usage policy: at most one request per second, identifying User-Agent.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, min_interval: float | None = None):
        self._client = client or HttpClientFactory.client(base_url="https://nominatim.openstreetmap.org")
        self.limiter = RateLimiter(
            settings.nominatim_min_interval if min_interval is None else min_interval
        )

    async def aclose(self):
        await self._client.aclose()

    @transient_retry()
    async def reverse(self, latitude: float, longitude: float, zoom: int = 18) -> dict:
        async with self.limiter:
            r = await self._client.get(
                "/reverse",
                params={"lat": latitude, "lon": longitude, "format": "json", "zoom": zoom},
            )
        r.raise_for_status()
        return r.json()
