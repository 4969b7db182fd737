from __future__ import annotations

import asyncio
import time

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from .settings import settings


def default_timeout() -> httpx.Timeout:
    return httpx.Timeout(connect=10.0, read=30.0, write=10.0, pool=10.0)


def default_limits() -> httpx.Limits:
    return httpx.Limits(max_connections=20, max_keepalive_connections=10)


def default_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent, "Accept": "application/json"}


class HttpClientFactory:
    """Creates shared httpx clients with sane defaults.

    Keep one client per provider; do not create per-request.
    """

    @staticmethod
    def client(base_url: str | None = None, headers: dict | None = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=base_url or "",
            headers={**default_headers(), **(headers or {})},
            timeout=default_timeout(),
            limits=default_limits(),
            follow_redirects=True,
        )


TransientHttpError = (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)


def transient_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(5),
        wait=wait_exponential_jitter(initial=0.5, max=10.0),
        retry=retry_if_exception_type(TransientHttpError),
    )


class RateLimiter:
    """Minimum-interval limiter owned by a single provider client.

    `acquire()` waits until at least `min_interval` seconds have passed since the
    previous acquisition. Concurrent callers are serialized in arrival order.
    """

    def __init__(self, min_interval: float):
        self.min_interval = max(0.0, float(min_interval))
        self._lock = asyncio.Lock()
        self._last: float | None = None

    async def acquire(self) -> None:
        async with self._lock:
            now = time.monotonic()
            if self._last is not None:
                wait = self._last + self.min_interval - now
                if wait > 0:
                    await asyncio.sleep(wait)
            self._last = time.monotonic()

    async def __aenter__(self) -> RateLimiter:
        await self.acquire()
        return self

    async def __aexit__(self, *exc) -> None:
        return None
