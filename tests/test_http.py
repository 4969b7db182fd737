"""Tests for the shared HTTP helpers."""

import asyncio
import time

from wikiwiki.http import HttpClientFactory, RateLimiter


async def test_rate_limiter_spaces_calls():
    limiter = RateLimiter(0.05)
    stamps = []

    async def call():
        await limiter.acquire()
        stamps.append(time.monotonic())

    await asyncio.gather(call(), call(), call())
    gaps = [b - a for a, b in zip(stamps, stamps[1:])]
    assert all(gap >= 0.045 for gap in gaps)


async def test_rate_limiter_first_call_is_immediate():
    limiter = RateLimiter(10)
    start = time.monotonic()
    await limiter.acquire()
    assert time.monotonic() - start < 1


async def test_factory_sets_user_agent():
    client = HttpClientFactory.client(headers={"X-Test": "1"})
    try:
        assert client.headers["User-Agent"].startswith("WikiWiki/")
        assert client.headers["X-Test"] == "1"
    finally:
        await client.aclose()


async def test_rate_limiter_as_context_manager_spaces_calls():
    limiter = RateLimiter(0.05)
    stamps = []

    async def call():
        async with limiter as held:
            assert held is limiter
            stamps.append(time.monotonic())

    await asyncio.gather(call(), call())
    assert stamps[1] - stamps[0] >= 0.045
