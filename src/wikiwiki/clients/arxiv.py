from __future__ import annotations

import re

import httpx

from wikiwiki.http import HttpClientFactory, transient_retry

_ARXIV_API = "https://export.arxiv.org/api/query"

_ENTRY = re.compile(r"<entry>(.*?)</entry>", re.DOTALL)


def _tag(entry: str, name: str) -> str | None:
    m = re.search(rf"<{name}[^>]*>(.*?)</{name}>", entry, re.DOTALL)
    if not m:
        return None
    return re.sub(r"\s+", " ", m.group(1)).strip() or None


def extract_papers(xml_text: str, limit: int = 3) -> list[dict]:
    """Pull title/summary/published/url out of an Atom feed with regexes.

    This is a light scan of the feed text, not an XML parse; entries missing a
    tag get None for that field.
    """
    papers = []
    for m in _ENTRY.finditer(xml_text):
        entry = m.group(1)
        papers.append(
            {
                "title": _tag(entry, "title"),
                "summary": _tag(entry, "summary"),
                "published": _tag(entry, "published"),
                "url": _tag(entry, "id"),
            }
        )
        if len(papers) >= limit:
            break
    return papers


class ArxivClient:
    """Minimal arXiv API client.

    arXiv's API is Atom XML; callers get the raw feed text.
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client or HttpClientFactory.client(
            base_url=_ARXIV_API, headers={"Accept": "application/atom+xml"}
        )

    async def aclose(self):
        await self._client.aclose()

    @transient_retry()
    async def search(self, query: str, start: int = 0, max_results: int = 5) -> str:
        params = {
            "search_query": query,
            "start": start,
            "max_results": max_results,
        }
        r = await self._client.get("", params=params)
        r.raise_for_status()
        return r.text

    @staticmethod
    def arxiv_query_all(words: str) -> str:
        """Helper for building simple arXiv queries; httpx does the URL encoding."""
        return f"all:{words}"
