from __future__ import annotations

import logging

import httpx

from wikiwiki.http import HttpClientFactory, transient_retry

_WIKIDATA_API = "https://www.wikidata.org/w/api.php"
_ENTITY_DATA = "https://www.wikidata.org/wiki/Special:EntityData"

# wbgetentities accepts at most 50 ids per request.
MAX_IDS_PER_REQUEST = 50

logger = logging.getLogger(__name__)


class WikidataClient:
    """Wikidata entity and label lookups."""

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client or HttpClientFactory.client()

    async def aclose(self):
        await self._client.aclose()

    @transient_retry()
    async def entity(self, qid: str) -> dict:
        """Full JSON record (labels, descriptions, claims, sitelinks) for `qid`."""
        r = await self._client.get(f"{_ENTITY_DATA}/{qid}.json")
        r.raise_for_status()
        entities = r.json().get("entities") or {}
        # EntityData follows redirects; the record may be keyed by the target id.
        record = entities.get(qid) or next(iter(entities.values()), None)
        if record is None:
            raise KeyError(f"Wikidata returned no record for {qid}")
        return record

    async def labels(self, qids: list[str], language: str) -> dict[str, str]:
        """Labels for `qids` in `language` (English fallback). Unlabelled ids are omitted.

        Ids are fetched in chunks; a failed chunk is logged and skipped so the
        labels of the other chunks are kept. Raises only when every chunk failed.
        """
        out: dict[str, str] = {}
        error: Exception | None = None
        failed = 0
        chunks = [qids[i : i + MAX_IDS_PER_REQUEST] for i in range(0, len(qids), MAX_IDS_PER_REQUEST)]
        for chunk in chunks:
            try:
                out.update(await self._labels_chunk(chunk, language))
            except Exception as e:
                failed += 1
                error = e
                logger.warning(f"Label lookup failed for {len(chunk)} ids ({chunk[0]}..): {type(e).__name__}: {e}")
        if chunks and failed == len(chunks):
            raise error
        return out

    @transient_retry()
    async def _labels_chunk(self, chunk: list[str], language: str) -> dict[str, str]:
        r = await self._client.get(
            _WIKIDATA_API,
            params={
                "action": "wbgetentities",
                "ids": "|".join(chunk),
                "props": "labels",
                "languages": language if language == "en" else f"{language}|en",
                "format": "json",
            },
        )
        r.raise_for_status()
        data = r.json()
        if "error" in data:
            raise ValueError(f"wbgetentities: {data['error'].get('info') or data['error']}")
        entities = data.get("entities") or {}
        out: dict[str, str] = {}
        for qid in chunk:
            labels = (entities.get(qid) or {}).get("labels") or {}
            label = (labels.get(language) or labels.get("en") or {}).get("value")
            if label:
                out[qid] = label
        return out
