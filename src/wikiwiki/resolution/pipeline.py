"""Entity resolution: search term -> candidates -> canonical Wikidata record ->
multi-provider enrichment."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable

from wikiwiki.clients import (
    ArchiveOrgClient,
    ArxivClient,
    CommonsClient,
    MusicBrainzClient,
    NominatimClient,
    OpenLibraryClient,
    TmdbClient,
    WikidataClient,
    WikipediaClient,
)
from wikiwiki.errors import EnrichmentFailure, NotFoundError
from wikiwiki.language import LanguageContext, default_context
from wikiwiki.models import Candidate, Disambiguation, EnrichmentOutcome, Entity
from wikiwiki.settings import settings

from . import enrichers
from .claims import extract_identifiers, infer_type, localized

logger = logging.getLogger(__name__)


async def settle(operations: list[tuple[str, Awaitable[dict | None]]]) -> list[EnrichmentOutcome]:
    """Run all operations concurrently and wait for every one of them.

    A failing operation never cancels or hides the others; it becomes a failed
    outcome carrying the reason.
    """
    results = await asyncio.gather(*(op for _, op in operations), return_exceptions=True)
    outcomes: list[EnrichmentOutcome] = []
    for (key, _op), result in zip(operations, results):
        if isinstance(result, Exception):
            failure = EnrichmentFailure(key, f"{type(result).__name__}: {result}")
            logger.warning(str(failure))
            outcomes.append(EnrichmentOutcome(key=key, ok=False, reason=failure.reason))
        elif isinstance(result, BaseException):
            raise result
        else:
            outcomes.append(EnrichmentOutcome(key=key, ok=True, payload=result))
    return outcomes


class EntityResolver:
    """Resolves free-text queries into enriched :class:`Entity` values.

    All provider clients can be injected; missing ones are created with the
    shared language context. Use as an async context manager (or call
    `aclose()`) to release the HTTP clients.
    """

    def __init__(
        self,
        language: LanguageContext | None = None,
        *,
        wikipedia: WikipediaClient | None = None,
        wikidata: WikidataClient | None = None,
        musicbrainz: MusicBrainzClient | None = None,
        tmdb: TmdbClient | None = None,
        openlibrary: OpenLibraryClient | None = None,
        commons: CommonsClient | None = None,
        nominatim: NominatimClient | None = None,
        arxiv: ArxivClient | None = None,
        archive_org: ArchiveOrgClient | None = None,
        search_limit: int | None = None,
        link_limit: int | None = None,
    ):
        self.language = language or default_context
        self.wikipedia = wikipedia or WikipediaClient(self.language)
        self.wikidata = wikidata or WikidataClient()
        self.musicbrainz = musicbrainz or MusicBrainzClient()
        self.tmdb = tmdb or TmdbClient(language=self.language)
        self.openlibrary = openlibrary or OpenLibraryClient()
        self.commons = commons or CommonsClient()
        self.nominatim = nominatim or NominatimClient()
        self.arxiv = arxiv or ArxivClient()
        self.archive_org = archive_org or ArchiveOrgClient()
        self.search_limit = search_limit or settings.search_limit
        self.link_limit = link_limit or settings.article_link_limit

    async def aclose(self):
        for client in (
            self.wikipedia,
            self.wikidata,
            self.musicbrainz,
            self.tmdb,
            self.openlibrary,
            self.commons,
            self.nominatim,
            self.arxiv,
            self.archive_org,
        ):
            await client.aclose()

    async def __aenter__(self) -> EntityResolver:
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def candidates(self, search_term: str) -> list[Candidate]:
        """Distinct Wikidata-backed candidates for `search_term`, in search order.

        Titles are looked up one after another so the first title reaching a
        given Wikidata id keeps its place; later duplicates are dropped.
        """
        titles = await self.wikipedia.opensearch(search_term, limit=self.search_limit)
        if not titles:
            raise NotFoundError(search_term)

        found: list[Candidate] = []
        seen: set[str] = set()
        for title in titles:
            page = await self.wikipedia.wikibase_item(title)
            if not page or not page.get("id") or page["id"] in seen:
                continue
            seen.add(page["id"])
            found.append(Candidate(title=page["title"], canonical_id=page["id"]))

        if not found:
            raise NotFoundError(search_term, f'No valid article found for "{search_term}"')
        return found

    async def resolve(self, search_term: str) -> Entity | Disambiguation:
        """Resolve a query to an Entity, or to a Disambiguation when several
        distinct Wikidata items match."""
        if not search_term or not search_term.strip():
            raise ValueError("search term must be non-empty")

        found = await self.candidates(search_term.strip())
        if len(found) == 1:
            return await self.resolve_from_candidate(found[0].title, found[0].canonical_id)
        return Disambiguation(candidates=found)

    async def resolve_from_candidate(self, title: str, canonical_id: str) -> Entity:
        """Build and enrich the entity for a known Wikidata id.

        Only a failure to fetch the Wikidata record propagates; enrichment is
        best-effort.
        """
        logger.info(f"Resolving '{title}' -> {canonical_id}")
        record = await self.wikidata.entity(canonical_id)
        lang = self.language.get()

        entity = Entity(
            id=canonical_id,
            name=localized(record, "labels", lang) or title,
            description=localized(record, "descriptions", lang),
            type=infer_type(record),
            identifiers=extract_identifiers(record),
            sources={
                "wikidata": {
                    "claims": record.get("claims") or {},
                    "sitelinks": record.get("sitelinks") or {},
                }
            },
        )

        # the article title in the current language, when the item has one
        sitelink = (record.get("sitelinks") or {}).get(f"{lang}wiki") or {}
        outcomes = await self.enrich(entity, sitelink.get("title") or title)
        return entity.with_sources({o.key: o.payload for o in outcomes if o.applied})

    def enrichment_operations(self, entity: Entity, title: str) -> list[tuple[str, Awaitable[dict | None]]]:
        return [
            ("wikipedia", enrichers.wikipedia(entity, title, self.wikipedia, self.link_limit)),
            ("external_links", enrichers.external_links(entity, title, self.wikipedia)),
            ("musicbrainz", enrichers.musicbrainz(entity, self.musicbrainz)),
            ("tmdb", enrichers.tmdb(entity, self.tmdb)),
            ("openlibrary", enrichers.openlibrary(entity, self.openlibrary)),
            ("wikimedia_commons", enrichers.wikimedia_commons(entity, self.commons)),
            ("openstreetmap", enrichers.openstreetmap(entity, self.nominatim)),
            ("arxiv", enrichers.arxiv(entity, self.arxiv)),
            ("archive_org", enrichers.archive_org(entity, self.archive_org)),
        ]

    async def enrich(self, entity: Entity, title: str) -> list[EnrichmentOutcome]:
        outcomes = await settle(self.enrichment_operations(entity, title))
        applied = [o.key for o in outcomes if o.applied]
        failed = [o.key for o in outcomes if not o.ok]
        logger.info(f"Enriched {entity.id}: {applied or 'no sources'}" + (f", failed: {failed}" if failed else ""))
        return outcomes
