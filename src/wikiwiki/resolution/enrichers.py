"""Best-effort enrichment operations, one per provider.

Each operation takes the base entity and returns the payload to store under its
source key, or None when it does not apply (missing identifier, wrong entity
type, empty result). Exceptions are left to the caller, which settles all
operations together and logs failures. The Wikipedia operation is the one
exception: a failed link fetch keeps the summary it already has.
"""

from __future__ import annotations

import logging
import re

import httpx

from wikiwiki.clients import (
    ArchiveOrgClient,
    ArxivClient,
    CommonsClient,
    MusicBrainzClient,
    NominatimClient,
    OpenLibraryClient,
    TmdbClient,
    WikipediaClient,
)
from wikiwiki.clients.arxiv import extract_papers
from wikiwiki.clients.openlibrary import COVERS_URL, record_kind
from wikiwiki.clients.tmdb import IMAGE_BASE
from wikiwiki.models import Entity
from wikiwiki.tables import LINK_BUCKETS, LINK_DOMAINS

logger = logging.getLogger(__name__)

MAX_RECORDINGS = 20
MAX_RELEASES = 20
MAX_IMAGES = 5
MAX_PAPERS = 3
MAX_VIDEOS = 3
MAX_AUDIO = 5
MAX_TEXTS = 5


async def wikipedia(entity: Entity, title: str, client: WikipediaClient, link_limit: int = 50) -> dict:
    summary = await client.summary(title)
    payload = {
        "title": summary.get("title"),
        "extract": summary.get("extract"),
        "thumbnail": (summary.get("thumbnail") or {}).get("source"),
        "url": ((summary.get("content_urls") or {}).get("desktop") or {}).get("page"),
    }
    try:
        links = await client.links(title)
    except Exception as exc:
        # The summary stands on its own; only the outbound links are lost.
        logger.warning(f"wikipedia links for '{title}' failed: {type(exc).__name__}: {exc}")
        return payload
    if links:
        payload["links"] = links[:link_limit]
    return payload


def _normalized_name(name: str) -> str:
    return re.sub(r"[^0-9a-z]", "", name.lower())


def _matches(host: str, domain: str) -> bool:
    return host == domain or host.endswith("." + domain)


def categorize_link(url: str, entity_name: str) -> tuple[str, dict] | None:
    """(bucket, link) for an external URL, None when the URL has no host."""
    try:
        host = httpx.URL(url).host
    except (httpx.InvalidURL, TypeError):
        return None
    if not host:
        return None
    domain = host.lower().removeprefix("www.")
    label = domain.split(".")[0]
    link = {"url": url, "domain": domain, "display": label}

    name = _normalized_name(entity_name)
    if "official" in domain or (name and label == name):
        return "official", link
    for bucket, domains in LINK_DOMAINS.items():
        if any(_matches(domain, d) for d in domains):
            return bucket, link
    return "other", link


async def external_links(entity: Entity, title: str, client: WikipediaClient) -> dict | None:
    urls = await client.external_links(title)
    if not urls:
        return None
    buckets: dict[str, list[dict]] = {b: [] for b in LINK_BUCKETS}
    for url in urls:
        categorized = categorize_link(url, entity.name)
        if categorized is not None:
            bucket, link = categorized
            buckets[bucket].append(link)
    kept = {k: v for k, v in buckets.items() if v}
    return kept or None


async def musicbrainz(entity: Entity, client: MusicBrainzClient) -> dict | None:
    mbid = entity.identifiers.get("musicbrainz")
    if not mbid:
        return None
    data = await client.artist(mbid)
    return {
        "name": data.get("name"),
        "type": data.get("type"),
        "recordings": (data.get("recordings") or [])[:MAX_RECORDINGS],
        "releases": (data.get("releases") or [])[:MAX_RELEASES],
        "relations": data.get("relations") or [],
    }


async def tmdb(entity: Entity, client: TmdbClient) -> dict | None:
    tmdb_id = entity.identifiers.get("tmdb")
    if not tmdb_id or not client.enabled:
        return None
    data = await client.movie(tmdb_id)
    poster = data.get("poster_path")
    backdrop = data.get("backdrop_path")
    return {
        "title": data.get("title"),
        "overview": data.get("overview"),
        "release_date": data.get("release_date"),
        "poster": f"{IMAGE_BASE}/w500{poster}" if poster else None,
        "backdrop": f"{IMAGE_BASE}/w1280{backdrop}" if backdrop else None,
        "rating": data.get("vote_average"),
        "genres": data.get("genres") or [],
    }


def _text(value) -> str | None:
    # Open Library stores bio/description either as a string or {"type", "value"}
    if isinstance(value, dict):
        return value.get("value")
    return value


async def openlibrary(entity: Entity, client: OpenLibraryClient) -> dict | None:
    olid = entity.identifiers.get("openlibrary")
    if not olid:
        return None
    kind = record_kind(olid)
    if kind == "author":
        data = await client.author(olid)
    elif kind == "work":
        data = await client.work(olid)
    else:
        return None
    covers = [c for c in data.get("covers") or [] if isinstance(c, int) and c > 0]
    return {
        "name": data.get("name") or data.get("title"),
        "bio": _text(data.get("bio")) or _text(data.get("description")),
        "birth_date": data.get("birth_date"),
        "death_date": data.get("death_date"),
        "works_count": data.get("work_count"),
        "cover": COVERS_URL.format(cover_id=covers[0]) if covers else None,
    }


async def wikimedia_commons(entity: Entity, client: CommonsClient) -> dict | None:
    pages = await client.search_files(entity.name, limit=MAX_IMAGES)
    images = []
    for page in pages:
        info = (page.get("imageinfo") or [None])[0]
        if not info:
            continue
        images.append(
            {
                "url": info.get("thumburl") or info.get("url"),
                "source_url": info.get("url"),
                "width": info.get("thumbwidth") or info.get("width"),
                "height": info.get("thumbheight") or info.get("height"),
                "title": page.get("title"),
            }
        )
    if not images:
        return None
    return {"images": images[:MAX_IMAGES]}


async def openstreetmap(entity: Entity, client: NominatimClient) -> dict | None:
    coords = entity.identifiers.get("coordinates")
    if not coords or coords.get("latitude") is None or coords.get("longitude") is None:
        return None
    lat, lon = coords["latitude"], coords["longitude"]
    data = await client.reverse(lat, lon)
    return {
        "latitude": lat,
        "longitude": lon,
        "display_name": data.get("display_name"),
        "address": data.get("address"),
        "type": data.get("type"),
        "osm_id": data.get("osm_id"),
        "map_url": f"https://www.openstreetmap.org/?mlat={lat}&mlon={lon}#map=15/{lat}/{lon}",
    }


async def arxiv(entity: Entity, client: ArxivClient) -> dict | None:
    if entity.type != "concept":
        return None
    feed = await client.search(ArxivClient.arxiv_query_all(entity.name), max_results=5)
    papers = extract_papers(feed, limit=MAX_PAPERS)
    if not papers:
        return None
    return {"papers": papers}


def archive_query(entity: Entity) -> str | None:
    """Advanced-search query for the entity, None for concepts (too vague to search)."""
    name = entity.name.replace('"', "")
    if entity.type == "concept":
        return None
    if entity.type == "person":
        return f'creator:"{name}" AND (mediatype:audio OR mediatype:movies)'
    return f'title:"{name}"'


def _archive_item(doc: dict) -> dict:
    ident = doc.get("identifier")
    return {
        "identifier": ident,
        "title": doc.get("title"),
        "date": doc.get("date"),
        "creator": doc.get("creator"),
        "downloads": doc.get("downloads"),
        "url": f"https://archive.org/details/{ident}",
        "embed_url": f"https://archive.org/embed/{ident}",
    }


async def archive_org(entity: Entity, client: ArchiveOrgClient) -> dict | None:
    query = archive_query(entity)
    if query is None:
        return None
    response = await client.search(query, rows=MAX_VIDEOS + MAX_AUDIO + MAX_TEXTS)
    docs = response.get("docs") or []
    if not docs:
        return None
    docs = sorted(docs, key=lambda d: d.get("downloads") or 0, reverse=True)
    videos = [d for d in docs if d.get("mediatype") in ("movies", "video")][:MAX_VIDEOS]
    audio = [d for d in docs if d.get("mediatype") in ("audio", "etree")][:MAX_AUDIO]
    texts = [d for d in docs if d.get("mediatype") == "texts"][:MAX_TEXTS]
    return {
        "videos": [_archive_item(d) for d in videos],
        "audio": [_archive_item(d) for d in audio],
        "texts": [_archive_item(d) for d in texts],
        "total_results": response.get("numFound", len(docs)),
    }
