"""Thin async clients, one per external data provider."""

from .archive_org import ArchiveOrgClient
from .arxiv import ArxivClient
from .commons import CommonsClient
from .musicbrainz import MusicBrainzClient
from .nominatim import NominatimClient
from .openlibrary import OpenLibraryClient
from .tmdb import TmdbClient
from .wikidata import WikidataClient
from .wikipedia import WikipediaClient

__all__ = [
    "ArchiveOrgClient",
    "ArxivClient",
    "CommonsClient",
    "MusicBrainzClient",
    "NominatimClient",
    "OpenLibraryClient",
    "TmdbClient",
    "WikidataClient",
    "WikipediaClient",
]
