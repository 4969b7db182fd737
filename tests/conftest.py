"""Shared fixtures: Wikidata record builders and fake provider clients."""

from unittest.mock import AsyncMock

import pytest

from wikiwiki.language import LanguageContext
from wikiwiki.resolution import EntityResolver


def snak(value):
    return {"mainsnak": {"snaktype": "value", "datavalue": {"value": value}}}


def item(qid):
    return snak({"entity-type": "item", "id": qid})


def wikidata_record(
    qid="Q93341",
    label="Miles Davis",
    description="American jazz trumpeter",
    claims=None,
    language="en",
    sitelinks=None,
):
    return {
        "id": qid,
        "labels": {language: {"language": language, "value": label}} if label else {},
        "descriptions": {language: {"language": language, "value": description}} if description else {},
        "claims": claims or {},
        "sitelinks": sitelinks or {},
    }


@pytest.fixture
def language():
    return LanguageContext("en")


@pytest.fixture
def providers():
    """AsyncMock stand-ins for every provider client; nothing applies by default."""
    wikipedia = AsyncMock()
    wikipedia.opensearch.return_value = []
    wikipedia.wikibase_item.return_value = None
    wikipedia.summary.return_value = {"title": "Miles Davis", "extract": "Trumpeter."}
    wikipedia.links.return_value = []
    wikipedia.external_links.return_value = []

    wikidata = AsyncMock()
    wikidata.entity.return_value = wikidata_record()
    wikidata.labels.return_value = {}

    tmdb = AsyncMock()
    tmdb.enabled = False

    commons = AsyncMock()
    commons.search_files.return_value = []

    archive_org = AsyncMock()
    archive_org.search.return_value = {}

    arxiv = AsyncMock()
    arxiv.search.return_value = "<feed></feed>"

    return {
        "wikipedia": wikipedia,
        "wikidata": wikidata,
        "musicbrainz": AsyncMock(),
        "tmdb": tmdb,
        "openlibrary": AsyncMock(),
        "commons": commons,
        "nominatim": AsyncMock(),
        "arxiv": arxiv,
        "archive_org": archive_org,
    }


@pytest.fixture
def resolver(providers, language):
    return EntityResolver(language, **providers)
