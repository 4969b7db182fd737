from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EntityType = Literal["person", "place", "work", "concept", "entity"]


class Coordinates(BaseModel):
    latitude: float
    longitude: float


class Candidate(BaseModel):
    """A disambiguation option: a post-redirect article title and its Wikidata id."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    canonical_id: str


class Disambiguation(BaseModel):
    """Returned instead of an entity when a query matches several items."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    needs_disambiguation: Literal[True] = True
    candidates: list[Candidate] = Field(default_factory=list)


class Entity(BaseModel):
    """Canonical, enriched representation of a resolved subject.

    `id` is the Wikidata id. `sources` maps a provider key (wikidata, wikipedia,
    musicbrainz, ...) to that provider's payload; keys are only ever added.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str | None = None
    type: EntityType = "entity"
    identifiers: dict[str, Any] = Field(default_factory=dict)
    sources: dict[str, Any] = Field(default_factory=dict)

    @property
    def thumbnail(self) -> str | None:
        return (self.sources.get("wikipedia") or {}).get("thumbnail")

    def with_sources(self, extra: dict[str, Any]) -> Entity:
        """Return a copy with `extra` merged into `sources`; existing keys win."""
        merged = dict(self.sources)
        for key, payload in extra.items():
            merged.setdefault(key, payload)
        return self.model_copy(update={"sources": merged})


class EnrichmentOutcome(BaseModel):
    """Settled result of one provider enrichment."""

    key: str
    ok: bool
    payload: dict[str, Any] | None = None
    reason: str | None = None

    @property
    def applied(self) -> bool:
        return self.ok and self.payload is not None
