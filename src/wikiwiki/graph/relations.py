"""Candidate relation extraction and scoring for graph expansion.

Scores, highest wins for a given node key:
- STRUCTURAL (3): item-valued Wikidata claims on a fixed set of properties
- CONTEXTUAL (2): one of the first ten article links (introduction)
- ASSOCIATIVE (1): any later article link
"""

from __future__ import annotations

import re

from wikiwiki.models import Entity
from wikiwiki.resolution.claims import item_ids
from wikiwiki.tables import CENTURY_TOKENS, LIST_PREFIXES, META_PREFIXES, MONTHS, STRUCTURAL_PROPERTIES

from .models import NodeRef, RelationCandidate

STRUCTURAL = 3
CONTEXTUAL = 2
ASSOCIATIVE = 1

CONTEXTUAL_LINKS = 10
RELATED = "related"

ORIGIN_WIKIDATA = "wikidata"
ORIGIN_WIKIPEDIA = "wikipedia"

_NUMERIC = re.compile(r"^\d+$")


def _table(table: dict[str, tuple[str, ...]], language: str) -> tuple[str, ...]:
    return table.get(language) or table["en"]


def is_link_noise(title: str, language: str = "en") -> bool:
    """True for article links that make poor graph neighbours: years,
    centuries, meta namespaces, list articles and dates."""
    if _NUMERIC.match(title):
        return True
    lowered = title.lower()
    if any(token.lower() in lowered for token in _table(CENTURY_TOKENS, language)):
        return True
    if title.startswith(_table(META_PREFIXES, language)):
        return True
    if title.startswith(_table(LIST_PREFIXES, language)):
        return True
    return any(month in lowered for month in _table(MONTHS, language))


def structural_candidates(entity: Entity) -> list[RelationCandidate]:
    record = entity.sources.get("wikidata") or {}
    out = []
    for prop, rel_type in STRUCTURAL_PROPERTIES.items():
        for qid in item_ids(record, prop):
            out.append(
                RelationCandidate(
                    ref=NodeRef.canonical(qid),
                    # placeholder until the label pass
                    label=qid,
                    type=rel_type,
                    score=STRUCTURAL,
                    origin=ORIGIN_WIKIDATA,
                )
            )
    return out


def textual_candidates(entity: Entity, language: str = "en") -> list[RelationCandidate]:
    links = (entity.sources.get("wikipedia") or {}).get("links") or []
    out = []
    for index, title in enumerate(links):
        if not title or is_link_noise(title, language):
            continue
        out.append(
            RelationCandidate(
                ref=NodeRef.textual(title),
                label=title,
                type=RELATED,
                score=CONTEXTUAL if index < CONTEXTUAL_LINKS else ASSOCIATIVE,
                origin=ORIGIN_WIKIPEDIA,
            )
        )
    return out


def merge_candidates(candidates: list[RelationCandidate]) -> list[RelationCandidate]:
    """One candidate per node key, keeping the highest score, sorted by
    descending score (stable otherwise)."""
    by_key: dict[str, RelationCandidate] = {}
    for cand in candidates:
        current = by_key.get(cand.ref.key)
        if current is None or cand.score > current.score:
            by_key[cand.ref.key] = cand
    return sorted(by_key.values(), key=lambda c: c.score, reverse=True)


def extract_candidates(entity: Entity, language: str = "en") -> list[RelationCandidate]:
    return merge_candidates(structural_candidates(entity) + textual_candidates(entity, language))
