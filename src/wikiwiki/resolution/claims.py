"""Readers over raw Wikidata entity JSON."""

from __future__ import annotations

from typing import Any, Iterator

from pydantic import ValidationError

from wikiwiki.models import Coordinates
from wikiwiki.tables import COORDINATES, IDENTIFIER_PROPERTIES, INSTANCE_OF, TYPE_BY_INSTANCE


def claim_values(record: dict, prop: str) -> Iterator[Any]:
    """Datavalue payloads of `prop` claims, in statement order. Novalue/somevalue snaks are skipped."""
    for claim in (record.get("claims") or {}).get(prop) or []:
        value = ((claim.get("mainsnak") or {}).get("datavalue") or {}).get("value")
        if value is not None:
            yield value


def first_claim_value(record: dict, prop: str) -> Any:
    return next(claim_values(record, prop), None)


def item_ids(record: dict, prop: str) -> list[str]:
    """Item ids (Q…) referenced by `prop` claims."""
    return [v["id"] for v in claim_values(record, prop) if isinstance(v, dict) and v.get("id")]


def localized(record: dict, field: str, language: str) -> str | None:
    """`labels`/`descriptions` value in `language`, falling back to English."""
    values = record.get(field) or {}
    entry = values.get(language) or values.get("en") or {}
    return entry.get("value")


def infer_type(record: dict) -> str:
    """Coarse type from the first "instance of" claim; "entity" when unknown."""
    value = first_claim_value(record, INSTANCE_OF)
    if not isinstance(value, dict):
        return "entity"
    return TYPE_BY_INSTANCE.get(value.get("id"), "entity")


def extract_identifiers(record: dict) -> dict[str, Any]:
    """Foreign keys for known external systems, first claim per property."""
    identifiers: dict[str, Any] = {}
    for prop, key in IDENTIFIER_PROPERTIES.items():
        value = first_claim_value(record, prop)
        if not value:
            continue
        if prop == COORDINATES:
            try:
                identifiers[key] = Coordinates.model_validate(value).model_dump()
            except ValidationError:
                # globe-coordinate without a usable lat/lon pair
                continue
        else:
            identifiers[key] = value
    return identifiers
