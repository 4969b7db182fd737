from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

TEXTUAL_PREFIX = "wiki:"


@dataclass(frozen=True, slots=True)
class NodeRef:
    """Graph node identity: a Wikidata id or a Wikipedia article title.

    `key` is the string form used as node/edge id; article titles are
    namespaced so they never collide with Wikidata ids.
    """

    kind: Literal["canonical", "textual"]
    value: str

    @classmethod
    def canonical(cls, qid: str) -> NodeRef:
        return cls("canonical", qid)

    @classmethod
    def textual(cls, title: str) -> NodeRef:
        return cls("textual", title)

    @property
    def key(self) -> str:
        if self.kind == "textual":
            return f"{TEXTUAL_PREFIX}{self.value}"
        return self.value


@dataclass(frozen=True, slots=True)
class RelationCandidate:
    """A scored, not-yet-placed neighbour of the entity being expanded."""

    ref: NodeRef
    label: str
    type: str
    score: int
    origin: str


@dataclass(slots=True)
class Node:
    ref: NodeRef
    label: str
    type: str
    level: int
    is_center: bool = False
    score: int | None = None
    description: str | None = None
    thumbnail: str | None = None

    @property
    def id(self) -> str:
        return self.ref.key

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "type": self.type,
            "level": self.level,
            "isCenter": self.is_center,
        }
        if self.score is not None:
            d["score"] = self.score
        if self.description is not None:
            d["description"] = self.description
        if self.thumbnail is not None:
            d["thumbnail"] = self.thumbnail
        return d


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed, scored edge. `origin` is the provider that produced it."""

    source: str
    target: str
    type: str
    origin: str
    value: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "type": self.type,
            "origin": self.origin,
            "value": self.value,
        }


@dataclass(slots=True)
class Graph:
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    def node(self, node_id: str) -> Node | None:
        return next((n for n in self.nodes if n.id == node_id), None)

    @property
    def center(self) -> Node | None:
        return next((n for n in self.nodes if n.is_center), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
