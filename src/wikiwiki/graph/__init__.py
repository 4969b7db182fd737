"""Relation graph subsystem.

- Candidate relations scored from Wikidata claims and Wikipedia links
- Breadth-first, per-level capped graph construction
- Batched label resolution for Wikidata nodes
"""

from .builder import GraphBuilder, resolve_connected_entities, resolver_expander
from .models import Edge, Graph, Node, NodeRef
from .relations import extract_candidates, is_link_noise

__all__ = [
    "Edge",
    "Graph",
    "GraphBuilder",
    "Node",
    "NodeRef",
    "extract_candidates",
    "is_link_noise",
    "resolve_connected_entities",
    "resolver_expander",
]
