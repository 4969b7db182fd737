"""Breadth-first relation graph around a resolved entity."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Awaitable, Callable

from wikiwiki.clients import WikidataClient
from wikiwiki.errors import BatchLookupFailure
from wikiwiki.language import LanguageContext, default_context
from wikiwiki.models import Entity
from wikiwiki.settings import settings

from .models import Edge, Graph, Node, NodeRef
from .relations import CONTEXTUAL, extract_candidates

logger = logging.getLogger(__name__)

DEFAULT_MAX_NODES_PER_LEVEL = 20

# Resolves a freshly placed node into an entity so it can be expanded in turn.
Expander = Callable[[Node], Awaitable[Entity | None]]


class GraphBuilder:
    """Builds a fresh :class:`Graph` per call; keeps no state between builds.

    Without an `expander` only the center entity carries relation data, so the
    graph stops at level 1 whatever the depth.
    """

    def __init__(
        self,
        wikidata: WikidataClient | None = None,
        language: LanguageContext | None = None,
        expander: Expander | None = None,
    ):
        self.wikidata = wikidata or WikidataClient()
        self.language = language or default_context
        self.expander = expander

    async def aclose(self):
        await self.wikidata.aclose()

    async def build_graph(
        self,
        entity: Entity,
        depth: int = 1,
        max_nodes_per_level: int = DEFAULT_MAX_NODES_PER_LEVEL,
        min_score: int = CONTEXTUAL,
    ) -> Graph:
        if depth < 0:
            raise ValueError("depth must be >= 0")
        if max_nodes_per_level < 0:
            raise ValueError("max_nodes_per_level must be >= 0")

        language = self.language.get()
        graph = Graph()
        center_ref = NodeRef.canonical(entity.id)
        graph.nodes.append(
            Node(
                ref=center_ref,
                label=entity.name,
                type=entity.type,
                level=0,
                is_center=True,
                description=entity.description,
                thumbnail=entity.thumbnail,
            )
        )

        visited: set[str] = {center_ref.key}
        created_per_level: dict[int, int] = {}
        queue: deque[tuple[Entity, int]] = deque([(entity, 0)])

        while queue:
            current, level = queue.popleft()
            if level >= depth:
                continue

            source = NodeRef.canonical(current.id).key
            kept = [c for c in extract_candidates(current, language) if c.score >= min_score]
            for cand in kept[:max_nodes_per_level]:
                target = cand.ref.key
                if target == source:
                    continue
                edge = Edge(source=source, target=target, type=cand.type, origin=cand.origin, value=cand.score)

                if target in visited:
                    graph.edges.append(edge)
                    continue
                if created_per_level.get(level + 1, 0) >= max_nodes_per_level:
                    continue

                visited.add(target)
                created_per_level[level + 1] = created_per_level.get(level + 1, 0) + 1
                node = Node(ref=cand.ref, label=cand.label, type=cand.type, level=level + 1, score=cand.score)
                graph.nodes.append(node)
                graph.edges.append(edge)

                if self.expander is not None and level + 1 < depth:
                    expanded = await self._expand(node)
                    if expanded is not None:
                        queue.append((expanded, level + 1))

        await self.resolve_labels(graph, language)
        logger.info(f"Graph built: {len(graph.nodes)} nodes, {len(graph.edges)} edges")
        return graph

    async def _expand(self, node: Node) -> Entity | None:
        try:
            return await self.expander(node)
        except Exception as e:
            logger.warning(f"Could not expand {node.id}: {e}")
            return None

    async def resolve_labels(self, graph: Graph, language: str) -> None:
        """Replace placeholder labels of Wikidata nodes with localized labels.

        One batched lookup; on failure the raw ids stay as labels.
        """
        qids = [n.ref.value for n in graph.nodes if n.ref.kind == "canonical"]
        if not qids:
            return
        try:
            labels = await self.wikidata.labels(qids, language)
        except Exception as e:
            logger.warning(str(BatchLookupFailure(f"label lookup for {len(qids)} ids failed: {e}")))
            return
        for node in graph.nodes:
            if node.ref.kind == "canonical" and node.ref.value in labels:
                node.label = labels[node.ref.value]


async def resolve_connected_entities(
    search_terms: list[str],
    resolver,
    chunk_size: int | None = None,
    pause: float | None = None,
) -> list[Entity]:
    """Resolve many queries, `chunk_size` at a time with a pause between chunks.

    Failures and ambiguous queries are dropped; only entities are returned, in
    input order.
    """
    chunk_size = chunk_size or settings.batch_chunk_size
    pause = settings.batch_pause if pause is None else pause

    entities: list[Entity] = []
    for i in range(0, len(search_terms), chunk_size):
        if i:
            await asyncio.sleep(pause)
        chunk = search_terms[i : i + chunk_size]
        results = await asyncio.gather(*(resolver.resolve(t) for t in chunk), return_exceptions=True)
        for term, result in zip(chunk, results):
            if isinstance(result, Entity):
                entities.append(result)
            elif isinstance(result, Exception):
                logger.warning(f"Could not resolve '{term}': {result}")
    return entities


def resolver_expander(resolver) -> Expander:
    """Expander that resolves Wikidata nodes by id and article nodes by title.

    Article titles that turn out ambiguous are not expanded.
    """

    async def expand(node: Node) -> Entity | None:
        if node.ref.kind == "canonical":
            return await resolver.resolve_from_candidate(node.label, node.ref.value)
        result = await resolver.resolve(node.ref.value)
        return result if isinstance(result, Entity) else None

    return expand
