"""Tests for the breadth-first graph builder."""

import logging
from unittest.mock import AsyncMock

import pytest

from wikiwiki.graph import GraphBuilder, resolve_connected_entities
from wikiwiki.graph.relations import ASSOCIATIVE, CONTEXTUAL, STRUCTURAL
from wikiwiki.models import Disambiguation, Entity

from conftest import item


def center(claims=None, links=None, **kw):
    sources = {"wikidata": {"claims": claims or {}, "sitelinks": {}}}
    if links is not None:
        sources["wikipedia"] = {"title": "Miles Davis", "thumbnail": "https://t/md.jpg", "links": links}
    base = {"id": "Q93341", "name": "Miles Davis", "type": "person", "description": "trumpeter", "sources": sources}
    base.update(kw)
    return Entity(**base)


@pytest.fixture
def wikidata():
    client = AsyncMock()
    client.labels.return_value = {}
    return client


@pytest.fixture
def builder(wikidata, language):
    return GraphBuilder(wikidata, language)


def assert_graph_invariants(graph):
    ids = [n.id for n in graph.nodes]
    assert len(ids) == len(set(ids))
    assert sum(1 for n in graph.nodes if n.is_center) == 1
    for edge in graph.edges:
        assert edge.source in ids
        assert edge.target in ids


class TestBuildGraph:
    async def test_center_node(self, builder):
        graph = await builder.build_graph(center(links=[]))
        assert len(graph.nodes) == 1
        node = graph.center
        assert node.id == "Q93341"
        assert node.level == 0
        assert node.label == "Miles Davis"
        assert node.thumbnail == "https://t/md.jpg"
        assert graph.edges == []

    async def test_depth_zero_does_not_expand(self, builder):
        graph = await builder.build_graph(center(links=["Bebop"]), depth=0)
        assert [n.id for n in graph.nodes] == ["Q93341"]

    async def test_three_structural_and_forty_links(self, builder):
        claims = {"P136": [item("Q8341")], "P106": [item("Q639669")], "P800": [item("Q210022")]}
        links = [f"Article {i}" for i in range(40)]
        graph = await builder.build_graph(center(claims=claims, links=links), depth=1, max_nodes_per_level=20)

        assert_graph_invariants(graph)
        new_nodes = [n for n in graph.nodes if not n.is_center]
        assert len(new_nodes) <= 20
        structural = [n for n in new_nodes if n.score == STRUCTURAL]
        assert {n.id for n in structural} == {"Q8341", "Q639669", "Q210022"}
        contextual = [n for n in new_nodes if n.score == CONTEXTUAL]
        assert len(contextual) == 10
        # associative links fall below the threshold
        assert not [n for n in new_nodes if n.score == ASSOCIATIVE]
        assert all(n.level == 1 for n in new_nodes)
        for edge in graph.edges:
            assert edge.source == "Q93341"
            assert edge.value == graph.node(edge.target).score

    async def test_lower_threshold_admits_associative_links(self, builder):
        links = [f"Article {i}" for i in range(40)]
        graph = await builder.build_graph(center(links=links), max_nodes_per_level=20, min_score=1)
        new_nodes = [n for n in graph.nodes if not n.is_center]
        assert len(new_nodes) == 20
        assert sum(1 for n in new_nodes if n.score == ASSOCIATIVE) == 10

    async def test_breadth_cap(self, builder):
        claims = {"P106": [item(f"Q{i}") for i in range(100, 130)]}
        graph = await builder.build_graph(center(claims=claims), max_nodes_per_level=5)
        assert len([n for n in graph.nodes if n.level == 1]) == 5
        assert_graph_invariants(graph)

    async def test_noise_links_never_become_nodes(self, builder):
        graph = await builder.build_graph(center(links=["1959", "20th century", "Bebop"]))
        labels = {n.label for n in graph.nodes}
        assert "1959" not in labels
        assert "20th century" not in labels
        assert "Bebop" in labels

    async def test_edges_carry_origin_and_type(self, builder):
        graph = await builder.build_graph(center(claims={"P136": [item("Q8341")]}, links=["Bebop"]))
        by_target = {e.target: e for e in graph.edges}
        assert by_target["Q8341"].origin == "wikidata"
        assert by_target["Q8341"].type == "genre"
        assert by_target["wiki:Bebop"].origin == "wikipedia"
        assert by_target["wiki:Bebop"].type == "related"

    async def test_self_reference_adds_nothing(self, builder):
        graph = await builder.build_graph(center(claims={"P279": [item("Q93341")]}))
        assert len(graph.nodes) == 1
        assert graph.edges == []

    async def test_labels_resolved_in_current_language(self, builder, wikidata, language):
        language.set("fr")
        wikidata.labels.return_value = {"Q8341": "jazz", "Q93341": "Miles Davis"}
        graph = await builder.build_graph(center(claims={"P136": [item("Q8341")]}, links=["Bebop"]))
        wikidata.labels.assert_awaited_once()
        qids, lang = wikidata.labels.await_args.args
        assert sorted(qids) == ["Q8341", "Q93341"]
        assert lang == "fr"
        assert graph.node("Q8341").label == "jazz"
        assert graph.node("wiki:Bebop").label == "Bebop"

    async def test_label_lookup_failure_keeps_placeholders(self, builder, wikidata, caplog):
        wikidata.labels.side_effect = RuntimeError("wikidata down")
        with caplog.at_level(logging.WARNING):
            graph = await builder.build_graph(center(claims={"P136": [item("Q8341")]}))
        assert graph.node("Q8341").label == "Q8341"
        assert "label lookup" in caplog.text

    async def test_wire_form(self, builder):
        graph = await builder.build_graph(center(links=["Bebop"]))
        data = graph.to_dict()
        assert data["nodes"][0]["isCenter"] is True
        assert data["nodes"][1] == {"id": "wiki:Bebop", "label": "Bebop", "type": "related", "level": 1, "isCenter": False, "score": 2}
        assert data["edges"] == [{"source": "Q93341", "target": "wiki:Bebop", "type": "related", "origin": "wikipedia", "value": 2}]

    async def test_builds_are_independent(self, builder):
        first = await builder.build_graph(center(links=["Bebop"]))
        second = await builder.build_graph(center(links=["Bebop"]))
        assert first is not second
        assert first.to_dict() == second.to_dict()


class TestExpansion:
    async def test_depth_two_expands_through_expander(self, wikidata, language):
        neighbour = Entity(
            id="Q8341",
            name="Jazz",
            type="concept",
            sources={"wikidata": {"claims": {"P279": [item("Q9730")]}}, "wikipedia": {"links": ["Miles Davis"]}},
        )
        expander = AsyncMock(return_value=neighbour)
        builder = GraphBuilder(wikidata, language, expander=expander)

        graph = await builder.build_graph(center(claims={"P136": [item("Q8341")]}), depth=2)

        assert_graph_invariants(graph)
        assert graph.node("Q9730").level == 2
        assert graph.node("wiki:Miles Davis").level == 2
        assert expander.await_count == 1

    async def test_level_cap_spans_all_parents(self, wikidata, language):
        def neighbour(qid, start):
            claims = {"P106": [item(f"Q{i}") for i in range(start, start + 10)]}
            return Entity(id=qid, name=qid, sources={"wikidata": {"claims": claims}})

        expander = AsyncMock(side_effect=[neighbour("Q1", 1000), neighbour("Q2", 2000)])
        builder = GraphBuilder(wikidata, language, expander=expander)
        graph = await builder.build_graph(
            center(claims={"P106": [item("Q1"), item("Q2")]}), depth=2, max_nodes_per_level=12
        )
        assert len([n for n in graph.nodes if n.level == 2]) == 12

    async def test_expander_failure_is_skipped(self, wikidata, language):
        builder = GraphBuilder(wikidata, language, expander=AsyncMock(side_effect=RuntimeError("boom")))
        graph = await builder.build_graph(center(claims={"P136": [item("Q8341")]}), depth=2)
        assert [n.id for n in graph.nodes] == ["Q93341", "Q8341"]


async def test_resolve_connected_entities_chunks_and_filters(monkeypatch):
    sleeps = []

    async def fake_sleep(seconds):
        sleeps.append(seconds)

    monkeypatch.setattr("wikiwiki.graph.builder.asyncio.sleep", fake_sleep)

    async def resolve(term):
        if term == "bad":
            raise RuntimeError("nope")
        if term == "ambiguous":
            return Disambiguation(candidates=[])
        return Entity(id=f"Q-{term}", name=term)

    resolver = AsyncMock()
    resolver.resolve.side_effect = resolve

    entities = await resolve_connected_entities(
        ["a", "bad", "b", "ambiguous", "c"], resolver, chunk_size=2, pause=1.0
    )
    assert [e.name for e in entities] == ["a", "b", "c"]
    assert sleeps == [1.0, 1.0]
