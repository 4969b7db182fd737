"""Tests for relation candidate scoring and link noise filtering."""

import pytest

from wikiwiki.graph.models import NodeRef, RelationCandidate
from wikiwiki.graph.relations import (
    ASSOCIATIVE,
    CONTEXTUAL,
    STRUCTURAL,
    extract_candidates,
    is_link_noise,
    merge_candidates,
)
from wikiwiki.models import Entity

from conftest import item, snak


def entity_with(claims=None, links=None):
    sources = {"wikidata": {"claims": claims or {}, "sitelinks": {}}}
    if links is not None:
        sources["wikipedia"] = {"title": "X", "links": links}
    return Entity(id="Q1", name="X", sources=sources)


class TestIsLinkNoise:
    @pytest.mark.parametrize(
        "title",
        ["1959", "20th century", "Help:Contents", "Category:Jazz", "List of jazz musicians", "May 26", "1 January"],
    )
    def test_english_noise(self, title):
        assert is_link_noise(title, "en")

    @pytest.mark.parametrize("title", ["XXe siècle", "Catégorie:Jazz", "Liste des albums", "26 mai", "Fichier:X.jpg"])
    def test_french_noise(self, title):
        assert is_link_noise(title, "fr")

    @pytest.mark.parametrize("title", ["John Coltrane", "Bebop", "Kind of Blue", "Cool jazz"])
    def test_real_articles_kept(self, title):
        assert not is_link_noise(title, "en")

    def test_unknown_language_uses_english_tables(self):
        assert is_link_noise("19th century", "xx")


class TestExtractCandidates:
    def test_structural_claims_score_three(self):
        e = entity_with(claims={"P136": [item("Q8341")], "P106": [item("Q639669"), item("Q855091")]})
        cands = extract_candidates(e)
        assert {c.ref.key for c in cands} == {"Q8341", "Q639669", "Q855091"}
        assert all(c.score == STRUCTURAL and c.origin == "wikidata" for c in cands)
        assert {c.type for c in cands} == {"genre", "occupation"}

    def test_non_item_claims_are_ignored(self):
        e = entity_with(claims={"P101": [snak("free text")]})
        assert extract_candidates(e) == []

    def test_link_position_sets_score(self):
        links = [f"Article {i}" for i in range(15)]
        cands = extract_candidates(entity_with(links=links))
        scores = {c.label: c.score for c in cands}
        assert scores["Article 0"] == CONTEXTUAL
        assert scores["Article 9"] == CONTEXTUAL
        assert scores["Article 10"] == ASSOCIATIVE
        assert all(c.ref.kind == "textual" and c.type == "related" for c in cands)

    def test_noise_removed_before_scoring_keeps_original_positions(self):
        links = ["1959"] * 10 + ["Bebop"]
        cands = extract_candidates(entity_with(links=links))
        assert [(c.label, c.score) for c in cands] == [("Bebop", ASSOCIATIVE)]

    def test_sorted_by_descending_score(self):
        e = entity_with(claims={"P136": [item("Q8341")]}, links=["A"] + [f"B{i}" for i in range(12)])
        scores = [c.score for c in extract_candidates(e)]
        assert scores == sorted(scores, reverse=True)
        assert scores[0] == STRUCTURAL

    def test_textual_ids_never_collide_with_wikidata_ids(self):
        e = entity_with(claims={"P136": [item("Q8341")]}, links=["Q8341"])
        keys = {c.ref.key for c in extract_candidates(e)}
        assert keys == {"Q8341", "wiki:Q8341"}


class TestMergeCandidates:
    def test_structural_score_is_never_downgraded(self):
        ref = NodeRef.canonical("Q8341")
        structural = RelationCandidate(ref, "Q8341", "genre", STRUCTURAL, "wikidata")
        textual = RelationCandidate(ref, "Jazz", "related", CONTEXTUAL, "wikipedia")
        for ordering in ([structural, textual], [textual, structural]):
            merged = merge_candidates(ordering)
            assert len(merged) == 1
            assert merged[0].score == STRUCTURAL
            assert merged[0].origin == "wikidata"
