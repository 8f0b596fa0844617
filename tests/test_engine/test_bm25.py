"""Tests for BM25 ranking."""

import math

import pytest

from mdp_search.engine.bm25 import (
    FIELD_WEIGHTS,
    field_weight,
    idf,
    round_score,
    search,
    tf_norm,
)
from mdp_search.engine.models import EntityKind, SearchableField, SearchDocument, SearchField


def make_doc(
    doc_id: str,
    title: str,
    content: str,
    log: str | None = None,
    checklist: str | None = None,
    entity: str = "issue",
) -> SearchDocument:
    fields = [SearchField("title", title), SearchField("content", content)]
    if log:
        fields.append(SearchField("log", log))
    if checklist:
        fields.append(SearchField("checklist", checklist))
    return SearchDocument(id=doc_id, entity=entity, title=title, status="Open", fields=fields)


class TestFieldWeights:
    def test_fixed_weights(self):
        assert FIELD_WEIGHTS[SearchableField.TITLE] == 3.0
        assert FIELD_WEIGHTS[SearchableField.LOG] == 1.5
        assert FIELD_WEIGHTS[SearchableField.CONTENT] == 1.0
        assert FIELD_WEIGHTS[SearchableField.CHECKLIST] == 1.0

    def test_field_weight_lookup(self):
        assert field_weight("title") == 3.0
        assert field_weight(SearchableField.LOG) == 1.5

    def test_unknown_field_defaults_to_one(self):
        assert field_weight("notes") == 1.0


class TestFormulas:
    def test_idf_is_non_negative_when_term_in_every_document(self):
        assert idf(3, 3) > 0
        assert idf(1, 1) == pytest.approx(math.log(4 / 3))

    def test_rarer_terms_have_higher_idf(self):
        assert idf(10, 1) > idf(10, 5)

    def test_round_score_rounds_halves_up(self):
        assert round_score(0.125) == 0.13
        assert round_score(0.375) == 0.38
        assert round_score(1.114) == 1.11
        assert round_score(2.0) == 2.0

    def test_tf_norm_at_average_length(self):
        assert tf_norm(1, 10, 10.0) == pytest.approx(1.0)

    def test_tf_norm_saturates(self):
        assert tf_norm(100, 10, 10.0) < 1.5 + 1


class TestRelevanceRanking:
    def test_ranks_title_match_above_content_only_match(self):
        docs = [
            make_doc("ISS-1", "Fix login bug", "Users cannot login due to caching issue"),
            make_doc("ISS-2", "Implement caching layer", "Add Redis for performance"),
        ]

        results = search(docs, "caching")
        assert [r.id for r in results] == ["ISS-2", "ISS-1"]
        assert results[0].score > results[1].score

    def test_ranks_documents_with_multiple_term_matches_higher(self):
        docs = [
            make_doc("ISS-1", "API endpoints", "The REST API returns user data"),
            make_doc("ISS-2", "Database schema", "Schema for the user table"),
            make_doc("ISS-3", "API documentation", "Document all REST API endpoints for users"),
        ]

        results = search(docs, "API endpoints")
        assert results[0].id == "ISS-1"

    def test_case_insensitive_matching(self):
        docs = [make_doc("ISS-1", "Redis CACHING", "Performance improvement")]

        results = search(docs, "redis caching")
        assert len(results) == 1
        assert results[0].id == "ISS-1"

    def test_exact_score_for_single_document(self):
        # N=1, df=1 -> idf=ln(4/3); doc length equals the average -> tf_norm=1
        docs = [make_doc("ISS-1", "Redis CACHING", "Performance improvement")]

        results = search(docs, "redis caching")
        assert results[0].score == round(2 * math.log(4 / 3) * 3.0, 2)

    def test_log_match_outweighs_content_match(self):
        docs = [
            make_doc("ISS-1", "One", "deadlock found"),
            make_doc("ISS-2", "Two", "nothing", log="deadlock found"),
        ]

        results = search(docs, "deadlock")
        assert [r.id for r in results] == ["ISS-2", "ISS-1"]

    def test_scores_add_up_across_fields(self):
        docs = [
            make_doc("ISS-1", "Caching", "Unrelated words here"),
            make_doc("ISS-2", "Caching", "More caching here"),
        ]

        results = search(docs, "caching")
        assert results[0].id == "ISS-2"

    def test_stopwords_ignored_in_mixed_query(self):
        docs = [
            make_doc("ISS-1", "The plan", "the the the"),
            make_doc("ISS-2", "Caching", "Redis"),
        ]

        results = search(docs, "the caching")
        assert [r.id for r in results] == ["ISS-2"]

    def test_repeated_query_terms_count_each_time(self):
        docs = [make_doc("ISS-1", "Caching layer", "Redis"), make_doc("ISS-2", "Other", "x")]

        single = search(docs, "caching")[0].score
        double = search(docs, "caching caching")[0].score
        assert double > single

    def test_entity_and_display_fields_carried_through(self):
        docs = [make_doc("M-1", "Beta launch", "Ship beta", entity="milestone")]

        result = search(docs, "beta")[0]
        assert result.entity == EntityKind.MILESTONE
        assert result.title == "Beta launch"
        assert result.status == "Open"


class TestTieBreaking:
    def test_equal_scores_keep_input_order(self):
        docs = [
            make_doc("ISS-9", "Caching", "same"),
            make_doc("ISS-1", "Caching", "same"),
            make_doc("ISS-5", "Caching", "same"),
        ]

        results = search(docs, "caching")
        assert [r.id for r in results] == ["ISS-9", "ISS-1", "ISS-5"]


class TestLimit:
    def test_respects_limit(self):
        docs = [
            make_doc(f"ISS-{i + 1}", f"Issue about caching {i}", "caching " * (i + 1))
            for i in range(10)
        ]

        results = search(docs, "caching", 3)
        assert len(results) == 3
        assert results == search(docs, "caching")[:3]

    def test_returns_fewer_results_if_fewer_match(self):
        docs = [
            make_doc("ISS-1", "Caching layer", "Redis caching"),
            make_doc("ISS-2", "Unrelated thing", "Nothing here"),
        ]

        assert len(search(docs, "caching", 10)) == 1

    def test_default_limit_is_twenty(self):
        docs = [make_doc(f"ISS-{i}", "Caching", "x") for i in range(25)]
        assert len(search(docs, "caching")) == 20


class TestEdgeCases:
    def test_empty_query(self):
        docs = [make_doc("ISS-1", "Something", "Content")]
        assert search(docs, "") == []
        assert search(docs, "   ") == []

    def test_punctuation_only_query(self):
        docs = [make_doc("ISS-1", "Something", "Content")]
        assert search(docs, "?!-") == []

    def test_no_documents_match(self):
        docs = [make_doc("ISS-1", "Hello world", "Greetings")]
        assert search(docs, "caching") == []

    def test_empty_document_set(self):
        assert search([], "caching") == []

    def test_falls_back_to_raw_terms_when_query_is_all_stopwords(self):
        docs = [
            make_doc("ISS-1", "What is this", "This is a test"),
            make_doc("ISS-2", "Caching", "Redis"),
        ]

        results = search(docs, "is this")
        assert [r.id for r in results] == ["ISS-1"]

    def test_empty_field_text_contributes_nothing(self):
        doc = SearchDocument(
            id="ISS-1",
            entity="issue",
            title="Caching",
            status="Open",
            fields=[SearchField("title", "Caching"), SearchField("content", "")],
        )

        results = search([doc], "caching")
        assert [m.field for m in results[0].matches] == ["title"]

    def test_document_without_fields_never_matches(self):
        empty = SearchDocument(id="ISS-1", entity="issue", title="Caching", status="Open")
        assert search([empty], "caching") == []


class TestMatches:
    def test_matches_cover_title_and_content(self):
        docs = [make_doc("ISS-1", "Implement caching layer", "Redis caching for speed")]

        matches = search(docs, "caching")[0].matches
        assert [m.field for m in matches] == ["title", "content"]
        assert all("**caching**" in m.snippet for m in matches)

    def test_matches_follow_document_field_order(self):
        doc = SearchDocument(
            id="ISS-1",
            entity="issue",
            title="t",
            status="Open",
            fields=[
                SearchField("checklist", "write caching tests"),
                SearchField("title", "Caching"),
            ],
        )

        matches = search([doc], "caching")[0].matches
        assert [m.field for m in matches] == ["checklist", "title"]

    def test_non_matching_fields_are_not_reported(self):
        docs = [make_doc("ISS-1", "Caching", "nothing relevant", log="also nothing")]

        matches = search(docs, "caching")[0].matches
        assert [m.field for m in matches] == ["title"]


class TestDeterminism:
    def test_scores_rounded_to_two_decimals(self):
        docs = [
            make_doc("ISS-1", "Fix login bug", "Users cannot login due to caching issue"),
            make_doc("ISS-2", "Implement caching layer", "Add Redis for performance"),
            make_doc("ISS-3", "Caching caching", "caching", log="cache caching"),
        ]

        for result in search(docs, "caching login"):
            assert round(result.score, 2) == result.score
            assert len(repr(result.score).split(".")[-1]) <= 2

    def test_idempotent(self):
        docs = [
            make_doc("ISS-1", "Fix login bug", "Users cannot login due to caching issue"),
            make_doc("ISS-2", "Implement caching layer", "Add Redis for performance"),
        ]

        assert search(docs, "caching login") == search(docs, "caching login")

    def test_statistics_depend_only_on_given_documents(self):
        base = [make_doc("ISS-1", "Caching", "x")]
        bigger = base + [make_doc("ISS-2", "Other", "y"), make_doc("ISS-3", "Other", "z")]

        search(bigger, "caching")
        first = search(base, "caching")
        assert first == search(base, "caching")
        assert first[0].score != search(bigger, "caching")[0].score

    def test_input_documents_not_mutated(self):
        docs = [make_doc("ISS-1", "Caching", "Redis")]
        before = [(d.id, list(d.fields)) for d in docs]

        search(docs, "caching")
        assert [(d.id, list(d.fields)) for d in docs] == before
