"""Field-weighted BM25 ranking over an in-memory corpus.

The corpus is rebuilt on every call: term statistics come from exactly the
documents passed in and nothing is cached between calls.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass

from mdp_search.engine.models import FieldMatch, SearchDocument, SearchableField, SearchResult
from mdp_search.engine.snippet import generate_snippet
from mdp_search.engine.tokenizer import remove_stopwords, tokenize

logger = logging.getLogger(__name__)

# BM25 parameters
K1 = 1.5
B = 0.75

DEFAULT_LIMIT = 20

FIELD_WEIGHTS: dict[SearchableField, float] = {
    SearchableField.TITLE: 3.0,
    SearchableField.LOG: 1.5,
    SearchableField.CONTENT: 1.0,
    SearchableField.CHECKLIST: 1.0,
}
DEFAULT_FIELD_WEIGHT = 1.0


@dataclass
class _DocStats:
    """Per-document term counts, one Counter per field in field order."""

    total_tokens: int
    field_counts: list[Counter]


def field_weight(name: str) -> float:
    """Return the weight for a field name, 1.0 for names outside the table."""
    try:
        return FIELD_WEIGHTS[SearchableField(name)]
    except (ValueError, KeyError):
        return DEFAULT_FIELD_WEIGHT


def idf(doc_count: int, doc_freq: int) -> float:
    """Smoothed inverse document frequency, never negative."""
    return math.log((doc_count - doc_freq + 0.5) / (doc_freq + 0.5) + 1)


def tf_norm(tf: int, doc_len: int, avg_doc_len: float) -> float:
    """Saturated term frequency with document length normalization."""
    length_ratio = doc_len / avg_doc_len if avg_doc_len else 0.0
    return (tf * (K1 + 1)) / (tf + K1 * (1 - B + B * length_ratio))


def round_score(score: float) -> float:
    """Round to two decimals, halves up."""
    return math.floor(score * 100 + 0.5) / 100


def _collect_stats(
    documents: list[SearchDocument], query_terms: list[str]
) -> tuple[list[_DocStats], Counter, int]:
    """Tokenize every field and gather corpus statistics.

    Returns:
        Tuple of (per-document stats, document frequency per query term,
        total token count across the corpus)
    """
    doc_stats: list[_DocStats] = []
    doc_freq: Counter = Counter()
    total_length = 0
    unique_terms = set(query_terms)

    for doc in documents:
        field_counts = [Counter(tokenize(f.text)) for f in doc.fields]
        total_tokens = sum(sum(counts.values()) for counts in field_counts)

        seen = {term for term in unique_terms if any(term in counts for counts in field_counts)}
        doc_freq.update(seen)

        total_length += total_tokens
        doc_stats.append(_DocStats(total_tokens=total_tokens, field_counts=field_counts))

    return doc_stats, doc_freq, total_length


def search(
    documents: list[SearchDocument],
    query: str,
    limit: int = DEFAULT_LIMIT,
) -> list[SearchResult]:
    """
    Rank documents against a free-text query.

    Each field's BM25 score is multiplied by its weight and summed into the
    document score. Fields that score also get a highlighted snippet.
    Documents scoring zero are dropped; the rest are sorted by descending
    score (ties keep input order) and cut to `limit`.

    Args:
        documents: Corpus to search, one document per entity
        query: Free-text query
        limit: Maximum number of results (validated by the caller)

    Returns:
        Ranked list of SearchResult
    """
    raw_terms = tokenize(query)
    if not raw_terms:
        return []

    query_terms = remove_stopwords(raw_terms)

    doc_count = len(documents)
    if doc_count == 0:
        return []

    doc_stats, doc_freq, total_length = _collect_stats(documents, query_terms)
    avg_doc_len = total_length / doc_count

    results: list[SearchResult] = []
    for doc, stats in zip(documents, doc_stats):
        total_score = 0.0
        matches: list[FieldMatch] = []

        for search_field, counts in zip(doc.fields, stats.field_counts):
            field_score = 0.0
            for term in query_terms:
                tf = counts.get(term, 0)
                if tf == 0:
                    continue
                field_score += idf(doc_count, doc_freq[term]) * tf_norm(
                    tf, stats.total_tokens, avg_doc_len
                )

            if field_score > 0:
                total_score += field_score * field_weight(search_field.name)
                snippet = generate_snippet(search_field.text, query_terms)
                if snippet:
                    matches.append(FieldMatch(field=search_field.name.value, snippet=snippet))

        if total_score > 0:
            results.append(
                SearchResult(
                    entity=doc.entity,
                    id=doc.id,
                    title=doc.title,
                    status=doc.status,
                    score=round_score(total_score),
                    matches=matches,
                )
            )

    # list.sort is stable, so equal scores keep document order
    results.sort(key=lambda r: r.score, reverse=True)

    logger.debug(
        "BM25 search: %d documents, terms=%s, %d hits",
        doc_count,
        query_terms,
        len(results),
    )
    return results[:limit]
