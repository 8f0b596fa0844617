"""
Search engine for mdp-search.

Tokenizes, scores and ranks an in-memory corpus of issues, milestones and the
project record. Pure and synchronous: no I/O, no state between calls.
"""

from mdp_search.engine.bm25 import FIELD_WEIGHTS, field_weight, search
from mdp_search.engine.models import (
    EntityKind,
    FieldMatch,
    SearchableField,
    SearchDocument,
    SearchField,
    SearchResult,
)
from mdp_search.engine.snippet import generate_snippet
from mdp_search.engine.tokenizer import STOPWORDS, remove_stopwords, tokenize

__all__ = [
    "FIELD_WEIGHTS",
    "STOPWORDS",
    "EntityKind",
    "FieldMatch",
    "SearchDocument",
    "SearchField",
    "SearchResult",
    "SearchableField",
    "field_weight",
    "generate_snippet",
    "remove_stopwords",
    "search",
    "tokenize",
]
