"""Tokenizer and stopword filter shared by documents and queries."""

import re

# Anything outside [a-z0-9] separates tokens (applied after lowercasing)
TOKEN_SPLIT_PATTERN = re.compile(r"[^a-z0-9]+")

STOPWORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "but", "by", "for",
    "from", "had", "has", "have", "he", "her", "his", "how", "i",
    "if", "in", "into", "is", "it", "its", "my", "no", "not", "of",
    "on", "or", "our", "out", "so", "than", "that", "the", "their",
    "them", "then", "there", "these", "they", "this", "to", "up",
    "was", "we", "were", "what", "when", "which", "who", "will",
    "with", "would", "you", "your",
})


def tokenize(text: str) -> list[str]:
    """Split text into lowercase alphanumeric terms.

    Non-ASCII letters count as separators. Empty or whitespace-only input
    yields an empty list.
    """
    return [token for token in TOKEN_SPLIT_PATTERN.split(text.lower()) if token]


def remove_stopwords(tokens: list[str]) -> list[str]:
    """Drop stopwords from query tokens.

    If every token is a stopword, the original tokens are returned so that
    queries like "is this" still match something.
    """
    filtered = [token for token in tokens if token not in STOPWORDS]
    return filtered if filtered else list(tokens)
