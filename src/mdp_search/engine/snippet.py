"""Snippet extraction and highlighting for matched fields."""

import re

# Total characters of context around the anchoring match (half on each side)
SNIPPET_CONTEXT = 80
SNIPPET_ELLIPSIS = "..."
SNIPPET_HIGHLIGHT = "**"


def _find_anchor(lower_text: str, query_terms: list[str]) -> tuple[int, str] | None:
    """Return (position, term) of the earliest occurrence of any term."""
    best_pos = -1
    best_term = ""
    for term in query_terms:
        pos = lower_text.find(term)
        if pos != -1 and (best_pos == -1 or pos < best_pos):
            best_pos = pos
            best_term = term
    if best_pos == -1:
        return None
    return best_pos, best_term


def highlight(snippet: str, query_terms: list[str]) -> str:
    """Wrap every case-insensitive occurrence of each term in ** markers."""
    for term in query_terms:
        pattern = re.compile(re.escape(term), re.IGNORECASE)
        snippet = pattern.sub(
            lambda m: f"{SNIPPET_HIGHLIGHT}{m.group(0)}{SNIPPET_HIGHLIGHT}", snippet
        )
    return snippet


def generate_snippet(text: str, query_terms: list[str]) -> str | None:
    """
    Build a highlighted excerpt around the first query term found in text.

    The window holds SNIPPET_CONTEXT // 2 characters on each side of the
    match and is snapped to spaces so it does not start or end mid-word.
    The anchoring term itself is never cut.

    Args:
        text: Field text to excerpt
        query_terms: Normalized (lowercase) query terms

    Returns:
        The snippet, or None if no term occurs in text
    """
    anchor = _find_anchor(text.lower(), query_terms)
    if anchor is None:
        return None
    match_pos, match_term = anchor
    match_end = match_pos + len(match_term)

    half_ctx = SNIPPET_CONTEXT // 2
    start = max(0, match_pos - half_ctx)
    end = min(len(text), match_end + half_ctx)

    if start > 0:
        space_idx = text.find(" ", start)
        if space_idx != -1 and space_idx < match_pos:
            start = space_idx + 1
    if end < len(text):
        space_idx = text.rfind(" ", 0, end + 1)
        if space_idx > match_end:
            end = space_idx

    snippet = text[start:end]
    if start > 0:
        snippet = SNIPPET_ELLIPSIS + snippet
    if end < len(text):
        snippet = snippet + SNIPPET_ELLIPSIS

    return highlight(snippet, query_terms)
