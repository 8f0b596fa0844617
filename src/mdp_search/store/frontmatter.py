"""Parser for YAML front matter and safe field extraction."""

import re
from dataclasses import dataclass, field
from typing import Any

import yaml

from mdp_search.errors import parse_error

FRONTMATTER_PATTERN = re.compile(r"\A---\r?\n(.*?)\r?\n---\r?\n?(.*)\Z", re.DOTALL)


@dataclass
class ParsedMarkdown:
    """Front matter mapping plus the markdown body."""

    frontmatter: dict[str, Any] = field(default_factory=dict)
    content: str = ""


def parse_markdown(raw: str, file_path: str = "<string>") -> ParsedMarkdown:
    """
    Split a markdown file into front matter and body.

    Args:
        raw: Full file content
        file_path: Path used in error messages

    Returns:
        ParsedMarkdown; files without front matter keep the raw text as body

    Raises:
        MdpError: If the front matter is not valid YAML
    """
    match = FRONTMATTER_PATTERN.match(raw)
    if not match:
        return ParsedMarkdown(frontmatter={}, content=raw)

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise parse_error(file_path, str(e)) from e

    content = match.group(2)
    if content.startswith("\n"):
        content = content[1:]

    return ParsedMarkdown(frontmatter=data if isinstance(data, dict) else {}, content=content)


def get_string(obj: dict[str, Any], key: str) -> str | None:
    val = obj.get(key)
    if val is None:
        return None
    return val if isinstance(val, str) else str(val)


def get_number(obj: dict[str, Any], key: str) -> float | None:
    val = obj.get(key)
    if isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        return val
    if isinstance(val, str):
        try:
            return float(val)
        except ValueError:
            return None
    return None


def get_string_array(obj: dict[str, Any], key: str) -> list[str]:
    val = obj.get(key)
    if isinstance(val, list):
        return [str(v) for v in val]
    return []


def _mappings(obj: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """List items under key that are mappings; anything else is skipped."""
    val = obj.get(key)
    if not isinstance(val, list):
        return []
    return [item for item in val if isinstance(item, dict)]


def _text(item: dict[str, Any], key: str) -> str:
    """String value of key; missing or null (`key:` with no value) is empty."""
    val = item.get(key)
    return "" if val is None else str(val)


def get_checklist(obj: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Checklist items as {text, done} dicts."""
    return [
        {"text": _text(item, "text"), "done": item.get("done") is True}
        for item in _mappings(obj, key)
    ]


def get_log_entries(obj: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Log entries as {timestamp, author, body[, health]} dicts."""
    entries = []
    for item in _mappings(obj, key):
        entry = {
            "timestamp": _text(item, "timestamp"),
            "author": _text(item, "author"),
            "body": _text(item, "body"),
        }
        if isinstance(item.get("health"), str):
            entry["health"] = item["health"]
        entries.append(entry)
    return entries
