"""Output formatting: JSON envelopes and fixed-width tables."""

import json
import sys
from dataclasses import dataclass
from typing import IO, Any

from mdp_search.errors import MdpError


@dataclass
class TableColumn:
    key: str
    header: str
    width: int | None = None
    align: str = "left"  # left or right


SEARCH_TABLE_COLUMNS = [
    TableColumn("entity", "TYPE", 10),
    TableColumn("id", "ID", 8),
    TableColumn("title", "TITLE", 35),
    TableColumn("status", "STATUS", 12),
    TableColumn("score", "SCORE", 6, align="right"),
    TableColumn("matchedFields", "MATCHED IN", 20),
]


def success(data: Any, warnings: list[str] | None = None) -> dict[str, Any]:
    envelope: dict[str, Any] = {"ok": True, "data": data}
    if warnings:
        envelope["warnings"] = warnings
    return envelope


def error_envelope(code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    return {"ok": False, "error": {"code": code, "message": message, "details": details or {}}}


def error_to_envelope(err: BaseException) -> dict[str, Any]:
    """Map any exception to an error envelope; non-domain errors become UNKNOWN_ERROR."""
    if isinstance(err, MdpError):
        return error_envelope(err.code, err.message, err.details)
    return error_envelope("UNKNOWN_ERROR", str(err))


def _pad(text: str, width: int, align: str) -> str:
    if len(text) >= width:
        return text[:width]
    return text.rjust(width) if align == "right" else text.ljust(width)


def format_table(rows: list[dict[str, Any]], columns: list[TableColumn]) -> str:
    """Render rows as aligned columns under a header and separator line."""
    if not rows:
        return "(no results)"

    widths = []
    for col in columns:
        if col.width is not None:
            widths.append(col.width)
        else:
            max_data = max(len(_cell(row.get(col.key))) for row in rows)
            widths.append(max(len(col.header), max_data))

    header = "  ".join(_pad(col.header, w, col.align) for col, w in zip(columns, widths))
    separator = "──".join("─" * w for w in widths)
    lines = [
        "  ".join(
            _pad(_cell(row.get(col.key)), w, col.align) for col, w in zip(columns, widths)
        )
        for row in rows
    ]
    return "\n".join([header, separator, *lines])


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def search_rows(results: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten search results for SEARCH_TABLE_COLUMNS."""
    return [
        {
            "entity": r["entity"],
            "id": r["id"],
            "title": r["title"],
            "status": r["status"],
            "score": r["score"],
            "matchedFields": ", ".join(m["field"] for m in r["matches"]),
        }
        for r in results
    ]


def print_search_payload(payload: dict[str, Any], output_format: str, stream: IO[str] | None = None) -> None:
    """Write a search payload as a JSON envelope or as a table."""
    stream = stream or sys.stdout
    if output_format == "table":
        stream.write(format_table(search_rows(payload["results"]), SEARCH_TABLE_COLUMNS) + "\n")
        stream.write(f'\nQuery: "{payload["query"]}" - {payload["total"]} result(s)\n')
    else:
        stream.write(json.dumps(success(payload), indent=2, ensure_ascii=False) + "\n")


def print_error(err: BaseException, stream: IO[str] | None = None) -> None:
    stream = stream or sys.stderr
    stream.write(json.dumps(error_to_envelope(err), indent=2, ensure_ascii=False) + "\n")
