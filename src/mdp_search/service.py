"""Search service: validates query parameters, loads entities and ranks them.

Shared by the CLI and the MCP tool so both surfaces apply the same rules.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mdp_search import engine
from mdp_search.corpus import ALL_FIELDS, VALID_ENTITIES, build_search_documents, filter_by_status
from mdp_search.engine.bm25 import DEFAULT_LIMIT
from mdp_search.engine.models import SearchableField
from mdp_search.errors import MdpError, invalid_input
from mdp_search.store import (
    Issue,
    Milestone,
    ProjectData,
    read_all_issues,
    read_all_milestones,
    read_project_md,
    resolve_project_path,
)

logger = logging.getLogger(__name__)


@dataclass
class SearchRequest:
    """Validated search parameters."""

    query: str
    entity: str = "all"
    fields: list[SearchableField] = field(default_factory=lambda: list(ALL_FIELDS))
    statuses: list[str] = field(default_factory=list)
    limit: int = DEFAULT_LIMIT


def parse_comma_separated(value: str | None) -> list[str]:
    """Split a comma-separated value, trimming and dropping empty parts."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _as_list(value: str | list[str] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return parse_comma_separated(value)
    return [v.strip() for v in value if v and v.strip()]


def _parse_limit(limit: int | str | None) -> int:
    if limit is None:
        return DEFAULT_LIMIT
    if isinstance(limit, bool):
        raise invalid_input("Limit must be a positive integer", {"limit": limit})
    if isinstance(limit, int):
        value = limit
    else:
        try:
            value = int(str(limit).strip(), 10)
        except ValueError:
            raise invalid_input("Limit must be a positive integer", {"limit": limit}) from None
    if value < 1:
        raise invalid_input("Limit must be a positive integer", {"limit": limit})
    return value


def validate_request(
    query: str,
    entity: str = "all",
    fields: str | list[str] | None = None,
    statuses: str | list[str] | None = None,
    limit: int | str | None = DEFAULT_LIMIT,
) -> SearchRequest:
    """
    Validate raw search parameters.

    Args:
        query: Free-text query, must not be blank
        entity: issues, milestones, project or all
        fields: Field names (list or comma-separated); None means all fields
        statuses: Status pre-filter (list or comma-separated)
        limit: Positive integer, or a string holding one

    Raises:
        MdpError: INVALID_INPUT describing the first bad parameter
    """
    if not query or not query.strip():
        raise invalid_input("Query cannot be empty", {"query": query})

    if entity not in VALID_ENTITIES:
        raise invalid_input(
            f'Invalid entity type "{entity}". Valid values: {", ".join(VALID_ENTITIES)}',
            {"entity": entity},
        )

    field_filter = list(ALL_FIELDS)
    if fields is not None:
        parsed = _as_list(fields)
        valid_names = [f.value for f in ALL_FIELDS]
        for name in parsed:
            if name not in valid_names:
                raise invalid_input(
                    f'Invalid search field "{name}". Valid fields: {", ".join(valid_names)}',
                    {"field": name},
                )
        if parsed:
            field_filter = [SearchableField(name) for name in parsed]

    return SearchRequest(
        query=query,
        entity=entity,
        fields=field_filter,
        statuses=_as_list(statuses),
        limit=_parse_limit(limit),
    )


def run_search(project_path: str | Path | None, request: SearchRequest) -> dict[str, Any]:
    """
    Load the project's entities and rank them against the request's query.

    Returns:
        Dict with query, total and results (each a SearchResult dict)

    Raises:
        MdpError: If the project cannot be found or project.md is unreadable
    """
    root = resolve_project_path(project_path)
    wants = request.entity
    logger.debug(
        'Searching for "%s" in %s (fields: %s)',
        request.query,
        wants,
        ", ".join(f.value for f in request.fields),
    )

    project: ProjectData | None = None
    issues: list[Issue] = []
    milestones: list[Milestone] = []

    if wants in ("all", "project"):
        try:
            project = read_project_md(root)
            logger.debug("Loaded project data")
        except MdpError as e:
            if e.code != "CONFIG_ERROR":
                raise
            logger.debug("No project.md found, skipping project search")

    if wants in ("all", "issues"):
        issues = filter_by_status(read_all_issues(root), request.statuses)
        logger.debug("Loaded %d issues", len(issues))

    if wants in ("all", "milestones"):
        milestones = filter_by_status(read_all_milestones(root), request.statuses)
        logger.debug("Loaded %d milestones", len(milestones))

    documents = build_search_documents(issues, milestones, project, wants, request.fields)
    logger.debug("Built %d search documents", len(documents))

    results = engine.search(documents, request.query, request.limit)
    logger.debug("Found %d results", len(results))

    return {
        "query": request.query,
        "total": len(results),
        "results": [result.to_dict() for result in results],
    }
