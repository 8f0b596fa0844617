"""MCP tools for the mdp-search server.

This module defines the tools exposed by the MCP server:
- search: Ranked full-text search over a project's issues, milestones and project record
"""

import logging
from typing import Any

from fastmcp import FastMCP

from mdp_search.config import Config
from mdp_search.errors import MdpError
from mdp_search.output import error_to_envelope, success
from mdp_search.service import run_search, validate_request

logger = logging.getLogger(__name__)


def search_tool(
    config: Config,
    query: str,
    project_path: str | None = None,
    entity: str = "all",
    fields: list[str] | None = None,
    status: list[str] | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """Run a search and wrap the outcome in a success or error envelope."""
    try:
        request = validate_request(
            query=query,
            entity=entity,
            fields=fields,
            statuses=status,
            limit=limit if limit is not None else config.search_limit,
        )
        payload = run_search(project_path or config.project_path, request)
    except MdpError as e:
        logger.info("Search rejected: %s (%s)", e.message, e.code)
        return error_to_envelope(e)
    except Exception as e:
        logger.exception("Search failed")
        return error_to_envelope(e)

    return success(payload)


def register_tools(mcp: FastMCP, config: Config) -> None:
    """Register all tools with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        config: Config providing the default project path and limit
    """

    @mcp.tool()
    def search(
        query: str,
        project_path: str | None = None,
        entity: str = "all",
        fields: list[str] | None = None,
        status: list[str] | None = None,
        limit: int | None = None,
    ) -> dict:
        """Search the project, its issues and milestones by text content.

        Ranking uses BM25 with field weights (title 3.0, log 1.5,
        content 1.0, checklist 1.0). Common English stopwords are ignored
        unless the query consists only of stopwords.

        Args:
            query: Free-text query (must not be blank)
            project_path: Project root containing .mdp/ (defaults to MDP_PROJECT_PATH)
            entity: issues, milestones, project or all (default: all)
            fields: Fields to search: title, content, log, checklist (default: all)
            status: Only search issues/milestones with these statuses
            limit: Maximum number of results (default: MDP_SEARCH_LIMIT or 20)

        Returns:
            Envelope with ok=True and data {query, total, results}, where each
            result has entity, id, title, status, score and matches (field +
            snippet with **highlighted** terms); or ok=False and error
            {code, message, details}.
        """
        return search_tool(
            config,
            query=query,
            project_path=project_path,
            entity=entity,
            fields=fields,
            status=status,
            limit=limit,
        )
