"""Main entry point for mdp-search (CLI and MCP server)."""

import argparse
import logging
import sys
from pathlib import Path

from fastmcp import FastMCP

from mdp_search.config import VALID_FORMATS, Config, get_config
from mdp_search.corpus import VALID_ENTITIES
from mdp_search.errors import MdpError, config_error
from mdp_search.output import print_error, print_search_payload
from mdp_search.service import run_search, validate_request
from mdp_search.tools import register_tools

logger = logging.getLogger(__name__)


def create_server(config: Config) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        config: Configuration instance with all settings.
    """
    mcp = FastMCP(
        name="mdpSearch",
        instructions=(
            "mdpSearch ranks a project's issues, milestones and project record "
            "against a free-text query. Use the search tool and read the "
            "highlighted snippets to see why each result matched."
        ),
    )

    logger.info("Registering tools...")
    register_tools(mcp, config)

    logger.info("Server configured successfully")
    return mcp


def build_parser() -> argparse.ArgumentParser:
    # Also accepted after the subcommand; SUPPRESS leaves one given before it set
    output_flags = argparse.ArgumentParser(add_help=False)
    output_flags.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Log diagnostics to stderr",
    )
    output_flags.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Suppress all output",
    )

    parser = argparse.ArgumentParser(
        prog="mdp-search",
        description="mdp-search - search markdown-backed issues, milestones and projects",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log diagnostics to stderr")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress all output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser(
        "search",
        help="Search project, issues, and milestones by text content",
        parents=[output_flags],
    )
    search.add_argument("--query", required=True, help="Search query text")
    search.add_argument("-p", "--project", dest="project_path", help="Project root (contains .mdp/)")
    search.add_argument(
        "--entity",
        default="all",
        help=f"Entity type: {', '.join(VALID_ENTITIES)} (default: all)",
    )
    search.add_argument(
        "--fields", help="Comma-separated fields to search: title, content, log, checklist"
    )
    search.add_argument("-s", "--status", help="Pre-filter by comma-separated statuses")
    search.add_argument("--limit", help="Maximum number of results")
    search.add_argument("--format", choices=VALID_FORMATS, help="Output format")

    serve = subparsers.add_parser("serve", help="Run the MCP server", parents=[output_flags])
    serve.add_argument("-p", "--project", dest="project_path", help="Default project root")

    return parser


def _run_search_command(args: argparse.Namespace, config: Config) -> None:
    request = validate_request(
        query=args.query,
        entity=args.entity,
        fields=args.fields,
        statuses=args.status,
        limit=args.limit if args.limit is not None else config.search_limit,
    )
    payload = run_search(args.project_path or config.project_path, request)
    if not args.quiet:
        print_search_payload(payload, args.format or config.output_format)


def _run_server(args: argparse.Namespace, config: Config) -> None:
    if args.project_path:
        config.project_path = Path(args.project_path).expanduser()

    logger.info("=" * 50)
    logger.info("mdpSearch starting...")
    logger.info("  PROJECT: %s", config.project_path or "(per request)")
    logger.info("  HOST:    %s", config.host)
    logger.info("  PORT:    %s", config.port)
    logger.info("=" * 50)

    mcp = create_server(config)
    mcp.run(transport="sse", host=config.host, port=config.port)


def main(argv: list[str] | None = None) -> int:
    """Main function - parses arguments and dispatches the command.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    try:
        config = get_config()
    except ValueError as e:
        if not args.quiet:
            print_error(config_error(str(e)))
        return 1

    # Configure logging here to avoid side effects on import
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.command == "search":
            _run_search_command(args, config)
        else:
            _run_server(args, config)
    except KeyboardInterrupt:
        logger.info("Stopped by user")
        return 0
    except MdpError as e:
        if not args.quiet:
            print_error(e)
        return e.exit_code
    except Exception as e:
        logger.exception("Unexpected error")
        if not args.quiet:
            print_error(e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
