"""Domain errors for mdp-search.

Every error carries a stable machine-readable code, a message, structured
details and the process exit code the CLI should use.
"""

from typing import Any


class MdpError(Exception):
    """Error raised by the collaborators around the search engine."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        exit_code: int = 1,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.exit_code = exit_code


def invalid_input(message: str, details: dict[str, Any] | None = None) -> MdpError:
    return MdpError("INVALID_INPUT", message, details)


def project_not_found(project_path: str | None = None) -> MdpError:
    if project_path is None:
        return MdpError(
            "PROJECT_NOT_FOUND",
            "No project path specified. Use -p <path> or set MDP_PROJECT_PATH.",
            exit_code=2,
        )
    return MdpError(
        "PROJECT_NOT_FOUND",
        f"No .mdp/ directory found at {project_path}",
        {"projectPath": project_path},
        exit_code=2,
    )


def config_error(reason: str) -> MdpError:
    return MdpError("CONFIG_ERROR", f"Configuration error: {reason}", {"reason": reason})


def parse_error(path: str, reason: str) -> MdpError:
    return MdpError(
        "PARSE_ERROR",
        f"Failed to parse {path}: {reason}",
        {"path": path, "reason": reason},
    )
