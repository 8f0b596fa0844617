"""Readers for issues, milestones and the project record.

Structure expected:
<project>/
└── .mdp/
    ├── project.md
    ├── issues/
    │   ├── ISS-1-fix-login/
    │   │   └── ISS-1-fix-login.md
    │   └── ...
    └── milestones/
        └── M-1-beta/
            └── M-1-beta.md
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from mdp_search.errors import MdpError, config_error, parse_error, project_not_found
from mdp_search.store.frontmatter import (
    get_checklist,
    get_log_entries,
    get_string,
    get_string_array,
    parse_markdown,
)
from mdp_search.store.models import (
    VALID_HEALTH_VALUES,
    ChecklistItem,
    Issue,
    LogEntry,
    Milestone,
    ProjectData,
)

logger = logging.getLogger(__name__)

PROJECT_DIR = ".mdp"
PROJECT_MD = "project.md"


def resolve_project_path(explicit_path: str | Path | None) -> Path:
    """
    Resolve the project root from a user-supplied path.

    Accepts either the project root (containing .mdp/) or the .mdp/
    directory itself.

    Raises:
        MdpError: PROJECT_NOT_FOUND if no .mdp/ directory is found
    """
    if not explicit_path:
        raise project_not_found()

    resolved = Path(explicit_path).expanduser().resolve()
    if (resolved / PROJECT_DIR).is_dir():
        return resolved
    if resolved.name == PROJECT_DIR and resolved.is_dir():
        return resolved.parent

    raise project_not_found(str(resolved))


def default_id(folder: str) -> str:
    """Infer an entity id from its folder name (e.g. ISS-12-fix-login -> ISS-12)."""
    return "-".join(folder.split("-")[:2])


def _checklist(fm: dict[str, Any]) -> list[ChecklistItem]:
    return [ChecklistItem(**item) for item in get_checklist(fm, "checklist")]


def _log(fm: dict[str, Any]) -> list[LogEntry]:
    return [LogEntry(**entry) for entry in get_log_entries(fm, "log")]


def _iter_entity_files(project_path: Path, kind: str) -> Iterator[tuple[str, Path]]:
    """Yield (folder name, markdown path) for each entity folder, sorted."""
    base = project_path / PROJECT_DIR / kind
    if not base.is_dir():
        return

    for folder in sorted(base.iterdir()):
        if not folder.is_dir() or folder.name.startswith("."):
            continue
        yield folder.name, folder / f"{folder.name}.md"


def _read_frontmatter(md_file: Path, relative_path: str) -> tuple[dict[str, Any], str] | None:
    """Read and parse one entity file; None if it should be skipped."""
    try:
        raw = md_file.read_text(encoding="utf-8")
        parsed = parse_markdown(raw, relative_path)
    except (OSError, UnicodeDecodeError, MdpError) as e:
        logger.warning("Skipping %s: %s", relative_path, e)
        return None
    return parsed.frontmatter, parsed.content


def read_all_issues(project_path: Path) -> list[Issue]:
    """Read every issue under .mdp/issues/. Unreadable files are skipped."""
    issues: list[Issue] = []

    for folder, md_file in _iter_entity_files(project_path, "issues"):
        relative_path = f"{PROJECT_DIR}/issues/{folder}/{folder}.md"
        result = _read_frontmatter(md_file, relative_path)
        if result is None:
            continue
        fm, content = result

        issues.append(
            Issue(
                id=get_string(fm, "id") or default_id(folder),
                title=get_string(fm, "title") or "",
                status=get_string(fm, "status") or "",
                type=get_string(fm, "type"),
                priority=get_string(fm, "priority"),
                labels=get_string_array(fm, "labels"),
                assignee=get_string(fm, "assignee"),
                milestone=get_string(fm, "milestone"),
                due_date=get_string(fm, "dueDate"),
                checklist=_checklist(fm),
                log=_log(fm),
                created_at=get_string(fm, "createdAt"),
                updated_at=get_string(fm, "updatedAt"),
                file_path=relative_path,
                content=content,
            )
        )

    logger.debug("Read %d issues from %s", len(issues), project_path)
    return issues


def read_all_milestones(project_path: Path) -> list[Milestone]:
    """Read every milestone under .mdp/milestones/. Unreadable files are skipped."""
    milestones: list[Milestone] = []

    for folder, md_file in _iter_entity_files(project_path, "milestones"):
        relative_path = f"{PROJECT_DIR}/milestones/{folder}/{folder}.md"
        result = _read_frontmatter(md_file, relative_path)
        if result is None:
            continue
        fm, content = result

        milestones.append(
            Milestone(
                id=get_string(fm, "id") or default_id(folder),
                title=get_string(fm, "title") or "",
                status=get_string(fm, "status") or "Planning",
                priority=get_string(fm, "priority") or "None",
                labels=get_string_array(fm, "labels"),
                start_date=get_string(fm, "startDate"),
                due_date=get_string(fm, "dueDate"),
                checklist=_checklist(fm),
                log=_log(fm),
                created_at=get_string(fm, "createdAt"),
                updated_at=get_string(fm, "updatedAt"),
                file_path=relative_path,
                content=content,
            )
        )

    logger.debug("Read %d milestones from %s", len(milestones), project_path)
    return milestones


def _valid_health(value: str | None) -> str | None:
    return value if value in VALID_HEALTH_VALUES else None


def read_project_md(project_path: Path) -> ProjectData:
    """
    Read the project record.

    Raises:
        MdpError: CONFIG_ERROR if project.md does not exist, PARSE_ERROR if
            it cannot be read or its front matter is invalid
    """
    file_path = project_path / PROJECT_DIR / PROJECT_MD
    if not file_path.is_file():
        raise config_error(f"project.md not found at {file_path}")

    relative_path = f"{PROJECT_DIR}/{PROJECT_MD}"
    try:
        raw = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise parse_error(relative_path, str(e)) from e
    parsed = parse_markdown(raw, relative_path)
    fm = parsed.frontmatter

    log = [
        LogEntry(
            timestamp=entry["timestamp"],
            author=entry["author"],
            body=entry["body"],
            health=_valid_health(entry.get("health")),
        )
        for entry in get_log_entries(fm, "log")
    ]

    return ProjectData(
        title=get_string(fm, "title") or "",
        description=get_string(fm, "description"),
        instructions=get_string(fm, "instructions"),
        health=_valid_health(get_string(fm, "health")),
        log=log,
        created_at=get_string(fm, "createdAt"),
        updated_at=get_string(fm, "updatedAt"),
        file_path=relative_path,
        content=parsed.content,
    )
