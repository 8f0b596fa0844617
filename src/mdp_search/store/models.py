"""Data models for entities read from the .mdp/ directory."""

from dataclasses import dataclass, field

VALID_HEALTH_VALUES = frozenset({"on-track", "at-risk", "off-track"})


@dataclass
class ChecklistItem:
    text: str
    done: bool = False


@dataclass
class LogEntry:
    timestamp: str
    author: str
    body: str
    health: str | None = None  # Project log entries only


@dataclass
class Issue:
    """An issue file (.mdp/issues/<folder>/<folder>.md)."""

    id: str
    title: str = ""
    status: str = ""
    type: str | None = None
    priority: str | None = None
    labels: list[str] = field(default_factory=list)
    assignee: str | None = None
    milestone: str | None = None
    due_date: str | None = None
    checklist: list[ChecklistItem] = field(default_factory=list)
    log: list[LogEntry] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None
    file_path: str = ""  # Relative to the project root
    content: str = ""


@dataclass
class Milestone:
    """A milestone file (.mdp/milestones/<folder>/<folder>.md)."""

    id: str
    title: str = ""
    status: str = "Planning"
    priority: str = "None"
    labels: list[str] = field(default_factory=list)
    start_date: str | None = None
    due_date: str | None = None
    checklist: list[ChecklistItem] = field(default_factory=list)
    log: list[LogEntry] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None
    file_path: str = ""
    content: str = ""


@dataclass
class ProjectData:
    """The project record (.mdp/project.md)."""

    title: str = ""
    description: str | None = None
    instructions: str | None = None
    health: str | None = None  # on-track, at-risk, off-track
    log: list[LogEntry] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None
    file_path: str = ""
    content: str = ""
