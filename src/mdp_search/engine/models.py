"""Data models for the search engine."""

from dataclasses import dataclass, field
from enum import Enum


class SearchableField(str, Enum):
    """Named chunks of an entity that can be searched."""

    TITLE = "title"
    CONTENT = "content"
    LOG = "log"
    CHECKLIST = "checklist"


class EntityKind(str, Enum):
    """Kinds of tracked entities."""

    ISSUE = "issue"
    MILESTONE = "milestone"
    PROJECT = "project"


@dataclass(frozen=True)
class SearchField:
    """A named piece of an entity's text."""

    name: SearchableField
    text: str

    def __post_init__(self) -> None:
        # Accept plain strings; unknown names raise ValueError
        object.__setattr__(self, "name", SearchableField(self.name))


@dataclass(frozen=True)
class SearchDocument:
    """The searchable surface of one entity at query time."""

    id: str
    entity: EntityKind
    title: str
    status: str
    fields: list[SearchField] = field(default_factory=list)

    def __post_init__(self) -> None:
        object.__setattr__(self, "entity", EntityKind(self.entity))


@dataclass(frozen=True)
class FieldMatch:
    """A field that contributed to a document's score."""

    field: str
    snippet: str


@dataclass(frozen=True)
class SearchResult:
    """A ranked document with the fields that matched."""

    entity: EntityKind
    id: str
    title: str
    status: str
    score: float
    matches: list[FieldMatch] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dict."""
        return {
            "entity": self.entity.value,
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "score": self.score,
            "matches": [{"field": m.field, "snippet": m.snippet} for m in self.matches],
        }
