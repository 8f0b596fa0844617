"""Builds the in-memory search corpus from entities read off disk."""

from collections.abc import Sequence
from typing import Protocol, TypeVar

from mdp_search.engine.models import EntityKind, SearchableField, SearchDocument, SearchField
from mdp_search.store.models import Issue, Milestone, ProjectData

VALID_ENTITIES = ("issues", "milestones", "project", "all")
ALL_FIELDS: tuple[SearchableField, ...] = tuple(SearchableField)


class _HasStatus(Protocol):
    status: str


T = TypeVar("T", bound=_HasStatus)


def filter_by_status(items: Sequence[T], statuses: Sequence[str]) -> list[T]:
    """Keep items whose status is in statuses (case-insensitive)."""
    if not statuses:
        return list(items)
    wanted = {s.lower() for s in statuses}
    return [item for item in items if item.status.lower() in wanted]


def _entity_fields(
    entity: Issue | Milestone, field_filter: Sequence[SearchableField]
) -> list[SearchField]:
    """Fields for an issue or milestone; log bodies and checklist texts are joined."""
    fields: list[SearchField] = []

    if SearchableField.TITLE in field_filter and entity.title:
        fields.append(SearchField(SearchableField.TITLE, entity.title))
    if SearchableField.CONTENT in field_filter and entity.content:
        fields.append(SearchField(SearchableField.CONTENT, entity.content))
    if SearchableField.LOG in field_filter and entity.log:
        fields.append(
            SearchField(SearchableField.LOG, " ".join(entry.body for entry in entity.log))
        )
    if SearchableField.CHECKLIST in field_filter and entity.checklist:
        fields.append(
            SearchField(
                SearchableField.CHECKLIST, " ".join(item.text for item in entity.checklist)
            )
        )

    return fields


def _project_fields(
    project: ProjectData, field_filter: Sequence[SearchableField]
) -> list[SearchField]:
    """Fields for the project record; description and instructions ride on the title."""
    fields: list[SearchField] = []

    if SearchableField.TITLE in field_filter and project.title:
        parts = [project.title]
        if project.description:
            parts.append(project.description)
        if project.instructions:
            parts.append(project.instructions)
        fields.append(SearchField(SearchableField.TITLE, " ".join(parts)))
    if SearchableField.CONTENT in field_filter and project.content:
        fields.append(SearchField(SearchableField.CONTENT, project.content))
    if SearchableField.LOG in field_filter and project.log:
        fields.append(
            SearchField(SearchableField.LOG, " ".join(entry.body for entry in project.log))
        )

    return fields


def build_search_documents(
    issues: Sequence[Issue],
    milestones: Sequence[Milestone],
    project: ProjectData | None,
    entity_filter: str = "all",
    field_filter: Sequence[SearchableField] = ALL_FIELDS,
) -> list[SearchDocument]:
    """
    Assemble SearchDocuments in project, issues, milestones order.

    Empty fields are left out, and so is any entity with no fields left.

    Args:
        issues: Issues already filtered by status
        milestones: Milestones already filtered by status
        project: Project record, or None if there is none
        entity_filter: One of VALID_ENTITIES
        field_filter: Fields to include
    """
    docs: list[SearchDocument] = []

    if entity_filter in ("all", "project") and project is not None:
        fields = _project_fields(project, field_filter)
        if fields:
            docs.append(
                SearchDocument(
                    id="project",
                    entity=EntityKind.PROJECT,
                    title=project.title,
                    status=project.health or "",
                    fields=fields,
                )
            )

    if entity_filter in ("all", "issues"):
        for issue in issues:
            fields = _entity_fields(issue, field_filter)
            if fields:
                docs.append(
                    SearchDocument(
                        id=issue.id,
                        entity=EntityKind.ISSUE,
                        title=issue.title,
                        status=issue.status,
                        fields=fields,
                    )
                )

    if entity_filter in ("all", "milestones"):
        for milestone in milestones:
            fields = _entity_fields(milestone, field_filter)
            if fields:
                docs.append(
                    SearchDocument(
                        id=milestone.id,
                        entity=EntityKind.MILESTONE,
                        title=milestone.title,
                        status=milestone.status,
                        fields=fields,
                    )
                )

    return docs
