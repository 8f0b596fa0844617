"""
Store module for mdp-search.

Reads issues, milestones and the project record from a project's .mdp/
directory. Markdown files are the source of truth; nothing is written back.
"""

from mdp_search.store.frontmatter import ParsedMarkdown, parse_markdown
from mdp_search.store.models import ChecklistItem, Issue, LogEntry, Milestone, ProjectData
from mdp_search.store.reader import (
    read_all_issues,
    read_all_milestones,
    read_project_md,
    resolve_project_path,
)

__all__ = [
    "ChecklistItem",
    "Issue",
    "LogEntry",
    "Milestone",
    "ParsedMarkdown",
    "ProjectData",
    "parse_markdown",
    "read_all_issues",
    "read_all_milestones",
    "read_project_md",
    "resolve_project_path",
]
