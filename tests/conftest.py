"""Shared fixtures: a small .mdp project on disk."""

from pathlib import Path

import pytest

from mdp_search.config import reset_config


def write_entity(base: Path, folder: str, text: str) -> Path:
    entity_dir = base / folder
    entity_dir.mkdir(parents=True)
    md_file = entity_dir / f"{folder}.md"
    md_file.write_text(text, encoding="utf-8")
    return md_file


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep MDP_* variables from the host out of the tests."""
    for name in (
        "MDP_PROJECT_PATH",
        "MDP_FORMAT",
        "MDP_SEARCH_LIMIT",
        "MDP_PORT",
        "MDP_HOST",
        "MDP_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def mdp_project(tmp_path) -> Path:
    """Create a project with a project record, three issues and one milestone."""
    root = tmp_path / "tracker"
    mdp = root / ".mdp"
    mdp.mkdir(parents=True)

    (mdp / "project.md").write_text(
        """---
title: Payments Platform
description: Billing and invoicing services
instructions: Keep the caching budget small
health: at-risk
log:
  - timestamp: "2025-01-10T09:00:00Z"
    author: alice
    body: Invoice backlog is growing
    health: at-risk
createdAt: "2025-01-01T00:00:00Z"
updatedAt: "2025-01-10T09:00:00Z"
---

# Payments Platform

Overview of the payments work.
""",
        encoding="utf-8",
    )

    issues = mdp / "issues"
    write_entity(
        issues,
        "ISS-1-fix-login-bug",
        """---
id: ISS-1
title: Fix login bug
type: Bug
status: To Do
priority: High
labels: [auth]
checklist:
  - text: Reproduce on staging
    done: true
  - text: Write regression test
    done: false
log:
  - timestamp: "2025-01-05T10:00:00Z"
    author: bob
    body: Session cookie expires too early
---

Users cannot login due to a caching issue.
""",
    )
    write_entity(
        issues,
        "ISS-2-implement-caching-layer",
        """---
id: ISS-2
title: Implement caching layer
status: In Progress
---

Add Redis for performance.
""",
    )
    write_entity(
        issues,
        "ISS-3-invoice-export",
        """---
title: Invoice export
status: Done
---

Export invoices as CSV.
""",
    )

    milestones = mdp / "milestones"
    write_entity(
        milestones,
        "M-1-beta-launch",
        """---
id: M-1
title: Beta launch
status: Active
checklist:
  - text: Caching enabled in production
    done: false
---

Launch the beta to early customers.
""",
    )

    return root
