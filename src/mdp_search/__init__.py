"""
mdp-search - lexical search for markdown-backed project trackers.

Reads the issues, milestones and project record stored under a project's
.mdp/ directory and ranks them against a free-text query.

Stack:
- Python + FastMCP (MCP tool server)
- PyYAML (front matter)
- BM25 with per-field weights (pure Python, rebuilt on every query)
- Markdown (source of truth)
"""

__version__ = "0.1.0"
