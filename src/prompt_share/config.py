"""Path resolution and fixed limits."""

import os
from pathlib import Path

FIRST_MESSAGE_LIMIT = 100
THREAD_SUMMARY_LIMIT = 80

SESSION_SUFFIX = ".jsonl"
AGENT_SESSION_PREFIX = "agent-"

DEFAULT_ARCHIVE_PATH = Path("data") / "archive.json"


def get_claude_projects_path() -> Path:
    """Return the path to Claude Code's projects directory."""
    env = os.environ.get("PROMPT_SHARE_PROJECTS_PATH")
    if env:
        return Path(env)

    return Path.home() / ".claude" / "projects"


def get_archive_path() -> Path:
    """Return the path of the archive overlay file.

    Defaults to ``data/archive.json`` relative to the working directory.
    """
    env = os.environ.get("PROMPT_SHARE_ARCHIVE_PATH")
    if env:
        return Path(env)

    return DEFAULT_ARCHIVE_PATH
