"""Shared test fixtures for prompt-share."""

import json

import pytest

from prompt_share.archive import ArchiveStore
from prompt_share.backends.claude_code import ClaudeCodeProvider

PROJECT = "-Users-testuser-dev-myapp"
OTHER_PROJECT = "-Users-testuser-dev-tools"


def user(text, ts, uuid=""):
    return {
        "type": "user",
        "message": {"role": "user", "content": text},
        "timestamp": ts,
        "uuid": uuid,
    }


def assistant(text, ts, uuid=""):
    return {
        "type": "assistant",
        "message": {"role": "assistant", "content": [{"type": "text", "text": text}]},
        "timestamp": ts,
        "uuid": uuid,
    }


def write_jsonl(path, entries):
    """Write entries as JSONL; str entries are written verbatim."""
    lines = [e if isinstance(e, str) else json.dumps(e) for e in entries]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


@pytest.fixture
def tmp_projects_dir(tmp_path):
    """Create a synthetic Claude Code projects directory with realistic JSONL.

    Includes:
    - session-001: refactor conversation with tool blocks and noise records
    - session-002: earlier, short session mentioning "pagination"
    - agent-xyz.jsonl: sub-agent transcript (never listed)
    - a second project, a hidden directory and a stray file at the root
    """
    projects = tmp_path / "projects"
    project_dir = projects / PROJECT
    project_dir.mkdir(parents=True)

    write_jsonl(project_dir / "session-001.jsonl", [
        # 1. User prompt as block array
        {
            "type": "user",
            "message": {"role": "user", "content": [{"type": "text", "text": "Help me refactor the auth module"}]},
            "timestamp": "2025-01-20T10:00:00Z",
            "uuid": "uuid-001",
            "sessionId": "session-001",
            "cwd": "/Users/testuser/dev/myapp",
        },
        # 2. Assistant text + tool_use in same entry
        {
            "type": "assistant",
            "message": {"role": "assistant", "content": [
                {"type": "text", "text": "I'll start by reading the current code."},
                {"type": "tool_use", "id": "toolu_001", "name": "Read", "input": {"file_path": "/src/auth.ts"}},
            ]},
            "timestamp": "2025-01-20T10:00:30Z",
            "uuid": "uuid-002",
        },
        # 3. Tool result (user entry without any text block)
        {
            "type": "user",
            "message": {"role": "user", "content": [
                {"type": "tool_result", "tool_use_id": "toolu_001", "content": "export function authenticate() {}"},
            ]},
            "timestamp": "2025-01-20T10:00:31Z",
            "uuid": "uuid-003",
        },
        # 4. file-history-snapshot (skipped)
        {"type": "file-history-snapshot", "files": [{"path": "/src/auth.ts"}]},
        # 5. Partial write (skipped)
        '{"type": "user", "message": {"role": "us',
        # 6. Assistant reply
        assistant("The auth module is now split into AuthService and TokenStore.", "2025-01-20T10:01:00Z", "uuid-004"),
        # 7. Follow-up prompt, no reply yet
        user("Looks good, now add tests", "2025-01-20T10:05:00Z", "uuid-005"),
        # 8. Summary (skipped)
        {"type": "summary", "summary": "Refactored auth module"},
    ])

    write_jsonl(project_dir / "session-002.jsonl", [
        user("Add pagination to the API", "2025-01-18T09:00:00Z", "uuid-101"),
        assistant("Pagination added with limit and offset.", "2025-01-18T09:01:00Z", "uuid-102"),
    ])

    write_jsonl(project_dir / "agent-xyz.jsonl", [
        user("Agent-only pagination task", "2025-01-21T09:00:00Z", "uuid-201"),
    ])

    (project_dir / "notes.txt").write_text("not a session", encoding="utf-8")

    other_dir = projects / OTHER_PROJECT
    other_dir.mkdir()
    write_jsonl(other_dir / "session-301.jsonl", [
        user("Write a release script", "2025-01-19T08:00:00Z", "uuid-301"),
        assistant("Here is a release script using PAGINATION-free output.", "2025-01-19T08:00:10Z", "uuid-302"),
    ])

    hidden = projects / ".cache"
    hidden.mkdir()
    write_jsonl(hidden / "session-999.jsonl", [user("hidden", "2025-01-22T00:00:00Z")])

    (projects / "README").write_text("stray file", encoding="utf-8")

    return projects


@pytest.fixture
def archive_path(tmp_path):
    return tmp_path / "data" / "archive.json"


@pytest.fixture
def provider(tmp_projects_dir, archive_path):
    return ClaudeCodeProvider(base_path=tmp_projects_dir, archive=ArchiveStore(archive_path))
