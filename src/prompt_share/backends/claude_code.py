"""Claude Code session history backend.

Reads chat data from the ~/.claude/projects/ directory structure::

    projects/
        -Users-alice-dev-webapp/        one directory per project
            <session-id>.jsonl          one file per session
            agent-<id>.jsonl            sub-agent transcripts, never listed

Every listing re-reads the session files it reports on; nothing is cached.
"""

import logging
from pathlib import Path

from ..archive import ArchiveStore
from ..config import (
    AGENT_SESSION_PREFIX,
    SESSION_SUFFIX,
    get_archive_path,
    get_claude_projects_path,
)
from ..core import Message, Project, Session, SessionInfo
from ..errors import PromptShareError, SessionNotFoundError, SessionReadError
from ..parser import parse_record
from ..paths import decode_project_path, project_name
from ..provider import SessionProvider

logger = logging.getLogger(__name__)


class ClaudeCodeProvider(SessionProvider):
    """Provider for Claude Code session logs."""

    def __init__(self, base_path: Path | None = None, archive: ArchiveStore | None = None):
        self._base_path = Path(base_path) if base_path is not None else None
        self.archive = archive if archive is not None else ArchiveStore(get_archive_path())

    def get_base_path(self) -> Path:
        if self._base_path is not None:
            return self._base_path
        return get_claude_projects_path()

    def is_available(self) -> bool:
        return self.get_base_path().is_dir()

    def list_projects(self) -> list[Project]:
        base = self.get_base_path()
        entries = _list_dir(base, "projects directory")
        archived = self.archive.archived_projects()

        projects = []
        for project_dir in entries:
            name = project_dir.name
            if name.startswith(".") or name in archived or not project_dir.is_dir():
                continue

            try:
                sessions = self.list_sessions(name)
            except PromptShareError as e:
                logger.warning("Skipping project %s: %s", name, e)
                continue

            projects.append(Project(
                encoded_path=name,
                decoded_path=decode_project_path(name),
                sessions=sessions,
            ))

        return projects

    def list_sessions(self, encoded_path: str) -> list[SessionInfo]:
        project_dir = self._project_dir(encoded_path)
        entries = _list_dir(project_dir, "project directory")
        archived = self.archive.archived_sessions()

        sessions = []
        for entry in entries:
            file_name = entry.name
            if not file_name.endswith(SESSION_SUFFIX) or file_name.startswith(AGENT_SESSION_PREFIX):
                continue

            session_id = file_name[: -len(SESSION_SUFFIX)]
            if session_id in archived or entry.is_dir():
                continue

            try:
                session = self.get_session(encoded_path, session_id)
            except PromptShareError as e:
                logger.warning("Skipping session %s/%s: %s", encoded_path, session_id, e)
                continue

            sessions.append(SessionInfo.from_session(session))

        return _newest_first(sessions)

    def get_session(self, encoded_path: str, session_id: str) -> Session:
        """Load a session file end to end.

        Undecodable lines are dropped. A read failure part-way through raises
        rather than returning the messages read so far.
        """
        path = self._project_dir(encoded_path) / f"{_checked_name(session_id, 'session')}{SESSION_SUFFIX}"

        messages: list[Message] = []
        start_time = None
        end_time = None

        try:
            with path.open(encoding="utf-8", errors="replace") as f:
                for line in f:
                    msg = parse_record(line)
                    if msg is None:
                        continue
                    messages.append(msg)

                    ts = msg.timestamp
                    if ts is None:
                        continue
                    if start_time is None or ts < start_time:
                        start_time = ts
                    if end_time is None or ts > end_time:
                        end_time = ts
        except FileNotFoundError as e:
            raise SessionNotFoundError(
                f"Session not found: {encoded_path}/{session_id}", {"path": str(path)}
            ) from e
        except OSError as e:
            raise SessionReadError(
                f"Failed to read session file: {e}", {"path": str(path)}
            ) from e

        decoded_path = decode_project_path(encoded_path)
        return Session(
            id=session_id,
            encoded_path=encoded_path,
            project_path=decoded_path,
            project_name=project_name(decoded_path),
            messages=messages,
            start_time=start_time,
            end_time=end_time,
        )

    def search(self, query: str) -> list[SessionInfo]:
        needle = query.lower()
        results = []

        for project in self.list_projects():
            for info in project.sessions:
                try:
                    session = self.get_session(project.encoded_path, info.id)
                except PromptShareError as e:
                    logger.warning("Skipping session %s during search: %s", info.id, e)
                    continue

                if any(needle in msg.content.lower() for msg in session.messages):
                    results.append(info)

        return results

    # ── Private helpers ──────────────────────────────────────────────

    def _project_dir(self, encoded_path: str) -> Path:
        return self.get_base_path() / _checked_name(encoded_path, "project")


def _checked_name(name: str, kind: str) -> str:
    """Reject identifiers that would escape their directory."""
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise SessionNotFoundError(f"Invalid {kind} identifier: {name!r}")
    return name


def _list_dir(path: Path, what: str) -> list[Path]:
    try:
        return sorted(path.iterdir(), key=lambda p: p.name)
    except (FileNotFoundError, NotADirectoryError) as e:
        raise SessionNotFoundError(f"{what.capitalize()} not found: {path}") from e
    except OSError as e:
        raise SessionReadError(f"Failed to read {what}: {e}", {"path": str(path)}) from e


def _newest_first(sessions: list[SessionInfo]) -> list[SessionInfo]:
    """Sort by start time descending; sessions without one go last."""
    dated = [s for s in sessions if s.start_time is not None]
    undated = [s for s in sessions if s.start_time is None]
    dated.sort(key=lambda s: s.start_time, reverse=True)
    return dated + undated
