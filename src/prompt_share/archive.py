"""Archive overlay: session ids and project directories hidden from listings.

Stored as a single JSON document::

    {"archived_sessions": ["<session-id>", ...],
     "archived_projects": ["<encoded-path>", ...]}

A missing file is an empty overlay. Toggles are serialized by a lock and
written through a temporary file so a reader never sees a half-written
document.
"""

import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ArchiveError

logger = logging.getLogger(__name__)

SESSIONS_KEY = "archived_sessions"
PROJECTS_KEY = "archived_projects"


@dataclass
class ArchiveOverlay:
    sessions: set[str] = field(default_factory=set)
    projects: set[str] = field(default_factory=set)

    def to_dict(self) -> dict:
        return {
            SESSIONS_KEY: sorted(self.sessions),
            PROJECTS_KEY: sorted(self.projects),
        }

    @classmethod
    def from_dict(cls, data: object) -> "ArchiveOverlay":
        if not isinstance(data, dict):
            raise ArchiveError("Archive file is not a JSON object")
        return cls(
            sessions=_id_set(data, SESSIONS_KEY),
            projects=_id_set(data, PROJECTS_KEY),
        )


class ArchiveStore:
    """Owns the overlay file; every read and write goes through here."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def load(self) -> ArchiveOverlay:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ArchiveOverlay()
        except OSError as e:
            raise ArchiveError(f"Failed to read archive file: {e}", {"path": str(self.path)}) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ArchiveError(f"Archive file is not valid JSON: {e}", {"path": str(self.path)}) from e
        return ArchiveOverlay.from_dict(data)

    def archived_sessions(self) -> set[str]:
        return self.load().sessions

    def archived_projects(self) -> set[str]:
        return self.load().projects

    def toggle_session(self, session_id: str) -> bool:
        """Flip a session's archived state; return True if now archived."""
        return self._toggle("sessions", session_id)

    def toggle_project(self, encoded_path: str) -> bool:
        """Flip a project's archived state; return True if now archived."""
        return self._toggle("projects", encoded_path)

    def _toggle(self, kind: str, identifier: str) -> bool:
        with self._lock:
            overlay = self.load()
            ids: set[str] = getattr(overlay, kind)
            if identifier in ids:
                ids.discard(identifier)
                archived = False
            else:
                ids.add(identifier)
                archived = True
            self._save(overlay)

        logger.info("%s %s archived=%s", kind[:-1].capitalize(), identifier, archived)
        return archived

    def _save(self, overlay: ArchiveOverlay) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(overlay.to_dict(), f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise ArchiveError(f"Failed to write archive file: {e}", {"path": str(self.path)}) from e


def _id_set(data: dict, key: str) -> set[str]:
    values = data.get(key) or []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ArchiveError(f"Archive field {key!r} must be a list of strings")
    return set(values)
