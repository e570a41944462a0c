"""Abstract base class for session history providers."""

from abc import ABC, abstractmethod
from pathlib import Path

from .archive import ArchiveStore
from .core import Project, Session, SessionInfo


class SessionProvider(ABC):
    """Read access to projects and sessions stored on disk.

    The web layer only talks to this interface. Listings and search leave out
    whatever ``archive`` marks as archived.
    """

    archive: ArchiveStore

    @abstractmethod
    def get_base_path(self) -> Path:
        """Return the root directory holding one subdirectory per project."""
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the root directory exists on this machine."""
        ...

    @abstractmethod
    def list_projects(self) -> list[Project]:
        """Return every visible project with its sessions."""
        ...

    @abstractmethod
    def list_sessions(self, encoded_path: str) -> list[SessionInfo]:
        """Return a project's visible sessions, newest first."""
        ...

    @abstractmethod
    def get_session(self, encoded_path: str, session_id: str) -> Session:
        """Load one session with all of its messages."""
        ...

    @abstractmethod
    def search(self, query: str) -> list[SessionInfo]:
        """Return visible sessions with a message containing ``query``."""
        ...
