"""
Exception hierarchy for prompt-share.

Everything the core surfaces to a caller inherits from PromptShareError.
RecordDecodeError never leaves the parser.
"""

from typing import Any


class PromptShareError(Exception):
    """Base exception for all prompt-share errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class SessionNotFoundError(PromptShareError):
    """Raised when a projects directory, project or session file is missing."""

    pass


class SessionReadError(PromptShareError):
    """Raised when a directory or session file cannot be read."""

    pass


class ArchiveError(PromptShareError):
    """Raised when the archive overlay cannot be loaded or saved."""

    pass


class RecordDecodeError(ValueError):
    """Raised for a JSONL line that does not decode into a record."""

    pass
