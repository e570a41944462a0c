"""Session history backends."""

from ..provider import SessionProvider
from .claude_code import ClaudeCodeProvider


def get_provider() -> SessionProvider:
    """Return the provider configured from the environment."""
    return ClaudeCodeProvider()
