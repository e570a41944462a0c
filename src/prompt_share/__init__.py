"""Browse and share Claude Code session prompts."""

__version__ = "0.1.0"
