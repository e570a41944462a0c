"""Project path codec.

Claude Code names each project directory after the project's absolute path
with every ``/`` replaced by ``-``: ``/Users/alice/webapp`` is stored as
``-Users-alice-webapp``. Decoding is lossy, since a real ``-`` inside a path
segment cannot be told apart from an encoded separator.
"""

SEPARATOR = "/"
UNKNOWN_PROJECT = "Unknown"


def decode_project_path(encoded: str) -> str:
    """Convert a project directory name back to the original path."""
    decoded = encoded.replace("-", SEPARATOR)
    if not decoded.startswith(SEPARATOR):
        decoded = SEPARATOR + decoded
    return decoded


def project_name(path: str) -> str:
    """Return the last segment of a project path."""
    if not path:
        return UNKNOWN_PROJECT
    _, sep, tail = path.rpartition(SEPARATOR)
    if not sep:
        return path
    return tail
