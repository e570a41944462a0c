"""Claude Code JSONL record parser.

Each line of a session file is one JSON record. Only records of type
"user" or "assistant" carrying a ``message`` object become Messages; the
rest (file-history-snapshot, progress, summary, ...) are skipped, as are
lines that do not decode at all. Partial writes are normal, so nothing here
ever raises to the caller.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from .core import Message, decode_content
from .errors import RecordDecodeError

logger = logging.getLogger(__name__)

MESSAGE_TYPES = ("user", "assistant")


@dataclass
class RawRecord:
    """One decoded JSONL line, before normalization."""

    record_type: str
    message: Optional[dict]
    uuid: str = ""
    timestamp: Optional[datetime] = None

    @classmethod
    def from_json(cls, line: str | bytes) -> "RawRecord":
        try:
            entry = json.loads(line)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise RecordDecodeError(f"invalid JSON: {e}") from e

        if not isinstance(entry, dict):
            raise RecordDecodeError("record is not an object")

        record_type = _optional_str(entry, "type")
        uuid = _optional_str(entry, "uuid")
        timestamp = _parse_timestamp(entry.get("timestamp"))

        message = entry.get("message")
        if not isinstance(message, dict):
            message = None
        elif not isinstance(message.get("role", ""), str):
            raise RecordDecodeError("message.role is not a string")

        return cls(
            record_type=record_type,
            message=message,
            uuid=uuid,
            timestamp=timestamp,
        )


def parse_record(line: str | bytes) -> Message | None:
    """Normalize one JSONL line into a Message, or None to skip it."""
    try:
        record = RawRecord.from_json(line)
    except RecordDecodeError as e:
        logger.debug("Skipping undecodable line: %s", e)
        return None

    if record.record_type not in MESSAGE_TYPES or record.message is None:
        return None

    return Message(
        uuid=record.uuid,
        role=record.message.get("role", ""),
        content=extract_content(record.message.get("content")),
        timestamp=record.timestamp,
    )


def extract_content(content: Any) -> str:
    """Extract plain text from a string or block-array message content."""
    return decode_content(content).extract()


def _optional_str(entry: dict, key: str) -> str:
    value = entry.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise RecordDecodeError(f"{key} is not a string")
    return value


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse an RFC 3339 timestamp; a missing one is None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise RecordDecodeError("timestamp is not a string")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise RecordDecodeError(f"bad timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        raise RecordDecodeError(f"timestamp has no timezone: {value!r}")
    return parsed
