"""Core data models for prompt-share."""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from .config import FIRST_MESSAGE_LIMIT

ELLIPSIS = "..."


def truncate(text: str, limit: int) -> str:
    """Cut text to ``limit`` characters, marking the cut with an ellipsis."""
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


# ── Message content ──────────────────────────────────────────────
#
# A record's ``message.content`` is either a plain string or an array of
# typed blocks. Anything else is stringified.


@dataclass(frozen=True)
class TextContent:
    text: str

    def extract(self) -> str:
        return self.text


@dataclass(frozen=True)
class BlockContent:
    blocks: list

    def extract(self) -> str:
        texts = [
            block["text"]
            for block in self.blocks
            if isinstance(block, dict) and isinstance(block.get("text"), str)
        ]
        return "\n".join(texts)


@dataclass(frozen=True)
class OtherContent:
    value: Any

    def extract(self) -> str:
        if self.value is None:
            return ""
        return json.dumps(self.value, ensure_ascii=False)


def decode_content(raw: Any) -> TextContent | BlockContent | OtherContent:
    """Pick the content variant for a raw ``message.content`` value."""
    if isinstance(raw, str):
        return TextContent(raw)
    if isinstance(raw, list):
        return BlockContent(raw)
    return OtherContent(raw)


# ── Sessions ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Message:
    """A single user or assistant turn."""

    uuid: str
    role: str  # "user" | "assistant"
    content: str
    timestamp: Optional[datetime] = None


@dataclass
class Session:
    """A fully loaded conversation, messages in file order."""

    id: str
    encoded_path: str  # project directory name
    project_path: str  # decoded, e.g. "/Users/alice/dev/webapp"
    project_name: str
    messages: list[Message] = field(default_factory=list)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


@dataclass
class SessionInfo:
    """Listing summary derived from a loaded Session."""

    id: str
    encoded_path: str
    project_path: str
    project_name: str
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    message_count: int
    user_message_count: int
    assistant_message_count: int
    first_message: str

    @classmethod
    def from_session(cls, session: Session) -> "SessionInfo":
        user_count = 0
        assistant_count = 0
        for msg in session.messages:
            if not msg.content.strip():
                continue
            if msg.role == "user":
                user_count += 1
            elif msg.role == "assistant":
                assistant_count += 1

        first_message = ""
        if session.messages:
            first_message = truncate(session.messages[0].content, FIRST_MESSAGE_LIMIT)

        return cls(
            id=session.id,
            encoded_path=session.encoded_path,
            project_path=session.project_path,
            project_name=session.project_name,
            start_time=session.start_time,
            end_time=session.end_time,
            message_count=len(session.messages),
            user_message_count=user_count,
            assistant_message_count=assistant_count,
            first_message=first_message,
        )


@dataclass
class Project:
    """A project directory and its sessions, newest first."""

    encoded_path: str  # directory name, e.g. "-Users-alice-dev-webapp"
    decoded_path: str
    sessions: list[SessionInfo] = field(default_factory=list)


# ── Threads ──────────────────────────────────────────────────────


@dataclass
class Prompt:
    """A user prompt inside a thread."""

    index: int  # position in Session.messages
    uuid: str
    content: str  # trimmed
    timestamp: Optional[datetime] = None


@dataclass
class Thread:
    """Consecutive user prompts up to the assistant turn answering them."""

    id: str  # "thread-<n>", n in construction order
    first_index: int
    prompts: list[Prompt]
    prompt_count: int
    summary: str
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


@dataclass
class PromptResponse:
    """A prompt and the first assistant reply after it."""

    prompt: Optional[Message] = None
    response: Optional[Message] = None


@dataclass
class ChatMessage:
    """A non-blank message with its position in the session."""

    index: int
    message: Message
