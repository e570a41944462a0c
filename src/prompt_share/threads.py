"""Group a session's messages into prompt threads.

A thread is a run of consecutive non-blank user prompts closed by the next
assistant message. Prompts still waiting for an answer at the end of the
session form a final, response-less thread.

Threads are returned newest first, but each ``id`` keeps its construction
order: the newest thread of a three-thread session is ``thread-2``.
"""

from typing import Sequence

from .config import THREAD_SUMMARY_LIMIT
from .core import ChatMessage, Message, Prompt, PromptResponse, Session, Thread, truncate


def group_threads(messages: Sequence[Message]) -> list[Thread]:
    """Return the session's threads, most recent first."""
    threads: list[Thread] = []
    pending: list[Prompt] = []

    for i, msg in enumerate(messages):
        if msg.role == "user":
            content = msg.content.strip()
            if not content:
                continue
            pending.append(Prompt(index=i, uuid=msg.uuid, content=content, timestamp=msg.timestamp))
        elif msg.role == "assistant" and pending:
            threads.append(_close_thread(len(threads), pending))
            pending = []

    if pending:
        threads.append(_close_thread(len(threads), pending))

    threads.reverse()
    return threads


def _close_thread(number: int, prompts: list[Prompt]) -> Thread:
    first, last = prompts[0], prompts[-1]
    return Thread(
        id=f"thread-{number}",
        first_index=first.index,
        prompts=prompts,
        prompt_count=len(prompts),
        summary=truncate(first.content, THREAD_SUMMARY_LIMIT),
        start_time=first.timestamp,
        end_time=last.timestamp,
    )


def find_response(session: Session, prompt_index: int) -> PromptResponse:
    """Look up the user message at ``prompt_index`` and the reply to it.

    Both fields are None when the index is out of range or does not point at
    a user message; ``response`` alone is None when nothing answered it.
    """
    messages = session.messages
    if not 0 <= prompt_index < len(messages) or messages[prompt_index].role != "user":
        return PromptResponse()

    response = next(
        (m for m in messages[prompt_index + 1:] if m.role == "assistant"),
        None,
    )
    return PromptResponse(prompt=messages[prompt_index], response=response)


def chat_messages(session: Session) -> list[ChatMessage]:
    """Return every non-blank message paired with its index."""
    return [
        ChatMessage(index=i, message=msg)
        for i, msg in enumerate(session.messages)
        if msg.content.strip()
    ]
