"""FastAPI web server for prompt-share."""

import logging
from pathlib import Path
from typing import NoReturn

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from .backends import get_provider
from .errors import PromptShareError, SessionNotFoundError
from .paths import project_name
from .provider import SessionProvider
from .threads import chat_messages, find_response, group_threads

logger = logging.getLogger(__name__)

app = FastAPI(title="prompt-share", version="0.1.0")

# Provider cache (populated on first request)
_provider: SessionProvider | None = None


def _get_provider() -> SessionProvider:
    """Lazily initialize and cache the provider."""
    global _provider
    if _provider is None:
        _provider = get_provider()
        if _provider.is_available():
            logger.info("Reading sessions from %s", _provider.get_base_path())
        else:
            logger.warning("Projects directory %s does not exist", _provider.get_base_path())
    return _provider


def _raise_http(e: PromptShareError, action: str) -> NoReturn:
    """Translate a core error into an HTTP error."""
    if isinstance(e, SessionNotFoundError):
        raise HTTPException(status_code=404, detail=e.message) from e
    logger.error("Failed to %s: %s", action, e)
    raise HTTPException(status_code=500, detail=f"Failed to {action}: {e.message}") from e


def _iso(value):
    return value.isoformat() if value else None


def _message_to_dict(msg) -> dict | None:
    """Convert a Message dataclass to a JSON-serializable dict."""
    if msg is None:
        return None
    return {
        "uuid": msg.uuid,
        "role": msg.role,
        "content": msg.content,
        "timestamp": _iso(msg.timestamp),
    }


def _session_info_to_dict(info) -> dict:
    """Convert a SessionInfo dataclass to a JSON-serializable dict."""
    return {
        "id": info.id,
        "encoded_path": info.encoded_path,
        "project_path": info.project_path,
        "project_name": info.project_name,
        "start_time": _iso(info.start_time),
        "end_time": _iso(info.end_time),
        "message_count": info.message_count,
        "user_message_count": info.user_message_count,
        "assistant_message_count": info.assistant_message_count,
        "first_message": info.first_message,
    }


def _project_to_dict(project) -> dict:
    return {
        "encoded_path": project.encoded_path,
        "decoded_path": project.decoded_path,
        "name": project_name(project.decoded_path),
        "sessions": [_session_info_to_dict(s) for s in project.sessions],
    }


def _thread_to_dict(thread) -> dict:
    return {
        "id": thread.id,
        "first_index": thread.first_index,
        "prompt_count": thread.prompt_count,
        "summary": thread.summary,
        "start_time": _iso(thread.start_time),
        "end_time": _iso(thread.end_time),
        "prompts": [
            {
                "index": p.index,
                "uuid": p.uuid,
                "content": p.content,
                "timestamp": _iso(p.timestamp),
            }
            for p in thread.prompts
        ],
    }


def _index_html() -> HTMLResponse:
    html_path = Path(__file__).parent / "static" / "index.html"
    if not html_path.exists():
        raise HTTPException(status_code=404, detail="Frontend not found")
    return HTMLResponse(html_path.read_text(encoding="utf-8"))


# ── Pages ────────────────────────────────────────────────────────


@app.get("/")
def index():
    """Serve the frontend."""
    return _index_html()


@app.get("/search")
def search_page(q: str = ""):
    """Serve the frontend in search mode; an empty query goes home."""
    if not q:
        return RedirectResponse("/", status_code=302)
    return _index_html()


# ── Read API ─────────────────────────────────────────────────────


@app.get("/api/projects")
def get_projects():
    """Return all projects with their sessions."""
    try:
        projects = _get_provider().list_projects()
    except PromptShareError as e:
        _raise_http(e, "load projects")
    return [_project_to_dict(p) for p in projects]


@app.get("/api/projects/{encoded_path}/sessions")
def get_sessions(encoded_path: str):
    """Return the sessions of one project, newest first."""
    try:
        sessions = _get_provider().list_sessions(encoded_path)
    except PromptShareError as e:
        _raise_http(e, "load sessions")
    return [_session_info_to_dict(s) for s in sessions]


@app.get("/api/projects/{encoded_path}/sessions/{session_id}")
def get_session(encoded_path: str, session_id: str):
    """Return a session with every message."""
    try:
        session = _get_provider().get_session(encoded_path, session_id)
    except PromptShareError as e:
        _raise_http(e, "load session")
    return {
        "id": session.id,
        "encoded_path": session.encoded_path,
        "project_path": session.project_path,
        "project_name": session.project_name,
        "start_time": _iso(session.start_time),
        "end_time": _iso(session.end_time),
        "messages": [_message_to_dict(m) for m in session.messages],
    }


@app.get("/api/projects/{encoded_path}/sessions/{session_id}/prompts")
def get_prompts(encoded_path: str, session_id: str):
    """Return the session's prompt threads, newest first."""
    try:
        session = _get_provider().get_session(encoded_path, session_id)
    except PromptShareError as e:
        _raise_http(e, "load session")
    return [_thread_to_dict(t) for t in group_threads(session.messages)]


@app.get("/api/projects/{encoded_path}/sessions/{session_id}/prompts/{prompt_index}")
def get_response(encoded_path: str, session_id: str, prompt_index: int):
    """Return a prompt and the assistant reply to it."""
    try:
        session = _get_provider().get_session(encoded_path, session_id)
    except PromptShareError as e:
        _raise_http(e, "load session")
    result = find_response(session, prompt_index)
    return {
        "prompt": _message_to_dict(result.prompt),
        "response": _message_to_dict(result.response),
    }


@app.get("/api/projects/{encoded_path}/sessions/{session_id}/full")
def get_full_session(encoded_path: str, session_id: str):
    """Return the chat view: every non-blank message with its index."""
    try:
        session = _get_provider().get_session(encoded_path, session_id)
    except PromptShareError as e:
        _raise_http(e, "load session")
    return [
        {"index": c.index, **_message_to_dict(c.message)}
        for c in chat_messages(session)
    ]


@app.get("/api/search")
def search(q: str = Query(..., min_length=1, description="Text to look for in messages")):
    """Return sessions with a message containing the query."""
    try:
        sessions = _get_provider().search(q)
    except PromptShareError as e:
        _raise_http(e, "search sessions")
    return {
        "query": q,
        "sessions": [_session_info_to_dict(s) for s in sessions],
    }


# ── Archive ──────────────────────────────────────────────────────


@app.get("/api/archive")
def get_archive():
    """Return the archived session ids and project paths."""
    try:
        overlay = _get_provider().archive.load()
    except PromptShareError as e:
        _raise_http(e, "load archive")
    return overlay.to_dict()


@app.post("/api/archive/sessions/{session_id}")
def toggle_session_archive(session_id: str):
    """Archive a session, or restore it if already archived."""
    try:
        archived = _get_provider().archive.toggle_session(session_id)
    except PromptShareError as e:
        _raise_http(e, "update archive")
    return {"id": session_id, "archived": archived}


@app.post("/api/archive/projects/{encoded_path}")
def toggle_project_archive(encoded_path: str):
    """Archive a project, or restore it if already archived."""
    try:
        archived = _get_provider().archive.toggle_project(encoded_path)
    except PromptShareError as e:
        _raise_http(e, "update archive")
    return {"id": encoded_path, "archived": archived}
