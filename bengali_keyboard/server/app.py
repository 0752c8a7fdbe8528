"""FastAPI application exposing the transliterator and typing sessions.

WHY: Clients that are not Python (editor plugins, web pages, scripts)
need the same conversion and the same live keyboard behaviour. FastAPI
provides request validation and automatic OpenAPI documentation.

HOW: Stateless endpoints convert text and list the pattern table.
Session endpoints keep an InputSession per client in a SessionStore: the
client sends each keystroke and receives the EditAction it must apply to
its own text, exactly as a local host would. A lifespan task expires idle
sessions periodically.

RULES:
- Error responses use a consistent ErrorResponse schema
- Unknown session → 404, session store full → 429, bad key → 422
- The session store is a module-level singleton created at import
- The server never applies edits itself; the client is the sink
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from bengali_keyboard import __version__
from bengali_keyboard.config import API_HOST, API_PORT, DEFAULT_ENABLED, configure_logging
from bengali_keyboard.core.session import BACKSPACE, EditAction, KeyEvent
from bengali_keyboard.core.table import default_table
from bengali_keyboard.host.document import transliterate_text
from bengali_keyboard.server.models import (
    BACKSPACE_NAME,
    ConvertRequest,
    ConvertResponse,
    EditActionResponse,
    ErrorResponse,
    HealthResponse,
    KeyRequest,
    PatternInfo,
    SessionCreateRequest,
    SessionResponse,
)
from bengali_keyboard.server.sessions import SessionRecord, SessionStore

logger = logging.getLogger(__name__)

_CLEANUP_INTERVAL_SECONDS = 300

# ---------------------------------------------------------------------------
# App and store setup
# ---------------------------------------------------------------------------

session_store = SessionStore()


async def _periodic_cleanup() -> None:
    """Expire idle sessions every 5 minutes."""
    while True:
        await asyncio.sleep(_CLEANUP_INTERVAL_SECONDS)
        session_store.cleanup_expired()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start periodic cleanup on startup, cancel on shutdown."""
    task = asyncio.create_task(_periodic_cleanup())
    yield
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass


app = FastAPI(
    lifespan=lifespan,
    title="Bengali Keyboard API",
    description=(
        "Phonetic Latin-to-Bengali transliteration. Convert text in one call, "
        "or open a typing session, send keystrokes, and apply the returned "
        "edit actions to your own text."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _record_to_response(record: SessionRecord) -> SessionResponse:
    return SessionResponse(
        id=record.id,
        enabled=record.session.is_enabled(),
        pending=record.session.pending,
        created_at=record.created_at,
    )


def _action_to_response(action: EditAction) -> EditActionResponse:
    return EditActionResponse(
        kind=action.kind,
        delete_count=action.delete_count,
        insert_text=action.insert_text,
        terminal_char=action.terminal_char,
        suppress_key=action.suppresses_key,
    )


def _get_record(session_id: str) -> SessionRecord:
    record = session_store.get_session(session_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Session not found: {}".format(session_id))
    return record


def _key_char(char: str) -> str:
    """Translate KeyRequest.char into the core's logical character."""
    if char == BACKSPACE_NAME:
        return BACKSPACE
    if len(char) != 1:
        raise HTTPException(
            status_code=422,
            detail="char must be a single character or '{}', got {!r}".format(
                BACKSPACE_NAME, char
            ),
        )
    return char


# ---------------------------------------------------------------------------
# Endpoints: Conversion
# ---------------------------------------------------------------------------


@app.post(
    "/convert",
    response_model=ConvertResponse,
    tags=["conversion"],
    summary="Convert phonetic text to Bengali",
    description=(
        "Converts free text the same way typing it with the keyboard enabled "
        "would, including a final word with no trailing space."
    ),
)
async def convert_text(request: ConvertRequest) -> ConvertResponse:
    return ConvertResponse(text=request.text, output=transliterate_text(request.text))


@app.get(
    "/patterns",
    response_model=List[PatternInfo],
    tags=["conversion"],
    summary="List the phonetic pattern table",
    description="Returns every pattern in its canonical declaration order.",
)
async def list_patterns() -> List[PatternInfo]:
    table = default_table()
    return [
        PatternInfo(
            pattern=entry.pattern,
            script=entry.script,
            is_vowel=entry.is_vowel,
            diacritic=table.diacritic_for(entry.pattern),
        )
        for entry in table
    ]


# ---------------------------------------------------------------------------
# Endpoints: Sessions
# ---------------------------------------------------------------------------


@app.post(
    "/sessions",
    response_model=SessionResponse,
    status_code=201,
    tags=["sessions"],
    summary="Open a typing session",
    responses={
        429: {"model": ErrorResponse, "description": "Too many sessions"},
    },
)
async def create_session(request: Optional[SessionCreateRequest] = None) -> SessionResponse:
    enabled = DEFAULT_ENABLED
    if request is not None and request.enabled is not None:
        enabled = request.enabled

    try:
        record = session_store.create_session(enabled=enabled)
    except ValueError as exc:
        raise HTTPException(status_code=429, detail=str(exc))

    return _record_to_response(record)


@app.get(
    "/sessions",
    response_model=List[SessionResponse],
    tags=["sessions"],
    summary="List open typing sessions",
)
async def list_sessions() -> List[SessionResponse]:
    return [_record_to_response(record) for record in session_store.list_sessions()]


@app.get(
    "/sessions/{session_id}",
    response_model=SessionResponse,
    tags=["sessions"],
    summary="Get session state",
    responses={
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def get_session(session_id: str) -> SessionResponse:
    return _record_to_response(_get_record(session_id))


@app.delete(
    "/sessions/{session_id}",
    status_code=204,
    tags=["sessions"],
    summary="Close a typing session",
    responses={
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def delete_session(session_id: str) -> Response:
    if not session_store.delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found: {}".format(session_id))
    return Response(status_code=204)


@app.post(
    "/sessions/{session_id}/keys",
    response_model=EditActionResponse,
    tags=["sessions"],
    summary="Send one keystroke",
    description=(
        "Feeds one key event to the session and returns the edit the client "
        "must apply to its text."
    ),
    responses={
        404: {"model": ErrorResponse, "description": "Session not found"},
        422: {"model": ErrorResponse, "description": "Invalid key"},
    },
)
async def send_key(session_id: str, request: KeyRequest) -> EditActionResponse:
    record = _get_record(session_id)
    event = KeyEvent(char=_key_char(request.char), is_key_down=request.is_key_down)
    action = record.session.handle(event)
    return _action_to_response(action)


@app.post(
    "/sessions/{session_id}/toggle",
    response_model=SessionResponse,
    tags=["sessions"],
    summary="Toggle the keyboard on or off",
    description="Flips the enabled flag and discards any buffered characters.",
    responses={
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def toggle_session(session_id: str) -> SessionResponse:
    record = _get_record(session_id)
    record.session.toggle()
    return _record_to_response(record)


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__, sessions=len(session_store))


def run_api(host: str = API_HOST, port: int = API_PORT) -> None:
    """Entry point for the bengali-keyboard-api console script."""
    import uvicorn

    configure_logging()
    uvicorn.run(app, host=host, port=port)
