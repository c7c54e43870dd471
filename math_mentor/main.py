"""FastAPI application with WebSocket endpoint for tutoring sessions."""

from __future__ import annotations

import asyncio
import logging
import re
import time
from collections import OrderedDict

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from math_mentor.config import DEV_MODE, STATIC_DIR
from math_mentor.models import Action
from math_mentor.session import PendingRequest, RequestKind, TransitionError, TutoringSession

if DEV_MODE:
    from math_mentor.mock_client import request_full_analysis, request_hint
else:
    from math_mentor.tutor_client import request_full_analysis, request_hint

logger = logging.getLogger(__name__)

# Session configuration
MAX_SESSIONS = 1000  # Maximum number of concurrent sessions
SESSION_TTL_SECONDS = 3600  # Sessions expire after 1 hour of inactivity

# Valid session ID pattern: UUID format or alphanumeric with hyphens (max 64 chars)
SESSION_ID_PATTERN = re.compile(r"^[a-zA-Z0-9\-]{1,64}$")


def _validate_session_id(session_id: str) -> bool:
    """Validate that a session ID is safe and well-formed."""
    return bool(SESSION_ID_PATTERN.match(session_id))


class SessionStore:
    """In-memory session store with TTL and max size limits."""

    def __init__(self, max_sessions: int = MAX_SESSIONS, ttl_seconds: int = SESSION_TTL_SECONDS):
        self._sessions: OrderedDict[str, tuple[TutoringSession, float]] = OrderedDict()
        self._max_sessions = max_sessions
        self._ttl_seconds = ttl_seconds

    def get(self, session_id: str) -> TutoringSession | None:
        """Get a session, updating its last-accessed time."""
        if session_id not in self._sessions:
            return None
        session, _ = self._sessions[session_id]
        self._sessions[session_id] = (session, time.time())
        self._sessions.move_to_end(session_id)
        return session

    def create(self, session_id: str) -> TutoringSession:
        """Create a new session, evicting old ones if necessary."""
        self._cleanup_expired()
        while len(self._sessions) >= self._max_sessions:
            oldest_key = next(iter(self._sessions))
            del self._sessions[oldest_key]
            logger.info("Evicted session %s due to capacity limit", oldest_key)

        session = TutoringSession(session_id)
        self._sessions[session_id] = (session, time.time())
        return session

    def get_or_create(self, session_id: str) -> TutoringSession:
        session = self.get(session_id)
        if session is None:
            session = self.create(session_id)
        return session

    def _cleanup_expired(self) -> None:
        """Remove sessions that have exceeded TTL."""
        now = time.time()
        expired = [
            sid for sid, (_, last_access) in self._sessions.items()
            if now - last_access > self._ttl_seconds
        ]
        for sid in expired:
            del self._sessions[sid]
            logger.info("Expired session %s due to inactivity", sid)

    def clear(self) -> None:
        """Clear all sessions (for testing)."""
        self._sessions.clear()

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions


# Global session store
sessions = SessionStore()

app = FastAPI(title="Math Mentor")
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


@app.get("/", response_class=HTMLResponse)
async def root() -> HTMLResponse:
    index = STATIC_DIR / "index.html"
    return HTMLResponse(index.read_text(encoding="utf-8"))


@app.websocket("/ws/{session_id}")
async def websocket_endpoint(websocket: WebSocket, session_id: str) -> None:
    # Validate session ID format before accepting connection
    if not _validate_session_id(session_id):
        await websocket.close(code=4000, reason="Invalid session ID format")
        return

    await websocket.accept()

    session = sessions.get_or_create(session_id)

    try:
        await _send_state(websocket, session)
        # Reconnected while a request was running: deliver its reply here
        if await session.wait_for_reply():
            await _send_state(websocket, session)

        while True:
            data = await websocket.receive_json()
            if not isinstance(data, dict):
                logger.warning("Session %s sent a non-object frame", session_id)
                continue
            raw_action = data.get("action", "")

            try:
                action = Action(raw_action)
            except ValueError:
                logger.warning("Session %s sent unknown action %r", session_id, raw_action)
                continue

            try:
                if action == Action.UPLOAD:
                    image = data.get("image", "")
                    if not isinstance(image, str) or not image.strip():
                        logger.warning("Session %s sent an empty upload", session_id)
                        continue
                    session.upload(image)
                elif action == Action.HINT:
                    await _run_request(websocket, session, session.begin_hint())
                elif action == Action.ANALYSIS:
                    await _run_request(websocket, session, session.begin_analysis())
                elif action == Action.RESET:
                    if action not in session.available_actions():
                        raise TransitionError(
                            f"Cannot reset in state {session.state.value}"
                        )
                    session.reset()
            except TransitionError as exc:
                logger.warning("Session %s rejected action: %s", session_id, exc)

            await _send_state(websocket, session)

    except WebSocketDisconnect:
        logger.info("Session %s disconnected", session_id)
    except Exception:
        logger.exception("Error in session %s", session_id)
        try:
            await websocket.send_json(
                {
                    "type": "error",
                    "content": "An unexpected error occurred. Please refresh and try again.",
                }
            )
        except Exception:
            pass


async def _run_request(
    websocket: WebSocket, session: TutoringSession, pending: PendingRequest
) -> None:
    """Start the tutor call, show the pending placeholder, wait for the reply.

    The call runs as a task on the session, so it completes and resolves
    the placeholder even if this connection drops while it is running.
    """
    if pending.kind == RequestKind.HINT:
        reply = request_hint(pending.image_data, pending.media_type)
    else:
        reply = request_full_analysis(pending.image_data, pending.media_type)
    task = session.start(pending, reply)

    await _send_state(websocket, session)
    await asyncio.shield(task)


async def _send_state(websocket: WebSocket, session: TutoringSession) -> None:
    """Send the full session snapshot; the client re-renders from it."""
    await websocket.send_json({"type": "state", **session.snapshot()})
