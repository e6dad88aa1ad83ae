"""Swipe session endpoints: deck loading and pointer events for one user."""

import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Query

from swipe import CompositeSink, DragAdapter, GestureSession, LoggingSink, RollingLog

from ..models import (
    CreateSessionRequest,
    DecideRequest,
    GestureResponse,
    PanEndRequest,
    PointerRequest,
    ReleaseRequest,
    SessionResponse,
)
from ..services import StoreDecisionRecorder, StoreError
from ..state import get_state
from ..utils import EVENT_LOG_SIZE, clamp_deck_size

router = APIRouter()

swipe_logger = logging.getLogger("sidequest.swipe")


def _log_sessions(msg: str) -> None:
    """Log to stdout with flush so Docker/capture shows it immediately."""
    print(f"[sessions] {msg}", flush=True)


def _get_entry(session_id: str) -> dict:
    entry = get_state().sessions.get(session_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Session not found")
    return entry


def _session_response(entry: dict) -> SessionResponse:
    return SessionResponse(
        session=entry["session"].snapshot(),
        created_at=entry["created_at"],
        log=entry["log"].lines(),
    )


def _gesture_response(entry: dict, outcome) -> GestureResponse:
    session = entry["session"]
    return GestureResponse(session_id=session.session_id, outcome=outcome, session=session.snapshot())


@router.post("/create", response_model=SessionResponse)
async def create_session(request: CreateSessionRequest):
    """Load a fresh deck of undecided quests (newest first) and start a swipe session."""
    state = get_state()
    size = clamp_deck_size(request.limit, default=state.config.deck_size)
    _log_sessions(f"create_session started: user_id={request.user_id!r}, limit={size}")
    try:
        deck = await state.deck_supplier.build_deck_async(request.user_id, size)
    except StoreError as e:
        _log_sessions(f"create_session error: {e}")
        raise HTTPException(status_code=503, detail=str(e))

    session_id = str(uuid.uuid4())[:8]
    log = RollingLog(maxlen=EVENT_LOG_SIZE)
    session = GestureSession(
        deck,
        request.user_id,
        StoreDecisionRecorder(state.decision_store),
        sink=CompositeSink(log, LoggingSink(swipe_logger)),
        config=state.gesture_config,
        session_id=session_id,
    )
    entry = {
        "session": session,
        "adapter": DragAdapter(session),
        "log": log,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    state.sessions[session_id] = entry
    _log_sessions(f"create_session done: session_id={session_id}, deck={len(deck)}")
    return _session_response(entry)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session_info(
    session_id: str,
    wait: bool = Query(False, description="Wait for the exit animation and pending writes first"),
):
    entry = _get_entry(session_id)
    if wait:
        await entry["session"].settle()
    return _session_response(entry)


@router.post("/{session_id}/press", response_model=GestureResponse)
async def press(session_id: str, request: PointerRequest):
    entry = _get_entry(session_id)
    return _gesture_response(entry, entry["adapter"].pointer_down(request.x))


@router.post("/{session_id}/move", response_model=GestureResponse)
async def move(session_id: str, request: PointerRequest):
    entry = _get_entry(session_id)
    return _gesture_response(entry, entry["adapter"].pointer_move(request.x))


@router.post("/{session_id}/release", response_model=GestureResponse)
async def release(session_id: str, request: ReleaseRequest = None):
    entry = _get_entry(session_id)
    x = request.x if request else None
    outcome = entry["adapter"].pointer_up(x)
    if outcome.committed:
        _log_sessions(f"{session_id} committed {outcome.committed.value} quest={outcome.quest_id}")
    return _gesture_response(entry, outcome)


@router.post("/{session_id}/pan-end", response_model=GestureResponse)
async def pan_end(session_id: str, request: PanEndRequest):
    entry = _get_entry(session_id)
    outcome = entry["adapter"].pan_end(request.offset_x)
    if outcome.committed:
        _log_sessions(f"{session_id} committed {outcome.committed.value} quest={outcome.quest_id}")
    return _gesture_response(entry, outcome)


@router.post("/{session_id}/decide", response_model=GestureResponse)
async def decide(session_id: str, request: DecideRequest):
    """Like/dislike button: same as a full swipe, subject to the same guard."""
    entry = _get_entry(session_id)
    try:
        outcome = entry["session"].decide(request.action)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if outcome.committed:
        _log_sessions(f"{session_id} committed {outcome.committed.value} quest={outcome.quest_id}")
    return _gesture_response(entry, outcome)


@router.get("/{session_id}/events")
def get_events(session_id: str):
    """Most recent session events (debug panel)."""
    entry = _get_entry(session_id)
    return {
        "session_id": session_id,
        "events": [e.model_dump(mode="json") for e in entry["log"].events],
    }


@router.delete("/{session_id}")
async def delete_session(session_id: str):
    """End the session. Decision writes already dispatched still complete."""
    state = get_state()
    entry = state.sessions.pop(session_id, None)
    if not entry:
        raise HTTPException(status_code=404, detail="Session not found")
    session = entry["session"]
    session.close()
    _log_sessions(f"{session_id} closed: dispatched={len(session.dispatched)}, failed={len(session.failures)}")
    return {"status": "ok", "session_id": session_id, "decisions_dispatched": len(session.dispatched)}
