"""
Session events and sinks.

A GestureSession notifies one EventSink on every state transition. Sinks are
injected per session; RollingLog keeps the most recent events for the host UI
(debug panel), LoggingSink forwards to the stdlib logger.
"""

import logging
from collections import deque
from enum import Enum
from typing import Deque, List, Optional, Protocol

from pydantic import BaseModel, Field

from .models.decision import Direction
from .models.feedback import VisualFeedback
from .models.quest import utc_now_iso
from .models.session import GestureState

logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    LOADED = "loaded"
    PRESS = "press"
    DRAG = "drag"
    SNAP_BACK = "snap_back"
    COMMIT = "commit"
    ADVANCED = "advanced"
    EXHAUSTED = "exhausted"
    COMMIT_FAILED = "commit_failed"
    IGNORED = "ignored"
    CLOSED = "closed"


class SessionEvent(BaseModel):
    """One notification from a gesture session."""

    kind: EventKind
    session_id: str
    state: GestureState
    index: int
    quest_id: Optional[str] = None
    direction: Optional[Direction] = None
    feedback: Optional[VisualFeedback] = None
    reason: Optional[str] = None
    timestamp: str = Field(default_factory=utc_now_iso)

    def describe(self) -> str:
        """Single-line summary for logs and debug panels."""
        parts = [f"{self.kind.value}", f"state={self.state.value}", f"index={self.index}"]
        if self.quest_id:
            parts.append(f"quest={self.quest_id}")
        if self.direction:
            parts.append(f"direction={self.direction.value}")
        if self.feedback is not None:
            parts.append(f"offset={self.feedback.offset:.0f}")
        if self.reason:
            parts.append(f"reason={self.reason}")
        return " ".join(parts)


class EventSink(Protocol):
    """Observer of session transitions. Must not block."""

    def notify(self, event: SessionEvent) -> None:
        ...


class NullSink:
    """Discards every event."""

    def notify(self, event: SessionEvent) -> None:
        pass


class RollingLog:
    """Keeps the last maxlen events in memory."""

    def __init__(self, maxlen: int = 5):
        if maxlen < 1:
            raise ValueError("maxlen must be at least 1")
        self._events: Deque[SessionEvent] = deque(maxlen=maxlen)

    def notify(self, event: SessionEvent) -> None:
        self._events.append(event)

    @property
    def events(self) -> List[SessionEvent]:
        return list(self._events)

    def lines(self) -> List[str]:
        return [e.describe() for e in self._events]

    def clear(self) -> None:
        self._events.clear()


class LoggingSink:
    """Forwards events to a logger. DRAG events go at a lower level than the rest."""

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._log = log or logger
        self._level = level

    def notify(self, event: SessionEvent) -> None:
        if event.kind is EventKind.COMMIT_FAILED:
            level = logging.WARNING
        elif event.kind is EventKind.DRAG:
            level = logging.DEBUG
        else:
            level = self._level
        self._log.log(level, "[swipe %s] %s", event.session_id, event.describe())


class CompositeSink:
    """Fans out to several sinks in order."""

    def __init__(self, *sinks: EventSink):
        self._sinks = list(sinks)

    def notify(self, event: SessionEvent) -> None:
        for sink in self._sinks:
            sink.notify(event)
