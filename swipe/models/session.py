"""
Session models: gesture state and the snapshot reported to the host UI.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from .decision import Direction
from .feedback import VisualFeedback
from .quest import Quest


class GestureState(str, Enum):
    """Translator states. EXHAUSTED is terminal."""

    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTING = "committing"
    EXHAUSTED = "exhausted"


class SessionSnapshot(BaseModel):
    """Point-in-time view of a gesture session."""

    session_id: str
    user_id: str
    state: GestureState
    index: int
    deck_size: int
    remaining: int
    offset: float
    feedback: VisualFeedback
    current_quest: Optional[Quest] = None
    decisions_dispatched: int = 0
    failed_commits: int = 0
    closed: bool = False


class GestureOutcome(BaseModel):
    """
    Result of one input event.

    accepted is False when the event was a guarded no-op (e.g. press while
    committing); reason then says why.
    """

    accepted: bool
    state: GestureState
    index: int
    offset: float
    feedback: VisualFeedback
    committed: Optional[Direction] = None
    quest_id: Optional[str] = None
    reason: Optional[str] = None
