"""Data models for the swipe translator."""

from .decision import Action, Decision, Direction
from .feedback import VisualFeedback
from .quest import PriceRange, Quest, Theme, ensure_quests, utc_now_iso
from .session import GestureOutcome, GestureState, SessionSnapshot

__all__ = [
    "Action",
    "Decision",
    "Direction",
    "GestureOutcome",
    "GestureState",
    "PriceRange",
    "Quest",
    "SessionSnapshot",
    "Theme",
    "VisualFeedback",
    "ensure_quests",
    "utc_now_iso",
]
