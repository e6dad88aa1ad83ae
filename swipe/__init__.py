"""
Side Quest swipe translator

Single entry point for the swipe package:
- models/: Quest, Decision, GestureState, VisualFeedback
- mappings: offset -> rotation / overlay opacity, release decision
- session: GestureSession state machine over one deck
- input: DragAdapter for mouse, touch, pointer and pan callbacks
- events: SessionEvent, RollingLog and other sinks
"""

from .config import DEFAULT_GESTURE_CONFIG, GestureConfig, resolve_config
from .events import (
    CompositeSink,
    EventKind,
    EventSink,
    LoggingSink,
    NullSink,
    RollingLog,
    SessionEvent,
)
from .input import DragAdapter
from .mappings import (
    accept_opacity,
    decide_release,
    feedback_for_offset,
    reject_opacity,
    rotation_for_offset,
)
from .models import (
    Action,
    Decision,
    Direction,
    GestureOutcome,
    GestureState,
    PriceRange,
    Quest,
    SessionSnapshot,
    Theme,
    VisualFeedback,
    ensure_quests,
)
from .session import DecisionRecorder, GestureSession, as_direction

__all__ = [
    "Action",
    "CompositeSink",
    "DEFAULT_GESTURE_CONFIG",
    "Decision",
    "DecisionRecorder",
    "Direction",
    "DragAdapter",
    "EventKind",
    "EventSink",
    "GestureConfig",
    "GestureOutcome",
    "GestureSession",
    "GestureState",
    "LoggingSink",
    "NullSink",
    "PriceRange",
    "Quest",
    "RollingLog",
    "SessionEvent",
    "SessionSnapshot",
    "Theme",
    "VisualFeedback",
    "accept_opacity",
    "as_direction",
    "decide_release",
    "ensure_quests",
    "feedback_for_offset",
    "reject_opacity",
    "resolve_config",
    "rotation_for_offset",
]
