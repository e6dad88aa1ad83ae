"""
Gesture session: the drag-to-decision state machine over one deck.

IDLE -> DRAGGING on press; DRAGGING -> DRAGGING on move; on release the
session commits when |offset| > threshold (COMMITTING) or snaps back to IDLE
with a zero offset. After exit_duration the index advances and the session
returns to IDLE, or to EXHAUSTED once the deck is consumed.

COMMITTING is the single-flight guard: presses, releases and manual decisions
arriving while a commit is in flight are ignored, so each card yields at most
one decision. The decision write runs as an asyncio task and never holds up
the advance; a failed write is logged and reported as a COMMIT_FAILED event.
Calls that can commit (release, decide) need a running event loop.
"""

import asyncio
import logging
import math
import uuid
from typing import Any, Dict, List, Optional, Protocol, Sequence, Set, Tuple, Union

from .config import GestureConfig, resolve_config
from .events import EventKind, EventSink, NullSink, SessionEvent
from .mappings import decide_release, feedback_for_offset
from .models.decision import Action, Decision, Direction
from .models.feedback import VisualFeedback
from .models.quest import Quest, ensure_quests
from .models.session import GestureOutcome, GestureState, SessionSnapshot

logger = logging.getLogger(__name__)


class DecisionRecorder(Protocol):
    """Persists one decision. Raise on failure."""

    async def record_decision(self, decision: Decision) -> Any:
        ...


def _coerce_coordinate(x: float) -> float:
    value = float(x)
    if not math.isfinite(value):
        raise ValueError(f"Pointer coordinate must be finite, got {x!r}")
    return value


def as_direction(value: Union[Direction, Action, str]) -> Direction:
    """Resolve a manual decision request (direction, action, or its string form)."""
    if isinstance(value, Direction):
        return value
    if isinstance(value, Action):
        return value.direction
    try:
        return Direction(str(value).strip().lower())
    except ValueError:
        return Action.parse(str(value)).direction


class GestureSession:
    """One user's pass over one deck."""

    def __init__(
        self,
        deck: Sequence[Union[Quest, Dict]],
        user_id: str,
        recorder: DecisionRecorder,
        sink: Optional[EventSink] = None,
        config: Optional[GestureConfig] = None,
        session_id: Optional[str] = None,
    ):
        if not user_id or not user_id.strip():
            raise ValueError("user_id cannot be empty")
        self.session_id = session_id or str(uuid.uuid4())[:8]
        self.user_id = user_id.strip()
        self.config = resolve_config(config)
        self._deck: Tuple[Quest, ...] = tuple(ensure_quests(list(deck)))
        self._recorder = recorder
        self._sink: EventSink = sink if sink is not None else NullSink()

        self._index = 0
        self._offset = 0.0
        self._start_x = 0.0
        self._state = GestureState.IDLE if self._deck else GestureState.EXHAUSTED
        self._closed = False

        self._dispatched: List[Decision] = []
        self._failures: List[Tuple[Decision, str]] = []
        self._pending: Set[asyncio.Task] = set()
        self._exit_handle: Optional[asyncio.TimerHandle] = None
        self._exit_done: Optional[asyncio.Future] = None

        self._emit(EventKind.LOADED, reason=f"deck_size={len(self._deck)}")
        if self._state is GestureState.EXHAUSTED:
            self._emit(EventKind.EXHAUSTED)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def index(self) -> int:
        return self._index

    @property
    def offset(self) -> float:
        return self._offset

    @property
    def drag_origin(self) -> float:
        """Horizontal coordinate recorded at the last press."""
        return self._start_x

    @property
    def deck(self) -> Tuple[Quest, ...]:
        return self._deck

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def current_quest(self) -> Optional[Quest]:
        if self._index < len(self._deck):
            return self._deck[self._index]
        return None

    @property
    def remaining(self) -> int:
        return max(len(self._deck) - self._index, 0)

    @property
    def dispatched(self) -> List[Decision]:
        """Decisions handed to the recorder, in commit order."""
        return list(self._dispatched)

    @property
    def failures(self) -> List[Tuple[Decision, str]]:
        """(decision, reason) for every write that failed."""
        return list(self._failures)

    @property
    def feedback(self) -> VisualFeedback:
        return feedback_for_offset(
            self._offset, self.config, exiting=self._state is GestureState.COMMITTING
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session_id,
            user_id=self.user_id,
            state=self._state,
            index=self._index,
            deck_size=len(self._deck),
            remaining=self.remaining,
            offset=self._offset,
            feedback=self.feedback,
            current_quest=self.current_quest,
            decisions_dispatched=len(self._dispatched),
            failed_commits=len(self._failures),
            closed=self._closed,
        )

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------

    def press(self, x: float) -> GestureOutcome:
        """Pointer/touch down at horizontal coordinate x."""
        x = _coerce_coordinate(x)
        blocked = self._blocked_reason()
        if blocked:
            return self._ignore(blocked)
        self._start_x = x
        self._offset = 0.0
        self._state = GestureState.DRAGGING
        self._emit(EventKind.PRESS, quest_id=self.current_quest.id)
        return self._outcome(True)

    def move(self, x: float) -> GestureOutcome:
        """Pointer/touch move; returns the live visual feedback."""
        x = _coerce_coordinate(x)
        if self._closed or self._state is not GestureState.DRAGGING:
            # Hover moves are frequent; not worth an event.
            return self._ignore("no active drag", notify=False)
        self._offset = x - self._start_x
        feedback = self.feedback
        self._emit(EventKind.DRAG, quest_id=self.current_quest.id, feedback=feedback)
        return self._outcome(True, feedback=feedback)

    def release(self, x: Optional[float] = None) -> GestureOutcome:
        """Pointer/touch up. x updates the offset first when given."""
        if x is not None:
            x = _coerce_coordinate(x)
        if self._closed:
            return self._ignore("session closed")
        if self._state is not GestureState.DRAGGING:
            return self._ignore("no active drag")
        if x is not None:
            self._offset = x - self._start_x
        direction = decide_release(self._offset, self.config)
        if direction is None:
            quest_id = self.current_quest.id
            self._offset = 0.0
            self._state = GestureState.IDLE
            self._emit(EventKind.SNAP_BACK, quest_id=quest_id)
            return self._outcome(True, quest_id=quest_id)
        return self._commit(direction)

    def decide(self, action: Union[Direction, Action, str]) -> GestureOutcome:
        """Manual accept/reject (e.g. a button), same guard as a drag release."""
        direction = as_direction(action)
        blocked = self._blocked_reason()
        if blocked:
            return self._ignore(blocked)
        return self._commit(direction)

    def close(self) -> None:
        """
        Tear down the session. Pending decision writes keep running; the exit
        timer is cancelled and no further events reach the sink.
        """
        if self._closed:
            return
        if self._exit_handle is not None:
            self._exit_handle.cancel()
            self._exit_handle = None
        if self._exit_done is not None and not self._exit_done.done():
            self._exit_done.set_result(None)
        self._emit(EventKind.CLOSED, reason=f"pending_writes={len(self._pending)}")
        self._closed = True

    async def settle(self) -> None:
        """Wait for the exit animation and any in-flight decision writes."""
        if self._exit_done is not None and not self._exit_done.done():
            await self._exit_done
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _blocked_reason(self) -> Optional[str]:
        if self._closed:
            return "session closed"
        if self._state is GestureState.COMMITTING:
            return "commit in flight"
        if self._state is GestureState.EXHAUSTED:
            return "deck exhausted"
        return None

    def _commit(self, direction: Direction) -> GestureOutcome:
        loop = asyncio.get_running_loop()
        quest = self.current_quest
        self._state = GestureState.COMMITTING
        self._offset = direction.sign * self.config.exit_distance
        decision = Decision(user_id=self.user_id, quest_id=quest.id, action=direction.action)
        self._dispatched.append(decision)
        self._emit(EventKind.COMMIT, quest_id=quest.id, direction=direction, feedback=self.feedback)

        task = loop.create_task(self._persist(decision))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

        self._exit_done = loop.create_future()
        self._exit_handle = loop.call_later(self.config.exit_duration, self._finish_exit)
        return self._outcome(True, committed=direction, quest_id=quest.id)

    def _finish_exit(self) -> None:
        self._exit_handle = None
        self._index += 1
        self._offset = 0.0
        self._start_x = 0.0
        if self._index >= len(self._deck):
            self._state = GestureState.EXHAUSTED
            self._emit(EventKind.EXHAUSTED)
        else:
            self._state = GestureState.IDLE
            self._emit(EventKind.ADVANCED, quest_id=self.current_quest.id)
        if self._exit_done is not None and not self._exit_done.done():
            self._exit_done.set_result(None)

    async def _persist(self, decision: Decision) -> None:
        try:
            await self._recorder.record_decision(decision)
        except Exception as e:
            reason = f"{type(e).__name__}: {e}"
            self._failures.append((decision, reason))
            logger.warning(
                "Decision write failed session=%s user=%s quest=%s action=%s: %s",
                self.session_id, decision.user_id, decision.quest_id, decision.action.value, reason,
            )
            self._emit(
                EventKind.COMMIT_FAILED,
                quest_id=decision.quest_id,
                direction=decision.action.direction,
                reason=reason,
            )
        else:
            logger.debug(
                "Decision recorded session=%s quest=%s action=%s",
                self.session_id, decision.quest_id, decision.action.value,
            )

    def _emit(self, kind: EventKind, **fields) -> None:
        if self._closed:
            return
        event = SessionEvent(
            kind=kind,
            session_id=self.session_id,
            state=self._state,
            index=self._index,
            **fields,
        )
        try:
            self._sink.notify(event)
        except Exception:
            logger.exception("Event sink failed on %s (session=%s)", kind.value, self.session_id)

    def _ignore(self, reason: str, notify: bool = True) -> GestureOutcome:
        if notify:
            self._emit(EventKind.IGNORED, reason=reason)
        return self._outcome(False, reason=reason)

    def _outcome(
        self,
        accepted: bool,
        feedback: Optional[VisualFeedback] = None,
        committed: Optional[Direction] = None,
        quest_id: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> GestureOutcome:
        return GestureOutcome(
            accepted=accepted,
            state=self._state,
            index=self._index,
            offset=self._offset,
            feedback=feedback if feedback is not None else self.feedback,
            committed=committed,
            quest_id=quest_id,
            reason=reason,
        )
