"""
Drag input adapter: one entry point for every host input API.

Mouse, touch, pointer and gesture-library callbacks all reduce to
press / move / release on a GestureSession, so the threshold decision lives
in exactly one place (mappings.decide_release).
"""

from typing import Optional

from .models.session import GestureOutcome, GestureState
from .session import GestureSession


class DragAdapter:
    """Translates raw host events into GestureSession calls."""

    def __init__(self, session: GestureSession):
        self._session = session

    @property
    def session(self) -> GestureSession:
        return self._session

    def pointer_down(self, x: float) -> GestureOutcome:
        return self._session.press(x)

    def pointer_move(self, x: float) -> GestureOutcome:
        return self._session.move(x)

    def pointer_up(self, x: Optional[float] = None) -> GestureOutcome:
        return self._session.release(x)

    # Mouse and touch events carry the same horizontal coordinate.
    mouse_down = pointer_down
    mouse_move = pointer_move
    mouse_up = pointer_up
    touch_start = pointer_down
    touch_move = pointer_move
    touch_end = pointer_up

    def pan_end(self, offset_x: float) -> GestureOutcome:
        """
        Gesture libraries report the total offset at drag end rather than a
        coordinate. Reuse the active drag's anchor when pointer events already
        started one; otherwise run a synthetic press at 0.
        """
        session = self._session
        if session.state is not GestureState.DRAGGING:
            pressed = session.press(0.0)
            if not pressed.accepted:
                return pressed
            return session.release(float(offset_x))
        return session.release(session.drag_origin + float(offset_x))
