"""
Offset mappings: pure functions from horizontal drag offset to card visuals
and to the release decision.

Rotation: [-exit_distance, 0, exit_distance] -> [-max_rotation, 0, max_rotation],
linear between anchors and clamped outside.
Accept overlay: 0 up to feedback_start, linear to 1.0 at threshold, 1.0 beyond.
Reject overlay mirrors accept for negative offsets.
"""

from typing import Optional

import numpy as np

from .config import DEFAULT_GESTURE_CONFIG, GestureConfig
from .models.decision import Direction
from .models.feedback import VisualFeedback


def rotation_for_offset(offset: float, config: GestureConfig = DEFAULT_GESTURE_CONFIG) -> float:
    """Card rotation in degrees."""
    anchor = config.exit_distance
    return float(
        np.interp(offset, [-anchor, 0.0, anchor], [-config.max_rotation, 0.0, config.max_rotation])
    )


def accept_opacity(offset: float, config: GestureConfig = DEFAULT_GESTURE_CONFIG) -> float:
    """Opacity of the "accept" overlay; full exactly at the commit threshold."""
    return float(np.interp(offset, [config.feedback_start, config.threshold], [0.0, 1.0]))


def reject_opacity(offset: float, config: GestureConfig = DEFAULT_GESTURE_CONFIG) -> float:
    """Opacity of the "reject" overlay (mirror of accept_opacity)."""
    return accept_opacity(-offset, config)


def feedback_for_offset(
    offset: float,
    config: GestureConfig = DEFAULT_GESTURE_CONFIG,
    exiting: bool = False,
) -> VisualFeedback:
    """Full visual tuple; card_opacity is 0 while the exit animation plays."""
    return VisualFeedback(
        offset=float(offset),
        rotation=rotation_for_offset(offset, config),
        accept_opacity=accept_opacity(offset, config),
        reject_opacity=reject_opacity(offset, config),
        card_opacity=0.0 if exiting else 1.0,
    )


def decide_release(offset: float, config: GestureConfig = DEFAULT_GESTURE_CONFIG) -> Optional[Direction]:
    """Direction to commit for a release at this offset, or None to snap back."""
    if offset > config.threshold:
        return Direction.RIGHT
    if offset < -config.threshold:
        return Direction.LEFT
    return None
