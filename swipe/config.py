"""
Gesture configuration: commit threshold, animation anchors, and exit timing.

The threshold is shared between the live overlay mapping and the release
decision: overlay opacity reaches 1.0 at exactly the offset beyond which a
release commits. GestureConfig keeps those anchors ordered.
"""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class GestureConfig(BaseModel):
    """Constants for the drag-to-decision translator."""

    model_config = ConfigDict(frozen=True)

    # Absolute horizontal offset beyond which a release commits a decision.
    threshold: float = 100.0

    # Offset the card is animated to on commit; also the rotation anchor.
    exit_distance: float = 300.0

    # Rotation in degrees at +/- exit_distance (clamped beyond).
    max_rotation: float = 30.0

    # Offset below which the accept/reject overlay stays fully transparent.
    feedback_start: float = 10.0

    # Seconds between commit and advancing to the next card.
    exit_duration: float = 0.3

    @model_validator(mode="after")
    def anchors_are_ordered(self):
        if not 0 <= self.feedback_start < self.threshold < self.exit_distance:
            raise ValueError(
                "Gesture anchors must satisfy 0 <= feedback_start < threshold < exit_distance, "
                f"got {self.feedback_start}, {self.threshold}, {self.exit_distance}"
            )
        if self.max_rotation < 0:
            raise ValueError(f"max_rotation must be non-negative, got {self.max_rotation}")
        if self.exit_duration < 0:
            raise ValueError(f"exit_duration must be non-negative, got {self.exit_duration}")
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "GestureConfig":
        """Create config from a dict, ignoring unknown keys."""
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in (config_dict or {}).items() if k in allowed and v is not None}
        return cls.model_validate(filtered)


DEFAULT_GESTURE_CONFIG = GestureConfig()


def resolve_config(config: Optional["GestureConfig"]) -> "GestureConfig":
    """Return config or DEFAULT_GESTURE_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_GESTURE_CONFIG
