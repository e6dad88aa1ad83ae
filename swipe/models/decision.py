"""
Decision model: a user's accept/reject outcome for one quest.

Stored action values are "liked" (accept) and "disliked" (reject).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .quest import utc_now_iso


class Action(str, Enum):
    """Durable outcome recorded for a (user, quest) pair."""

    ACCEPT = "liked"
    REJECT = "disliked"

    @classmethod
    def parse(cls, value: str) -> "Action":
        """Accept stored values plus the accept/reject and like/dislike spellings."""
        key = (value or "").strip().lower()
        aliases = {
            "liked": cls.ACCEPT,
            "like": cls.ACCEPT,
            "accept": cls.ACCEPT,
            "accepted": cls.ACCEPT,
            "right": cls.ACCEPT,
            "disliked": cls.REJECT,
            "dislike": cls.REJECT,
            "reject": cls.REJECT,
            "rejected": cls.REJECT,
            "left": cls.REJECT,
        }
        if key not in aliases:
            raise ValueError(f"Unknown action: {value!r}")
        return aliases[key]

    @property
    def direction(self) -> "Direction":
        return Direction.RIGHT if self is Action.ACCEPT else Direction.LEFT


class Direction(str, Enum):
    """Horizontal direction of a committed swipe."""

    RIGHT = "right"
    LEFT = "left"

    @property
    def sign(self) -> int:
        return 1 if self is Direction.RIGHT else -1

    @property
    def action(self) -> Action:
        return Action.ACCEPT if self is Direction.RIGHT else Action.REJECT


class Decision(BaseModel):
    """One recorded decision. At most one per (user_id, quest_id) is meaningful."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    user_id: str
    quest_id: str
    action: Action
    timestamp: str = Field(default_factory=utc_now_iso)
