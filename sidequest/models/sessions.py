"""Swipe session request/response models."""

import math
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from swipe.models import GestureOutcome, SessionSnapshot


def _finite(v: float) -> float:
    if not math.isfinite(v):
        raise ValueError("must be a finite number")
    return v


class CreateSessionRequest(BaseModel):
    user_id: str
    limit: Optional[int] = Field(default=None, ge=1)

    @field_validator("user_id")
    @classmethod
    def user_id_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("user_id cannot be empty")
        return v.strip()


class PointerRequest(BaseModel):
    """Horizontal pointer coordinate for press/move/release."""

    x: float

    @field_validator("x")
    @classmethod
    def x_finite(cls, v: float) -> float:
        return _finite(v)


class ReleaseRequest(BaseModel):
    x: Optional[float] = None

    @field_validator("x")
    @classmethod
    def x_finite(cls, v):
        return v if v is None else _finite(v)


class PanEndRequest(BaseModel):
    """Gesture libraries report the total offset from the press, not a coordinate."""

    offset_x: float

    @field_validator("offset_x")
    @classmethod
    def offset_finite(cls, v: float) -> float:
        return _finite(v)


class DecideRequest(BaseModel):
    action: str = Field(description="like | dislike (also accept/reject, right/left)")


class SessionResponse(BaseModel):
    session: SessionSnapshot
    created_at: str
    log: List[str] = []


class GestureResponse(BaseModel):
    session_id: str
    outcome: GestureOutcome
    session: SessionSnapshot
