"""Dashboard response model."""

from typing import Dict, List

from pydantic import BaseModel

from swipe.models import Quest

from .users import ProfileResponse


class DecisionCounts(BaseModel):
    liked: int = 0
    disliked: int = 0
    remaining: int = 0


class DashboardResponse(BaseModel):
    profile: ProfileResponse
    liked_quests: List[Quest]
    counts: DecisionCounts
    likes_by_theme: Dict[str, int]
    suggestions: List[Quest]
