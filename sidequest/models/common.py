"""Common Pydantic models shared across routes."""

from typing import List, Optional

from pydantic import BaseModel

from swipe.models import Quest


class QuestListResponse(BaseModel):
    quests: List[Quest]
    total: int


class DecisionOut(BaseModel):
    quest_id: str
    action: str
    timestamp: str
    quest: Optional[Quest] = None


class StatusResponse(BaseModel):
    status: str = "ok"
    message: Optional[str] = None
