"""Quest generation request/response models."""

from typing import Optional

from pydantic import BaseModel

from sidequest.services.quest_generator import QuestTemplate


class GenerateQuestRequest(QuestTemplate):
    """Template plus a flag to insert the generated quest into the catalogue."""

    save: bool = False


class GenerateQuestResponse(BaseModel):
    success: bool = True
    quest: dict
    fallback: bool = False
    quest_id: Optional[str] = None
