"""Request/response models for travel profiles and recorded decisions."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, field_validator

from swipe.models import Action, PriceRange


class TravelInterest(str, Enum):
    ADVENTURE = "adventure"
    RELAXATION = "relaxation"
    CULTURE = "culture"
    NIGHTLIFE = "nightlife"
    NATURE = "nature"
    FOOD = "food"
    BEACH = "beach"
    CITY = "city"
    SPORTS = "sports"
    HISTORY = "history"


class CreateProfileRequest(BaseModel):
    """Onboarding form: username, at least one interest, budget."""

    user_id: str
    username: str
    travel_interests: List[TravelInterest]
    budget_preference: PriceRange = PriceRange.MID_RANGE

    @field_validator("user_id")
    @classmethod
    def user_id_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("user_id cannot be empty")
        return v.strip()


class UpdateProfileRequest(BaseModel):
    """Request body for PATCH profile. Fields left out are unchanged."""

    username: Optional[str] = None
    travel_interests: Optional[List[TravelInterest]] = None
    budget_preference: Optional[PriceRange] = None


class ProfileResponse(BaseModel):
    user_id: str
    username: str
    travel_interests: List[str]
    budget_preference: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class RecordDecisionRequest(BaseModel):
    """Manual decision outside a swipe session (like/dislike and aliases)."""

    quest_id: str
    action: Action
    timestamp: Optional[str] = None

    @field_validator("action", mode="before")
    @classmethod
    def parse_action(cls, v):
        return Action.parse(v) if isinstance(v, str) else v
