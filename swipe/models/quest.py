"""
Quest model: the immutable item presented on a swipe card.

Built from store/API dicts via Quest.model_validate(d) or ensure_quests().
Theme and price range are closed enumerations; duration is a positive number of days.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Theme(str, Enum):
    """Quest category tag."""

    ADVENTURE = "adventure"
    RELAXATION = "relaxation"
    CULTURE = "culture"
    NIGHTLIFE = "nightlife"
    NATURE = "nature"


class PriceRange(str, Enum):
    """Price tier of a quest, also used as a user's budget preference."""

    BUDGET = "budget"
    MID_RANGE = "mid-range"
    LUXURY = "luxury"


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class Quest(BaseModel):
    """
    A themed travel itinerary.

    id: store document id.
    activities: ordered activity labels as shown on the card.
    created_at: ISO timestamp; decks are ordered newest first on this key.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    description: str = ""
    theme: Theme
    activities: List[str] = Field(default_factory=list)
    destination_city: str
    destination_country: str
    price_range: PriceRange
    duration_days: int = Field(gt=0)
    image_url: Optional[str] = None
    created_at: str = Field(default_factory=utc_now_iso)

    @field_validator("activities", mode="before")
    @classmethod
    def _activities_as_list(cls, value):
        if value is None:
            return []
        return value

    @property
    def location(self) -> str:
        """'City, Country' label."""
        return f"{self.destination_city}, {self.destination_country}"


def ensure_quests(items: List[Union[Dict[str, Any], "Quest"]]) -> List["Quest"]:
    """Convert list of dicts or Quests to list of Quest models."""
    return [
        Quest.model_validate(q) if isinstance(q, dict) else q
        for q in items
    ]
