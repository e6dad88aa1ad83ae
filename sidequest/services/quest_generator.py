"""
Quest content generator.

Turns a structural template (location, theme, budget, duration) into a quest
name, description and activity list via an LLM, falling back to deterministic
templated content when the call fails or the output cannot be parsed.
"""

import logging
from typing import Awaitable, Callable, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from swipe.models import PriceRange, Theme

from .llm_client import complete_text, parse_json_response

logger = logging.getLogger(__name__)

Completer = Callable[..., Awaitable[str]]

SYSTEM_PROMPT = (
    "You are a creative travel expert who designs exciting, themed travel experiences. "
    "You specialize in creating catchy names and compelling descriptions that make "
    "people excited about traveling."
)

PROMPT_TEMPLATE = """Create a themed travel quest for {city}, {country}.

Requirements:
- Theme: {theme}
- Budget: {budget}
- Duration: {duration_days} days
- User interests: {interests}

Generate:
1. A creative, catchy quest name (like "Pirates of the Caribbean" or "Tokyo Neon Dreams")
2. An exciting 1-2 sentence description that makes someone want to book immediately
3. 5-7 specific activities that match the theme and location
4. Make it sound like an adventure, not just a regular trip

Format as JSON:
{{
  "name": "Quest Name",
  "description": "Exciting description here...",
  "activities": ["activity1", "activity2", "activity3", "activity4", "activity5"]
}}

The name should be memorable and themed. The description should be compelling and adventure-focused. Activities should be specific to the location and theme."""

UNSPLASH_PLACEHOLDER = "https://images.unsplash.com/photo-1500835556837-99ac94a94552?w=800&q=80"

THEME_IMAGE_QUERIES = {
    Theme.ADVENTURE: "adventure+travel+mountain",
    Theme.CULTURE: "cultural+heritage+architecture",
    Theme.RELAXATION: "spa+wellness+beach+sunset",
    Theme.NIGHTLIFE: "city+night+lights",
    Theme.NATURE: "landscape+nature+wilderness",
}


class QuestTemplate(BaseModel):
    """Structural input for one generated quest."""

    destination_city: str = Field(min_length=1)
    destination_country: str = Field(min_length=1)
    theme: Theme
    budget: PriceRange
    duration_days: int = Field(ge=1, le=30)
    user_interests: List[str] = Field(default_factory=list)

    @field_validator("destination_city", "destination_country")
    @classmethod
    def _strip(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("user_interests", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return [] if v is None else v


class GeneratedContent(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    activities: List[str] = Field(min_length=1)


def image_url_for_theme(theme: Theme) -> str:
    return f"{UNSPLASH_PLACEHOLDER}&query={THEME_IMAGE_QUERIES[Theme(theme)]}"


def build_prompt(template: QuestTemplate) -> str:
    return PROMPT_TEMPLATE.format(
        city=template.destination_city,
        country=template.destination_country,
        theme=template.theme.value,
        budget=template.budget.value,
        duration_days=template.duration_days,
        interests=", ".join(template.user_interests) or "general travel",
    )


def fallback_content(template: QuestTemplate) -> GeneratedContent:
    """Templated content used in place of a failed or unusable generation."""
    city = template.destination_city
    theme = template.theme.value
    return GeneratedContent(
        name=f"{theme.capitalize()} in {city}",
        description=f"Experience the best of {city} with this {theme}-focused adventure.",
        activities=[f"explore {city}", f"local {theme} activities", "cultural experiences"],
    )


class QuestGenerator:
    """
    Generates quest content for a template.

    `completer` defaults to the litellm-backed complete_text; tests inject a
    coroutine with the same signature. `parse_fallback` and `error_fallback`
    build the content used when the answer cannot be parsed or the call fails.
    """

    def __init__(
        self,
        provider: str = "openai",
        completer: Optional[Completer] = None,
        temperature: float = 0.8,
        max_tokens: int = 500,
        parse_fallback: Callable[[QuestTemplate], GeneratedContent] = fallback_content,
        error_fallback: Callable[[QuestTemplate], GeneratedContent] = fallback_content,
    ):
        self.provider = provider
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._complete = completer or complete_text
        self._parse_fallback = parse_fallback
        self._error_fallback = error_fallback

    async def generate(self, template: QuestTemplate) -> Tuple[GeneratedContent, bool]:
        """Return (content, used_fallback). Never raises for LLM or parse failures."""
        try:
            text = await self._complete(
                provider=self.provider,
                prompt=build_prompt(template),
                system_prompt=SYSTEM_PROMPT,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.warning("Quest generation failed for %s: %s", template.destination_city, e)
            return self._error_fallback(template), True

        try:
            return GeneratedContent.model_validate(parse_json_response(text)), False
        except (ValueError, ValidationError) as e:
            logger.warning("Unusable quest content for %s, using fallback: %s", template.destination_city, e)
            return self._parse_fallback(template), True

    async def generate_quest(self, template: QuestTemplate) -> Tuple[dict, bool]:
        """Full quest payload (content plus template fields) ready for the quest store."""
        content, fallback = await self.generate(template)
        quest = {
            **content.model_dump(),
            "destination_city": template.destination_city,
            "destination_country": template.destination_country,
            "theme": template.theme.value,
            "price_range": template.budget.value,
            "duration_days": template.duration_days,
            "image_url": image_url_for_theme(template.theme),
        }
        return quest, fallback
