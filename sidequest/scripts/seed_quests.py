#!/usr/bin/env python3
"""
Seed the quest catalogue with AI-generated quests.

Generates one quest per template below (five per theme), pausing between LLM
calls to stay under provider rate limits, then inserts the batch into the
configured quest store (JSON file or Firestore, per DATA_SOURCE).

A template whose generation fails still yields a quest built from templated
fallback content, so a run always produces the full set.

Usage:
  From repo root:
    python -m sidequest.scripts.seed_quests
    python -m sidequest.scripts.seed_quests --dry-run --limit 3
    python -m sidequest.scripts.seed_quests --provider gemini --delay 0.5
"""

import argparse
import asyncio
import sys
from collections import Counter
from typing import Dict, List, Optional

from sidequest.config import get_config
from sidequest.services import GeneratedContent, QuestGenerator, QuestTemplate, StoreError
from sidequest.state import AppState

# (city, country, theme, budget, duration_days)
QUEST_TEMPLATES = [
    # Adventure
    ("Reykjavik", "Iceland", "adventure", "luxury", 6),
    ("Queenstown", "New Zealand", "adventure", "mid-range", 5),
    ("Interlaken", "Switzerland", "adventure", "luxury", 4),
    ("Costa Rica", "Costa Rica", "adventure", "budget", 8),
    ("Moab", "USA", "adventure", "mid-range", 3),
    # Culture
    ("Kyoto", "Japan", "culture", "luxury", 7),
    ("Rome", "Italy", "culture", "mid-range", 5),
    ("Istanbul", "Turkey", "culture", "budget", 6),
    ("Cusco", "Peru", "culture", "mid-range", 4),
    ("Varanasi", "India", "culture", "budget", 5),
    # Relaxation
    ("Santorini", "Greece", "relaxation", "luxury", 6),
    ("Ubud", "Indonesia", "relaxation", "budget", 8),
    ("Tulum", "Mexico", "relaxation", "mid-range", 5),
    ("Maldives", "Maldives", "relaxation", "luxury", 7),
    ("Sedona", "USA", "relaxation", "mid-range", 4),
    # Nightlife
    ("Berlin", "Germany", "nightlife", "budget", 4),
    ("Barcelona", "Spain", "nightlife", "mid-range", 5),
    ("Tel Aviv", "Israel", "nightlife", "mid-range", 4),
    ("Bangkok", "Thailand", "nightlife", "budget", 6),
    ("Miami", "USA", "nightlife", "luxury", 3),
    # Nature
    ("Banff", "Canada", "nature", "mid-range", 6),
    ("Patagonia", "Chile", "nature", "luxury", 10),
    ("Madagascar", "Madagascar", "nature", "mid-range", 9),
    ("Yellowstone", "USA", "nature", "budget", 5),
    ("Tasmania", "Australia", "nature", "mid-range", 7),
]


def build_templates(limit: Optional[int] = None) -> List[QuestTemplate]:
    rows = QUEST_TEMPLATES[:limit] if limit is not None else QUEST_TEMPLATES
    return [
        QuestTemplate(
            destination_city=city,
            destination_country=country,
            theme=theme,
            budget=budget,
            duration_days=duration,
        )
        for city, country, theme, budget, duration in rows
    ]


def seed_parse_fallback(template: QuestTemplate) -> GeneratedContent:
    city = template.destination_city
    theme = template.theme.value
    return GeneratedContent(
        name=f"{theme.capitalize()} Quest in {city}",
        description=(
            f"Experience the best of {city} with this {theme}-focused adventure "
            "that will create memories to last a lifetime."
        ),
        activities=[f"explore {city}", f"local {theme} activities", "cultural experiences", "photography", "local cuisine"],
    )


def seed_error_fallback(template: QuestTemplate) -> GeneratedContent:
    city = template.destination_city
    theme = template.theme.value
    return GeneratedContent(
        name=f"{theme.capitalize()} Adventure in {city}",
        description=(
            f"Discover the magic of {city}, {template.destination_country} "
            f"with this carefully curated {theme} experience."
        ),
        activities=[f"explore {city}", f"{theme} activities", "local experiences", "photography", "local cuisine"],
    )


def seed_generator(provider: str, completer=None) -> QuestGenerator:
    """Generator with the seeding prompt settings (more creative, shorter answers)."""
    return QuestGenerator(
        provider=provider,
        completer=completer,
        temperature=0.9,
        max_tokens=400,
        parse_fallback=seed_parse_fallback,
        error_fallback=seed_error_fallback,
    )


async def generate_all(generator: QuestGenerator, templates: List[QuestTemplate], delay: float = 1.0) -> List[Dict]:
    """Generate quests one template at a time, sleeping `delay` seconds between calls."""
    quests = []
    for i, template in enumerate(templates):
        print(f"Generating {template.theme.value} quest for {template.destination_city}, "
              f"{template.destination_country}...")
        quest, fallback = await generator.generate_quest(template)
        quests.append(quest)
        print(f"  {'fallback' if fallback else 'generated'}: {quest['name']!r}")
        if delay > 0 and i < len(templates) - 1:
            await asyncio.sleep(delay)
    return quests


def theme_summary(quests: List[Dict]) -> Dict[str, int]:
    return dict(Counter(q["theme"] if isinstance(q, dict) else q.theme.value for q in quests))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate and insert seed quests")
    parser.add_argument("--delay", type=float, default=1.0, help="Seconds to wait between LLM calls (default 1.0)")
    parser.add_argument("--dry-run", action="store_true", help="Generate and print quests without inserting them")
    parser.add_argument("--limit", type=int, default=None, help="Only use the first N templates")
    parser.add_argument("--provider", type=str, default=None, help="LLM provider (default: LLM_PROVIDER)")
    args = parser.parse_args(argv)

    config = get_config()
    templates = build_templates(args.limit)
    generator = seed_generator(args.provider or config.llm_provider)
    print(f"Starting quest generation: {len(templates)} templates, provider={generator.provider}")

    quests = asyncio.run(generate_all(generator, templates, delay=args.delay))
    if not quests:
        print("No quests were generated")
        return 1

    if args.dry_run:
        print(f"Dry run: {len(quests)} quests generated, nothing inserted")
    else:
        state = AppState(config)
        print(f"Inserting {len(quests)} quests into {state.backend} store...")
        try:
            inserted = state.quest_store.add_quests(quests)
        except StoreError as e:
            print(f"Database error: {e}")
            return 1
        quests = inserted
        print(f"Successfully inserted {len(inserted)} quests")

    print("Quest themes generated:")
    for theme, count in theme_summary(quests).items():
        print(f"   {theme}: {count} quests")
    return 0


if __name__ == "__main__":
    sys.exit(main())
