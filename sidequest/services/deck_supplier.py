"""
Deck supplier: the ordered queue of quests a user has not decided yet.

Decks are never persisted; each swipe session asks for a fresh one. Quests are
ordered newest first and every quest with a stored decision is excluded.
"""

import asyncio
from typing import List, Optional

from swipe.models import Quest

from .decision_store import DecisionStore
from .quest_store import QuestStore


class DeckSupplier:
    """Builds decks from the quest store minus the user's decided set."""

    def __init__(self, quest_store: QuestStore, decision_store: DecisionStore, default_size: int = 20):
        self._quests = quest_store
        self._decisions = decision_store
        self.default_size = default_size

    def list_undecided(self, user_id: str, limit: Optional[int] = None) -> List[Quest]:
        """All undecided quests for the user (limit=None means no cap)."""
        decided = self._decisions.decided_quest_ids(user_id)
        return self._quests.list_quests(exclude_ids=decided, limit=limit)

    async def build_deck_async(self, user_id: str, limit: Optional[int] = None) -> List[Quest]:
        """Fetch the decided set and the catalogue in parallel, then filter."""
        size = limit if limit is not None else self.default_size
        decided, quests = await asyncio.gather(
            self._decisions.decided_quest_ids_async(user_id),
            self._quests.list_quests_async(),
        )
        return [q for q in quests if q.id not in decided][:size]
