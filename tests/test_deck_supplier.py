"""
Deck supplier tests: decided quests are excluded, order is newest first.

Run:
    pytest tests/test_deck_supplier.py -v
"""

import asyncio

import pytest

from sidequest.services import DeckSupplier, JsonDecisionStore, JsonQuestStore


class TestDeckSupplier:
    @pytest.fixture(autouse=True)
    def setup(self, tmp_path):
        self.quests = JsonQuestStore(tmp_path / "quests.json")
        self.decisions = JsonDecisionStore(tmp_path / "decisions.json")
        self.supplier = DeckSupplier(self.quests, self.decisions, default_size=3)
        base = {
            "theme": "nature",
            "destination_city": "Banff",
            "destination_country": "Canada",
            "price_range": "mid-range",
            "duration_days": 6,
        }
        self.added = self.quests.add_quests([
            dict(base, id=f"q{i}", name=f"Quest {i}", created_at=f"2025-01-0{i}T00:00:00+00:00")
            for i in range(1, 6)
        ])

    def test_newest_first(self):
        assert [q.id for q in self.supplier.list_undecided("u1")] == ["q5", "q4", "q3", "q2", "q1"]

    def test_excludes_decided(self):
        self.decisions.record_decision("u1", "q5", "like")
        self.decisions.record_decision("u1", "q2", "dislike")
        assert [q.id for q in self.supplier.list_undecided("u1")] == ["q4", "q3", "q1"]
        # Another user's decisions do not affect this user's deck.
        assert len(self.supplier.list_undecided("u2")) == 5

    def test_async_deck_uses_default_size(self):
        self.decisions.record_decision("u1", "q4", "like")
        deck = asyncio.run(self.supplier.build_deck_async("u1"))
        assert [q.id for q in deck] == ["q5", "q3", "q2"]

    def test_async_deck_explicit_limit(self):
        deck = asyncio.run(self.supplier.build_deck_async("u1", limit=1))
        assert [q.id for q in deck] == ["q5"]

    def test_everything_decided_gives_empty_deck(self):
        for q in self.added:
            self.decisions.record_decision("u1", q.id, "like")
        assert asyncio.run(self.supplier.build_deck_async("u1")) == []
