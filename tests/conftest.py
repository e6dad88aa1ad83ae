"""Shared fixtures: quest factory, in-memory recorders, API client over temp JSON stores."""

import asyncio
from typing import List

import pytest

from swipe.models import Decision, Quest


def make_quest(quest_id: str, theme: str = "adventure", price_range: str = "mid-range",
               created_at: str = "2025-01-01T00:00:00+00:00", **extra) -> Quest:
    data = {
        "id": quest_id,
        "name": f"Quest {quest_id}",
        "description": f"Description for {quest_id}",
        "theme": theme,
        "activities": ["hike", "eat"],
        "destination_city": "Reykjavik",
        "destination_country": "Iceland",
        "price_range": price_range,
        "duration_days": 5,
        "created_at": created_at,
    }
    data.update(extra)
    return Quest.model_validate(data)


class RecordingRecorder:
    """Collects decisions; optionally fails or blocks until released."""

    def __init__(self, fail: bool = False, gate: bool = False):
        self.fail = fail
        self.recorded: List[Decision] = []
        self.calls = 0
        self._gate = asyncio.Event() if gate else None

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()

    async def record_decision(self, decision: Decision) -> Decision:
        self.calls += 1
        if self._gate is not None:
            await self._gate.wait()
        if self.fail:
            raise ConnectionError("store unavailable")
        self.recorded.append(decision)
        return decision


@pytest.fixture
def quest_factory():
    return make_quest


@pytest.fixture
def api_env(tmp_path, monkeypatch):
    """Point the service at temp JSON stores with an instant exit animation."""
    monkeypatch.setenv("DATA_SOURCE", "json")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SWIPE_EXIT_DURATION_MS", "0")
    monkeypatch.setenv("DECK_SIZE", "20")
    for key in ("OPENAI_API_KEY", "GEMINI_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(key, raising=False)

    from sidequest.config import reload_config
    from sidequest.state import reset_state

    reload_config()
    reset_state()
    yield tmp_path
    reset_state()
    reload_config()


@pytest.fixture
def client(api_env):
    from fastapi.testclient import TestClient

    from sidequest.app import create_app

    with TestClient(create_app()) as c:
        yield c
