"""
Firestore store error handling over fake clients (no network).

Backend failures on reads must surface as StoreError so the routes can
answer 503.

Run:
    pytest tests/test_firestore_stores.py -v
"""

import asyncio

import pytest

from sidequest.services import (
    DeckSupplier,
    FirestoreDecisionStore,
    FirestoreProfileStore,
    FirestoreQuestStore,
    JsonQuestStore,
    StoreError,
)
from sidequest.state import get_state


class _UnreachableRef:
    """Collection/document/query stand-in whose reads fail."""

    def __init__(self, error: Exception):
        self._error = error

    def collection(self, name):
        return self

    def document(self, doc_id):
        return self

    def order_by(self, *args, **kwargs):
        return self

    def limit(self, n):
        return self

    def stream(self):
        raise self._error

    def get(self):
        raise self._error


class _UnreachableAsyncRef(_UnreachableRef):
    async def stream(self):
        raise self._error
        yield


def _decision_store(error=None) -> FirestoreDecisionStore:
    error = error or ConnectionError("firestore unreachable")
    store = FirestoreDecisionStore.__new__(FirestoreDecisionStore)
    store._db = _UnreachableRef(error)
    store._async_db = _UnreachableAsyncRef(error)
    return store


class TestFirestoreDecisionStoreFailures:
    @pytest.fixture(autouse=True)
    def setup(self):
        self.store = _decision_store()

    def test_list_decisions_wraps_error(self):
        with pytest.raises(StoreError, match="firestore unreachable"):
            self.store.list_decisions("u1")

    def test_decided_ids_wrap_error(self):
        with pytest.raises(StoreError):
            self.store.decided_quest_ids("u1")

    def test_async_decided_ids_wrap_error(self):
        with pytest.raises(StoreError) as exc:
            asyncio.run(self.store.decided_quest_ids_async("u1"))
        assert isinstance(exc.value.__cause__, ConnectionError)

    def test_delete_all_wraps_error(self):
        with pytest.raises(StoreError):
            self.store.delete_all_decisions("u1")

    def test_blank_user_does_not_touch_backend(self):
        assert self.store.list_decisions("  ") == []
        assert self.store.decided_quest_ids("") == set()

    def test_deck_build_surfaces_store_error(self, tmp_path):
        supplier = DeckSupplier(JsonQuestStore(tmp_path / "quests.json"), self.store)
        with pytest.raises(StoreError):
            asyncio.run(supplier.build_deck_async("u1"))


class TestFirestoreReadFailures:
    def test_profile_get_wraps_error(self):
        store = FirestoreProfileStore.__new__(FirestoreProfileStore)
        store._coll = _UnreachableRef(TimeoutError("deadline exceeded"))
        with pytest.raises(StoreError, match="deadline exceeded"):
            store.get("u1")

    def test_quest_get_wraps_error(self):
        store = FirestoreQuestStore.__new__(FirestoreQuestStore)
        store._coll = _UnreachableRef(ConnectionError("firestore unreachable"))
        with pytest.raises(StoreError):
            store.get_quest("q1")


class TestUnavailableBackendOverHttp:
    @pytest.fixture(autouse=True)
    def setup(self, client):
        self.client = client
        state = get_state()
        state.decision_store = _decision_store()
        state.deck_supplier = DeckSupplier(state.quest_store, state.decision_store)

    def test_session_create_returns_503(self):
        assert self.client.post("/api/sessions/create", json={"user_id": "u1"}).status_code == 503

    def test_decision_list_and_reset_return_503(self):
        assert self.client.get("/api/users/u1/decisions").status_code == 503
        assert self.client.post("/api/users/u1/decisions/reset").status_code == 503

    def test_dashboard_returns_503(self):
        self.client.post("/api/users/profile", json={
            "user_id": "u1", "username": "wanderer", "travel_interests": ["nature"],
        })
        assert self.client.get("/api/users/u1/dashboard").status_code == 503
