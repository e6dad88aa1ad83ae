"""
Decision Store abstraction.

Persists each user's like/dislike per quest and supplies the decided set the
deck supplier excludes. Writes are upserts keyed by quest id, so at most one
decision exists per (user, quest). Implementations: JSON file (local),
Firestore users/{user_id}/decisions (production).
"""

import json
import threading
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Set, Union

from swipe.models import Action, Decision, utc_now_iso

from .errors import StoreError
from .firebase import DESCENDING, async_firestore_client, firestore_client

# Limit for list_decisions (most recent N)
DECISIONS_READ_LIMIT = 1000


def _as_action(action: Union[Action, str]) -> Action:
    return action if isinstance(action, Action) else Action.parse(action)


class DecisionStore(Protocol):
    """Protocol for decision read/write. Implement for JSON file or Firestore."""

    def record_decision(
        self,
        user_id: str,
        quest_id: str,
        action: Union[Action, str],
        timestamp: Optional[str] = None,
    ) -> Decision:
        """Persist one decision (replaces an earlier decision on the same quest)."""
        ...

    async def record_decision_async(
        self,
        user_id: str,
        quest_id: str,
        action: Union[Action, str],
        timestamp: Optional[str] = None,
    ) -> Decision:
        ...

    def list_decisions(self, user_id: str, action: Optional[Union[Action, str]] = None) -> List[Decision]:
        """Decisions for the user, newest first, optionally one action only."""
        ...

    def decided_quest_ids(self, user_id: str) -> Set[str]:
        ...

    async def decided_quest_ids_async(self, user_id: str) -> Set[str]:
        ...

    def delete_all_decisions(self, user_id: str) -> int:
        """Delete all decisions for the user (e.g. for Reset). Returns count deleted."""
        ...


class JsonDecisionStore:
    """Decision store backed by a JSON file (e.g. data/decisions.json)."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._by_user: Dict[str, Dict[str, Decision]] = {}
        self._lock = threading.Lock()
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            print(f"[JsonDecisionStore] could not read {self._path}: {e}; starting empty")
            return
        for uid, by_quest in (data.get("decisions") or {}).items():
            self._by_user[uid] = {
                qid: Decision.model_validate(d) for qid, d in (by_quest or {}).items()
            }

    def _save(self) -> None:
        out = {
            "decisions": {
                uid: {qid: d.model_dump(mode="json") for qid, d in by_quest.items()}
                for uid, by_quest in self._by_user.items()
            }
        }
        try:
            with open(self._path, "w") as f:
                json.dump(out, f, indent=2)
        except OSError as e:
            raise StoreError(f"Failed to write {self._path}: {e}") from e

    def record_decision(
        self,
        user_id: str,
        quest_id: str,
        action: Union[Action, str],
        timestamp: Optional[str] = None,
    ) -> Decision:
        if not user_id or not user_id.strip():
            raise ValueError("user_id cannot be empty")
        if not quest_id or not quest_id.strip():
            raise ValueError("quest_id cannot be empty")
        decision = Decision(
            user_id=user_id.strip(),
            quest_id=quest_id.strip(),
            action=_as_action(action),
            timestamp=timestamp or utc_now_iso(),
        )
        with self._lock:
            self._by_user.setdefault(decision.user_id, {})[decision.quest_id] = decision
            self._save()
        return decision

    async def record_decision_async(
        self,
        user_id: str,
        quest_id: str,
        action: Union[Action, str],
        timestamp: Optional[str] = None,
    ) -> Decision:
        """Async path: same as record_decision."""
        return self.record_decision(user_id, quest_id, action, timestamp)

    def list_decisions(self, user_id: str, action: Optional[Union[Action, str]] = None) -> List[Decision]:
        wanted = _as_action(action) if action else None
        with self._lock:
            decisions = list(self._by_user.get((user_id or "").strip(), {}).values())
        out = [d for d in decisions if wanted is None or d.action is wanted]
        out.sort(key=lambda d: d.timestamp, reverse=True)
        return out

    def decided_quest_ids(self, user_id: str) -> Set[str]:
        with self._lock:
            return set(self._by_user.get((user_id or "").strip(), {}))

    async def decided_quest_ids_async(self, user_id: str) -> Set[str]:
        return self.decided_quest_ids(user_id)

    def delete_all_decisions(self, user_id: str) -> int:
        with self._lock:
            removed = self._by_user.pop((user_id or "").strip(), {})
            if removed:
                self._save()
        return len(removed)


class FirestoreDecisionStore:
    """
    Decision store backed by Firestore subcollection users/{user_id}/decisions.
    Each document: { quest_id, action, timestamp }. Document ID: quest id.
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
    ):
        self._db = firestore_client(project_id, credentials_path)
        self._async_db = async_firestore_client(project_id, credentials_path)

    def _decisions_ref(self, user_id: str):
        """Reference to users/{user_id}/decisions subcollection."""
        return self._db.collection("users").document(user_id).collection("decisions")

    def _async_decisions_ref(self, user_id: str):
        return self._async_db.collection("users").document(user_id).collection("decisions")

    @staticmethod
    def _build(user_id: str, quest_id: str, action: Union[Action, str], timestamp: Optional[str]) -> Decision:
        if not user_id or not user_id.strip():
            raise ValueError("user_id cannot be empty")
        if not quest_id or not quest_id.strip():
            raise ValueError("quest_id cannot be empty")
        return Decision(
            user_id=user_id.strip(),
            quest_id=quest_id.strip(),
            action=_as_action(action),
            timestamp=timestamp or utc_now_iso(),
        )

    @staticmethod
    def _doc_data(decision: Decision) -> Dict:
        return {
            "quest_id": decision.quest_id,
            "action": decision.action.value,
            "timestamp": decision.timestamp,
        }

    def record_decision(
        self,
        user_id: str,
        quest_id: str,
        action: Union[Action, str],
        timestamp: Optional[str] = None,
    ) -> Decision:
        decision = self._build(user_id, quest_id, action, timestamp)
        try:
            self._decisions_ref(decision.user_id).document(decision.quest_id).set(self._doc_data(decision))
        except Exception as e:
            print(f"[FirestoreDecisionStore] record_decision failed for user={decision.user_id!r}: {e}")
            raise StoreError(f"Failed to record decision: {e}") from e
        return decision

    async def record_decision_async(
        self,
        user_id: str,
        quest_id: str,
        action: Union[Action, str],
        timestamp: Optional[str] = None,
    ) -> Decision:
        """Async write via AsyncClient (used by swipe commits)."""
        decision = self._build(user_id, quest_id, action, timestamp)
        try:
            await self._async_decisions_ref(decision.user_id).document(decision.quest_id).set(
                self._doc_data(decision)
            )
        except Exception as e:
            print(f"[FirestoreDecisionStore] record_decision_async failed for user={decision.user_id!r}: {e}")
            raise StoreError(f"Failed to record decision: {e}") from e
        return decision

    def list_decisions(self, user_id: str, action: Optional[Union[Action, str]] = None) -> List[Decision]:
        if not user_id or not user_id.strip():
            return []
        uid = user_id.strip()
        wanted = _as_action(action) if action else None
        query = self._decisions_ref(uid).order_by("timestamp", direction=DESCENDING).limit(DECISIONS_READ_LIMIT)
        try:
            docs = list(query.stream())
        except Exception as e:
            print(f"[FirestoreDecisionStore] list_decisions failed for user={uid!r}: {e}")
            raise StoreError(f"Failed to list decisions: {e}") from e
        out = []
        for doc in docs:
            d = doc.to_dict()
            decision = Decision(
                user_id=uid,
                quest_id=d.get("quest_id") or doc.id,
                action=_as_action(d.get("action", "")),
                timestamp=d.get("timestamp", ""),
            )
            if wanted is None or decision.action is wanted:
                out.append(decision)
        return out

    def decided_quest_ids(self, user_id: str) -> Set[str]:
        if not user_id or not user_id.strip():
            return set()
        try:
            return {doc.id for doc in self._decisions_ref(user_id.strip()).stream()}
        except Exception as e:
            raise StoreError(f"Failed to read decided quests: {e}") from e

    async def decided_quest_ids_async(self, user_id: str) -> Set[str]:
        """Async-only: Firestore read via AsyncClient."""
        if not user_id or not user_id.strip():
            return set()
        out = set()
        try:
            async for doc in self._async_decisions_ref(user_id.strip()).stream():
                out.add(doc.id)
        except Exception as e:
            print(f"[FirestoreDecisionStore] decided_quest_ids_async failed for user={user_id.strip()!r}: {e}")
            raise StoreError(f"Failed to read decided quests: {e}") from e
        return out

    def delete_all_decisions(self, user_id: str) -> int:
        """Delete all documents in users/{user_id}/decisions (batch delete in chunks)."""
        if not user_id or not user_id.strip():
            return 0
        ref = self._decisions_ref(user_id.strip())
        batch_size = 500
        deleted = 0
        try:
            while True:
                to_delete = list(ref.limit(batch_size).stream())
                if not to_delete:
                    break
                batch = self._db.batch()
                for doc in to_delete:
                    batch.delete(doc.reference)
                batch.commit()
                deleted += len(to_delete)
        except Exception as e:
            raise StoreError(f"Failed to delete decisions after {deleted}: {e}") from e
        return deleted


class StoreDecisionRecorder:
    """Adapts a DecisionStore to the swipe DecisionRecorder protocol."""

    def __init__(self, store: DecisionStore):
        self._store = store

    async def record_decision(self, decision: Decision) -> Decision:
        return await self._store.record_decision_async(
            decision.user_id,
            decision.quest_id,
            decision.action,
            timestamp=decision.timestamp,
        )
