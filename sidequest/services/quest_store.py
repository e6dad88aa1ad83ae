"""
Quest Store abstraction.

Supplies the quest catalogue (newest first) and accepts new quests from the
generator and seeding script. Implementations: JSON file (local), Firestore
(production). Swap via DATA_SOURCE.
"""

import json
import uuid
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Set, Union

from swipe.models import PriceRange, Quest, Theme, utc_now_iso

from .errors import StoreError
from .firebase import DESCENDING, async_firestore_client, firestore_client

QuestLike = Union[Quest, Dict]


def _new_quest(data: QuestLike) -> Quest:
    """Validate and stamp a quest for insertion (id and created_at when missing)."""
    raw = data.model_dump(mode="json") if isinstance(data, Quest) else dict(data)
    if not raw.get("id"):
        raw["id"] = str(uuid.uuid4())
    if not raw.get("created_at"):
        raw["created_at"] = utc_now_iso()
    return Quest.model_validate(raw)


def filter_quests(
    quests: Iterable[Quest],
    theme: Optional[Union[Theme, str]] = None,
    price_range: Optional[Union[PriceRange, str]] = None,
    exclude_ids: Optional[Set[str]] = None,
    limit: Optional[int] = None,
) -> List[Quest]:
    """Filter then order newest first; limit applies after filtering."""
    theme = Theme(theme) if theme else None
    price_range = PriceRange(price_range) if price_range else None
    out = [
        q for q in quests
        if (theme is None or q.theme is theme)
        and (price_range is None or q.price_range is price_range)
        and not (exclude_ids and q.id in exclude_ids)
    ]
    out.sort(key=lambda q: q.created_at, reverse=True)
    if limit is not None:
        out = out[:limit]
    return out


class QuestStore(Protocol):
    """Protocol for the quest catalogue. Implement for JSON file or Firestore."""

    def list_quests(
        self,
        theme: Optional[Union[Theme, str]] = None,
        price_range: Optional[Union[PriceRange, str]] = None,
        exclude_ids: Optional[Set[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Quest]:
        """Return quests newest first, optionally filtered."""
        ...

    async def list_quests_async(
        self,
        theme: Optional[Union[Theme, str]] = None,
        price_range: Optional[Union[PriceRange, str]] = None,
        exclude_ids: Optional[Set[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Quest]:
        ...

    def get_quest(self, quest_id: str) -> Optional[Quest]:
        """Return one quest or None."""
        ...

    def add_quest(self, data: QuestLike) -> Quest:
        """Insert one quest."""
        ...

    def add_quests(self, items: List[QuestLike]) -> List[Quest]:
        """Insert quests; id and created_at are assigned when missing."""
        ...

    def count(self) -> int:
        ...


class JsonQuestStore:
    """Quest store backed by a JSON file (e.g. data/quests.json)."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._quests: Dict[str, Quest] = {}
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            print(f"[JsonQuestStore] could not read {self._path}: {e}; starting empty")
            return
        items = data.get("quests", []) if isinstance(data, dict) else data
        for item in items or []:
            quest = Quest.model_validate(item)
            self._quests[quest.id] = quest

    def _save(self) -> None:
        out = {"quests": [q.model_dump(mode="json") for q in self._quests.values()]}
        try:
            with open(self._path, "w") as f:
                json.dump(out, f, indent=2)
        except OSError as e:
            raise StoreError(f"Failed to write {self._path}: {e}") from e

    def list_quests(
        self,
        theme: Optional[Union[Theme, str]] = None,
        price_range: Optional[Union[PriceRange, str]] = None,
        exclude_ids: Optional[Set[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Quest]:
        return filter_quests(self._quests.values(), theme, price_range, exclude_ids, limit)

    async def list_quests_async(
        self,
        theme: Optional[Union[Theme, str]] = None,
        price_range: Optional[Union[PriceRange, str]] = None,
        exclude_ids: Optional[Set[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Quest]:
        """Async path: in-memory, same as list_quests."""
        return self.list_quests(theme, price_range, exclude_ids, limit)

    def get_quest(self, quest_id: str) -> Optional[Quest]:
        return self._quests.get(quest_id)

    def add_quest(self, data: QuestLike) -> Quest:
        return self.add_quests([data])[0]

    def add_quests(self, items: List[QuestLike]) -> List[Quest]:
        added = [_new_quest(item) for item in items]
        for quest in added:
            self._quests[quest.id] = quest
        self._save()
        return added

    def count(self) -> int:
        return len(self._quests)


class FirestoreQuestStore:
    """
    Quest store backed by the Firestore 'quests' collection.
    Document ID = quest id. Filtering happens client-side to avoid composite indexes.
    """

    BATCH_SIZE = 500  # Firestore batch write limit

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
    ):
        self._db = firestore_client(project_id, credentials_path)
        self._coll = self._db.collection("quests")
        self._async_db = async_firestore_client(project_id, credentials_path)

    @staticmethod
    def _doc_to_quest(doc) -> Quest:
        d = doc.to_dict()
        d["id"] = doc.id
        return Quest.model_validate(d)

    def list_quests(
        self,
        theme: Optional[Union[Theme, str]] = None,
        price_range: Optional[Union[PriceRange, str]] = None,
        exclude_ids: Optional[Set[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Quest]:
        try:
            docs = self._coll.order_by("created_at", direction=DESCENDING).stream()
            quests = [self._doc_to_quest(doc) for doc in docs]
        except Exception as e:
            raise StoreError(f"Failed to list quests: {e}") from e
        return filter_quests(quests, theme, price_range, exclude_ids, limit)

    async def list_quests_async(
        self,
        theme: Optional[Union[Theme, str]] = None,
        price_range: Optional[Union[PriceRange, str]] = None,
        exclude_ids: Optional[Set[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Quest]:
        """Async-only: Firestore read via AsyncClient."""
        query = self._async_db.collection("quests").order_by("created_at", direction=DESCENDING)
        quests = []
        try:
            async for doc in query.stream():
                quests.append(self._doc_to_quest(doc))
        except Exception as e:
            raise StoreError(f"Failed to list quests: {e}") from e
        return filter_quests(quests, theme, price_range, exclude_ids, limit)

    def get_quest(self, quest_id: str) -> Optional[Quest]:
        if not quest_id or not quest_id.strip():
            return None
        try:
            doc = self._coll.document(quest_id.strip()).get()
        except Exception as e:
            raise StoreError(f"Failed to read quest {quest_id.strip()!r}: {e}") from e
        if not doc.exists:
            return None
        return self._doc_to_quest(doc)

    def add_quest(self, data: QuestLike) -> Quest:
        return self.add_quests([data])[0]

    def add_quests(self, items: List[QuestLike]) -> List[Quest]:
        added = [_new_quest(item) for item in items]
        try:
            for i in range(0, len(added), self.BATCH_SIZE):
                batch = self._db.batch()
                for quest in added[i : i + self.BATCH_SIZE]:
                    data = quest.model_dump(mode="json", exclude={"id"})
                    batch.set(self._coll.document(quest.id), data)
                batch.commit()
        except Exception as e:
            print(f"[FirestoreQuestStore] add_quests failed: {e}")
            raise StoreError(f"Failed to insert quests: {e}") from e
        return added

    def count(self) -> int:
        return len(self.list_quests())
