"""
Profile store: travel preferences per user (username, interests, budget).
Persistence to JSON file or Firestore depending on DATA_SOURCE.
Document ID = user_id as issued by the auth provider.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from swipe.models import utc_now_iso

from .errors import StoreError
from .firebase import firestore_client


class ProfileStore(Protocol):
    """Protocol for profile persistence. Implement for JSON file or Firestore."""

    def get(self, user_id: str) -> Optional[Dict]:
        """Return profile dict if exists, else None."""
        ...

    def create(
        self,
        user_id: str,
        username: str,
        travel_interests: List[str],
        budget_preference: str = "mid-range",
    ) -> Dict:
        """Create a profile. Raises ValueError if one already exists."""
        ...

    def update(
        self,
        user_id: str,
        username: Optional[str] = None,
        travel_interests: Optional[List[str]] = None,
        budget_preference: Optional[str] = None,
    ) -> Optional[Dict]:
        """Update fields that are not None. Returns updated profile or None if not found."""
        ...


def _new_profile(user_id: str, username: str, travel_interests: List[str], budget_preference: str) -> Dict:
    name = (username or "").strip()
    if not name:
        raise ValueError("Username is required")
    if not travel_interests:
        raise ValueError("Please select at least one travel interest")
    now = utc_now_iso()
    return {
        "user_id": user_id.strip(),
        "username": name,
        "travel_interests": list(travel_interests),
        "budget_preference": budget_preference,
        "created_at": now,
        "updated_at": now,
    }


def _profile_updates(
    username: Optional[str],
    travel_interests: Optional[List[str]],
    budget_preference: Optional[str],
) -> Dict:
    updates: Dict = {}
    if username is not None:
        if not username.strip():
            raise ValueError("Username is required")
        updates["username"] = username.strip()
    if travel_interests is not None:
        if not travel_interests:
            raise ValueError("Please select at least one travel interest")
        updates["travel_interests"] = list(travel_interests)
    if budget_preference is not None:
        updates["budget_preference"] = budget_preference
    updates["updated_at"] = utc_now_iso()
    return updates


class JsonProfileStore:
    """Profile store backed by a JSON file (e.g. data/profiles.json)."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._profiles: Dict[str, Dict] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            try:
                with open(self._path) as f:
                    data = json.load(f)
                profiles = data.get("profiles", data) if isinstance(data, dict) else data
                if isinstance(profiles, list):
                    for p in profiles:
                        uid = p.get("user_id") or p.get("id")
                        if uid:
                            self._profiles[uid] = p
                elif isinstance(profiles, dict):
                    for uid, p in profiles.items():
                        p["user_id"] = uid
                        self._profiles[uid] = p
            except (json.JSONDecodeError, IOError):
                self._profiles = {}

    def _save(self) -> None:
        out = {"profiles": list(self._profiles.values())}
        try:
            with open(self._path, "w") as f:
                json.dump(out, f, indent=2)
        except OSError as e:
            raise StoreError(f"Failed to write {self._path}: {e}") from e

    def get(self, user_id: str) -> Optional[Dict]:
        return self._profiles.get((user_id or "").strip())

    def create(
        self,
        user_id: str,
        username: str,
        travel_interests: List[str],
        budget_preference: str = "mid-range",
    ) -> Dict:
        if not user_id or not user_id.strip():
            raise ValueError("user_id cannot be empty")
        if self.get(user_id):
            raise ValueError(f"Profile already exists for {user_id.strip()!r}")
        profile = _new_profile(user_id, username, travel_interests, budget_preference)
        self._profiles[profile["user_id"]] = profile
        self._save()
        return profile

    def update(
        self,
        user_id: str,
        username: Optional[str] = None,
        travel_interests: Optional[List[str]] = None,
        budget_preference: Optional[str] = None,
    ) -> Optional[Dict]:
        profile = self.get(user_id)
        if not profile:
            return None
        profile.update(_profile_updates(username, travel_interests, budget_preference))
        self._save()
        return profile


class FirestoreProfileStore:
    """Profile store backed by Firestore 'user_profiles' collection."""

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
    ):
        self._db = firestore_client(project_id, credentials_path)
        self._coll = self._db.collection("user_profiles")

    def _doc_to_profile(self, doc) -> Dict:
        d = doc.to_dict()
        d["user_id"] = doc.id
        return d

    def get(self, user_id: str) -> Optional[Dict]:
        if not user_id or not user_id.strip():
            return None
        try:
            doc = self._coll.document(user_id.strip()).get()
        except Exception as e:
            print(f"[FirestoreProfileStore] get failed for user={user_id.strip()!r}: {e}")
            raise StoreError(f"Failed to read profile: {e}") from e
        if doc.exists:
            return self._doc_to_profile(doc)
        return None

    def create(
        self,
        user_id: str,
        username: str,
        travel_interests: List[str],
        budget_preference: str = "mid-range",
    ) -> Dict:
        if not user_id or not user_id.strip():
            raise ValueError("user_id cannot be empty")
        if self.get(user_id):
            raise ValueError(f"Profile already exists for {user_id.strip()!r}")
        profile = _new_profile(user_id, username, travel_interests, budget_preference)
        try:
            self._coll.document(profile["user_id"]).set(profile)
        except Exception as e:
            raise StoreError(f"Failed to create profile: {e}") from e
        return profile

    def update(
        self,
        user_id: str,
        username: Optional[str] = None,
        travel_interests: Optional[List[str]] = None,
        budget_preference: Optional[str] = None,
    ) -> Optional[Dict]:
        if not user_id or not user_id.strip():
            return None
        doc_ref = self._coll.document(user_id.strip())
        if not self.get(user_id):
            return None
        updates = _profile_updates(username, travel_interests, budget_preference)
        try:
            doc_ref.update(updates)
            return self._doc_to_profile(doc_ref.get())
        except Exception as e:
            raise StoreError(f"Failed to update profile: {e}") from e
