"""Application state: stores, deck supplier, generator, and live swipe sessions."""

from pathlib import Path
from typing import Any, Dict, Optional

from swipe import DEFAULT_GESTURE_CONFIG

from .config import ServerConfig, get_config
from .services import (
    DeckSupplier,
    FirestoreDecisionStore,
    FirestoreProfileStore,
    FirestoreQuestStore,
    JsonDecisionStore,
    JsonProfileStore,
    JsonQuestStore,
    QuestGenerator,
)


class AppState:
    """Global application state."""

    def __init__(self, config: ServerConfig):
        self.config = config
        try:
            self.gesture_config = config.gesture_config()
        except ValueError as e:
            print(f"[startup] Invalid swipe settings ({e}), using defaults")
            self.gesture_config = DEFAULT_GESTURE_CONFIG

        self.backend = "json"
        self.quest_store: Any = None
        self.decision_store: Any = None
        self.profile_store: Any = None
        if config.data_source == "firebase":
            self._create_firestore_stores(config)
        if self.quest_store is None:
            self._create_json_stores(config)
        print(f"[startup] Stores: {self.backend} "
              f"(quests={type(self.quest_store).__name__}, decisions={type(self.decision_store).__name__})")

        self.deck_supplier = DeckSupplier(self.quest_store, self.decision_store, default_size=config.deck_size)
        self.generator = QuestGenerator(provider=config.llm_provider)

        # Session storage: session_id -> {"session", "adapter", "log", "created_at"}
        self.sessions: Dict[str, Dict] = {}

    def _create_firestore_stores(self, config: ServerConfig) -> None:
        """Firestore stores when credentials are usable, else leave unset for the JSON fallback."""
        cred_path = config.firebase_credentials_path
        cred_path_obj = Path(cred_path) if cred_path else None
        if not cred_path_obj or not cred_path_obj.is_file():
            print(f"[startup] Firestore stores skipped: credentials file not found ({cred_path}). "
                  "Set FIREBASE_CREDENTIALS_PATH in .env to your service account JSON path. Using JSON files.")
            return
        try:
            quest_store = FirestoreQuestStore(config.firebase_project_id, cred_path_obj)
            decision_store = FirestoreDecisionStore(config.firebase_project_id, cred_path_obj)
            profile_store = FirestoreProfileStore(config.firebase_project_id, cred_path_obj)
        except Exception as e:
            print(f"[startup] Firestore init failed: {e}, using JSON files")
            return
        self.quest_store = quest_store
        self.decision_store = decision_store
        self.profile_store = profile_store
        self.backend = "firebase"

    def _create_json_stores(self, config: ServerConfig) -> None:
        data_dir = Path(config.data_dir)
        self.quest_store = JsonQuestStore(data_dir / "quests.json")
        self.decision_store = JsonDecisionStore(data_dir / "decisions.json")
        self.profile_store = JsonProfileStore(data_dir / "profiles.json")
        self.backend = "json"

    def close_sessions(self) -> int:
        """Detach every live swipe session (pending writes still finish)."""
        count = len(self.sessions)
        for entry in self.sessions.values():
            entry["session"].close()
        self.sessions.clear()
        return count


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        config = get_config()
        _state = AppState(config)
    return _state


def reset_state() -> None:
    """Drop the global state so the next get_state() rebuilds it from current config."""
    global _state
    if _state is not None:
        _state.close_sessions()
    _state = None
