"""Backing logic: stores, deck supplier, quest generation."""

from .deck_supplier import DeckSupplier
from .decision_store import (
    DecisionStore,
    FirestoreDecisionStore,
    JsonDecisionStore,
    StoreDecisionRecorder,
)
from .errors import StoreError
from .llm_client import get_available_providers, is_provider_available
from .profile_store import FirestoreProfileStore, JsonProfileStore, ProfileStore
from .quest_generator import (
    GeneratedContent,
    QuestGenerator,
    QuestTemplate,
    image_url_for_theme,
)
from .quest_store import FirestoreQuestStore, JsonQuestStore, QuestStore, filter_quests

__all__ = [
    "DeckSupplier",
    "DecisionStore",
    "FirestoreDecisionStore",
    "JsonDecisionStore",
    "StoreDecisionRecorder",
    "StoreError",
    "get_available_providers",
    "is_provider_available",
    "FirestoreProfileStore",
    "JsonProfileStore",
    "ProfileStore",
    "GeneratedContent",
    "QuestGenerator",
    "QuestTemplate",
    "image_url_for_theme",
    "FirestoreQuestStore",
    "JsonQuestStore",
    "QuestStore",
    "filter_quests",
]
