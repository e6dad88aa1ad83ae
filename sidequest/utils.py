"""Pure helpers shared by routes: deck sizes, profile and dashboard shaping."""

from collections import Counter
from typing import Dict, Iterable, List, Optional

from swipe.models import Decision, Quest

# Deck/session constants (used by routes/sessions)
DEFAULT_DECK_SIZE = 20
MAX_DECK_SIZE = 100

# Recent events kept per swipe session
EVENT_LOG_SIZE = 5

# Dashboard constants
MAX_SUGGESTIONS = 6


def clamp_deck_size(limit: Optional[int], default: int = DEFAULT_DECK_SIZE) -> int:
    """Requested deck size, defaulted and capped at MAX_DECK_SIZE."""
    return min(limit or default, MAX_DECK_SIZE)


def likes_by_theme(quests: Iterable[Quest]) -> Dict[str, int]:
    counts = Counter(q.theme.value for q in quests)
    return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))


def quests_for_decisions(decisions: Iterable[Decision], quest_by_id: Dict[str, Quest]) -> List[Quest]:
    """Quests referenced by decisions, in decision order. Deleted quests are skipped."""
    return [quest_by_id[d.quest_id] for d in decisions if d.quest_id in quest_by_id]


def suggest_quests(
    undecided: Iterable[Quest],
    interests: Iterable[str],
    budget: Optional[str],
    limit: int = MAX_SUGGESTIONS,
) -> List[Quest]:
    """
    Undecided quests whose theme is one of the user's interests.
    Quests in the user's budget tier come first; order is otherwise kept.
    """
    wanted = {i.strip().lower() for i in interests if i}
    matches = [q for q in undecided if q.theme.value in wanted]
    matches.sort(key=lambda q: 0 if budget and q.price_range.value == budget else 1)
    return matches[:limit]


def profile_payload(profile: Dict) -> Dict:
    """Store dict -> ProfileResponse fields."""
    return {
        "user_id": profile.get("user_id", profile.get("id", "")),
        "username": profile.get("username", ""),
        "travel_interests": list(profile.get("travel_interests") or []),
        "budget_preference": profile.get("budget_preference", "mid-range"),
        "created_at": profile.get("created_at"),
        "updated_at": profile.get("updated_at"),
    }
