"""Root and health endpoints."""

from fastapi import APIRouter

from ..services import get_available_providers, is_provider_available
from ..state import get_state

router = APIRouter()


@router.get("/")
def root():
    state = get_state()
    return {
        "name": "Side Quest API",
        "version": "1.0.0",
        "status": "ok",
        "data_source": state.backend,
        "active_sessions": len(state.sessions),
        "endpoints": {
            "profiles": ["/api/users/profile", "/api/users/{user_id}/profile"],
            "quests": ["/api/quests", "/api/quests/{quest_id}"],
            "decisions": ["/api/users/{user_id}/decisions", "/api/users/{user_id}/decisions/reset"],
            "swipe": ["/api/sessions/create", "/api/sessions/{id}/press", "/api/sessions/{id}/move",
                      "/api/sessions/{id}/release", "/api/sessions/{id}/decide"],
            "generate": ["/api/generate/quest"],
            "dashboard": ["/api/users/{user_id}/dashboard"],
        },
    }


@router.get("/api/health")
def health():
    state = get_state()
    provider = state.config.llm_provider
    try:
        quest_count = state.quest_store.count()
        store_ok, store_msg = True, f"{quest_count} quests"
    except Exception as e:
        store_ok, store_msg = False, str(e)
    return {
        "status": "healthy" if store_ok else "degraded",
        "store": {"backend": state.backend, "available": store_ok, "message": store_msg},
        "llm": {
            "provider": provider,
            "available": is_provider_available(provider),
            "configured_providers": get_available_providers(),
        },
    }
