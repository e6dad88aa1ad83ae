"""Travel profiles and per-user decisions."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from swipe.models import Action

from ..models import (
    CreateProfileRequest,
    DecisionOut,
    ProfileResponse,
    RecordDecisionRequest,
    UpdateProfileRequest,
)
from ..services import StoreError
from ..state import get_state
from ..utils import profile_payload

router = APIRouter()


def _clean_user_id(user_id: str) -> str:
    uid = (user_id or "").strip()
    if not uid:
        raise HTTPException(status_code=400, detail="Invalid user id")
    return uid


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


@router.post("/profile", response_model=ProfileResponse, status_code=201)
def create_profile(request: CreateProfileRequest):
    """
    Onboarding: save username, travel interests and budget for a signed-in user.
    400 when the username is blank or no interest is selected; 409 when a profile exists.
    """
    store = get_state().profile_store
    try:
        if store.get(request.user_id):
            raise HTTPException(status_code=409, detail="Profile already exists")
        profile = store.create(
            request.user_id,
            request.username,
            [i.value for i in request.travel_interests],
            request.budget_preference.value,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    print(f"[users] profile created: user_id={profile['user_id']!r}", flush=True)
    return ProfileResponse(**profile_payload(profile))


@router.get("/{user_id}/profile", response_model=ProfileResponse)
def get_profile(user_id: str):
    try:
        profile = get_state().profile_store.get(_clean_user_id(user_id))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return ProfileResponse(**profile_payload(profile))


@router.patch("/{user_id}/profile", response_model=ProfileResponse)
def update_profile(user_id: str, request: UpdateProfileRequest):
    store = get_state().profile_store
    try:
        updated = store.update(
            _clean_user_id(user_id),
            username=request.username,
            travel_interests=[i.value for i in request.travel_interests] if request.travel_interests is not None else None,
            budget_preference=request.budget_preference.value if request.budget_preference else None,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not updated:
        raise HTTPException(status_code=404, detail="Profile not found")
    return ProfileResponse(**profile_payload(updated))


# ---------------------------------------------------------------------------
# Decisions (users/{user_id}/decisions)
# ---------------------------------------------------------------------------


@router.get("/{user_id}/decisions")
def list_decisions(
    user_id: str,
    action: Optional[str] = Query(None, description="liked | disliked (or like/dislike)"),
    include_quests: bool = Query(False, description="Attach the quest record to each decision"),
):
    """Decisions for the user, newest first."""
    state = get_state()
    try:
        wanted = Action.parse(action) if action else None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    out = []
    try:
        decisions = state.decision_store.list_decisions(_clean_user_id(user_id), wanted)
        for d in decisions:
            quest = state.quest_store.get_quest(d.quest_id) if include_quests else None
            out.append(DecisionOut(quest_id=d.quest_id, action=d.action.value, timestamp=d.timestamp, quest=quest))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"decisions": out, "total": len(out)}


@router.post("/{user_id}/decisions")
def record_decision(user_id: str, request: RecordDecisionRequest):
    """Record one decision outside a swipe session (e.g. from a quest detail page)."""
    state = get_state()
    uid = _clean_user_id(user_id)
    try:
        if not state.quest_store.get_quest(request.quest_id):
            raise HTTPException(status_code=404, detail="Quest not found")
        decision = state.decision_store.record_decision(uid, request.quest_id, request.action, request.timestamp)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"status": "ok", "quest_id": decision.quest_id, "action": decision.action.value,
            "timestamp": decision.timestamp}


@router.post("/{user_id}/decisions/reset")
def reset_decisions(user_id: str):
    """Clear all decisions for the user so every quest shows up in the deck again."""
    state = get_state()
    try:
        deleted = state.decision_store.delete_all_decisions(_clean_user_id(user_id))
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"status": "ok", "message": "Decisions reset", "deleted": deleted}
