"""Personalised dashboard: liked quests, decision counts and suggestions."""

import asyncio

from fastapi import APIRouter, HTTPException

from swipe.models import Action

from ..models import DashboardResponse, DecisionCounts, ProfileResponse
from ..services import StoreError
from ..state import get_state
from ..utils import likes_by_theme, profile_payload, quests_for_decisions, suggest_quests

router = APIRouter()


@router.get("/{user_id}/dashboard", response_model=DashboardResponse)
async def get_dashboard(user_id: str):
    state = get_state()
    uid = (user_id or "").strip()
    try:
        profile = state.profile_store.get(uid)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    try:
        quests, decided_ids = await asyncio.gather(
            state.quest_store.list_quests_async(),
            state.decision_store.decided_quest_ids_async(uid),
        )
        liked = state.decision_store.list_decisions(uid, Action.ACCEPT)
        disliked = state.decision_store.list_decisions(uid, Action.REJECT)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))

    quest_by_id = {q.id: q for q in quests}
    liked_quests = quests_for_decisions(liked, quest_by_id)
    undecided = [q for q in quests if q.id not in decided_ids]
    payload = profile_payload(profile)
    return DashboardResponse(
        profile=ProfileResponse(**payload),
        liked_quests=liked_quests,
        counts=DecisionCounts(liked=len(liked), disliked=len(disliked), remaining=len(undecided)),
        likes_by_theme=likes_by_theme(liked_quests),
        suggestions=suggest_quests(undecided, payload["travel_interests"], payload["budget_preference"]),
    )
