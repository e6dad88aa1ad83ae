"""Quest catalogue endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import ValidationError

from swipe.models import PriceRange, Quest, Theme

from ..models import QuestListResponse
from ..services import StoreError
from ..state import get_state

router = APIRouter()


@router.get("", response_model=QuestListResponse)
def list_quests(
    theme: Optional[Theme] = Query(None, description="Filter by theme"),
    price_range: Optional[PriceRange] = Query(None, description="Filter by price tier"),
    limit: Optional[int] = Query(None, ge=1, le=500),
):
    """List quests newest first."""
    state = get_state()
    try:
        quests = state.quest_store.list_quests(theme=theme, price_range=price_range, limit=limit)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return QuestListResponse(quests=quests, total=len(quests))


@router.get("/{quest_id}", response_model=Quest)
def get_quest(quest_id: str):
    try:
        quest = get_state().quest_store.get_quest(quest_id)
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not quest:
        raise HTTPException(status_code=404, detail="Quest not found")
    return quest


@router.post("", response_model=Quest, status_code=201)
def create_quest(body: dict):
    """Insert one quest. id and created_at are assigned when missing."""
    state = get_state()
    try:
        return state.quest_store.add_quest(body)
    except ValidationError as e:
        raise HTTPException(
            status_code=400,
            detail=[{"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in e.errors()],
        )
    except StoreError as e:
        raise HTTPException(status_code=503, detail=str(e))
