"""Quest generation endpoint."""

from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..models import GenerateQuestRequest, GenerateQuestResponse
from ..services import QuestTemplate, StoreError
from ..state import get_state

router = APIRouter()


def _log_generate(msg: str) -> None:
    print(f"[generate] {msg}", flush=True)


@router.post("/quest", response_model=GenerateQuestResponse)
async def generate_quest(body: dict = Body(...)):
    """
    Generate a themed quest for a destination.

    Invalid templates get 400 with validation details. When the LLM fails or
    answers with unusable content the response still succeeds, carrying
    templated fallback content and fallback=true.
    """
    try:
        request = GenerateQuestRequest.model_validate(body)
    except ValidationError as e:
        details = [{"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]} for err in e.errors()]
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Invalid request data", "details": details},
        )

    state = get_state()
    template = QuestTemplate.model_validate(request.model_dump(exclude={"save"}))
    _log_generate(f"{template.theme.value} quest for {template.destination_city}, {template.destination_country}")
    quest, fallback = await state.generator.generate_quest(template)
    if fallback:
        _log_generate(f"using fallback content for {template.destination_city}")

    quest_id = None
    if request.save:
        try:
            saved = state.quest_store.add_quest(quest)
        except StoreError as e:
            raise HTTPException(status_code=503, detail=str(e))
        quest = saved.model_dump(mode="json")
        quest_id = saved.id
    return GenerateQuestResponse(success=True, quest=quest, fallback=fallback, quest_id=quest_id)
