"""Pydantic request/response models for the API."""

from .common import DecisionOut, QuestListResponse, StatusResponse
from .dashboard import DashboardResponse, DecisionCounts
from .generation import GenerateQuestRequest, GenerateQuestResponse
from .sessions import (
    CreateSessionRequest,
    DecideRequest,
    GestureResponse,
    PanEndRequest,
    PointerRequest,
    ReleaseRequest,
    SessionResponse,
)
from .users import (
    CreateProfileRequest,
    ProfileResponse,
    RecordDecisionRequest,
    TravelInterest,
    UpdateProfileRequest,
)

__all__ = [
    "DecisionOut",
    "QuestListResponse",
    "StatusResponse",
    "DashboardResponse",
    "DecisionCounts",
    "GenerateQuestRequest",
    "GenerateQuestResponse",
    "CreateSessionRequest",
    "DecideRequest",
    "GestureResponse",
    "PanEndRequest",
    "PointerRequest",
    "ReleaseRequest",
    "SessionResponse",
    "CreateProfileRequest",
    "ProfileResponse",
    "RecordDecisionRequest",
    "TravelInterest",
    "UpdateProfileRequest",
]
