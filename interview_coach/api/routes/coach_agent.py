"""
Coach Agent Routes - Preparation profile, daily plan, goal chat, ability map.
"""
from fastapi import APIRouter, Depends

from interview_coach.api.dependencies import get_coach_service, get_current_user
from interview_coach.core.security import TokenUser
from interview_coach.models.coach import (
    AbilityMapResponse,
    CoachProfileRequest,
    CoachProfileResponse,
    DailyPlanResponse,
    GoalChatRequest,
    GoalChatResponse,
)
from interview_coach.services import CoachService

router = APIRouter(prefix="/api/coach-agent", tags=["Coach Agent"])


@router.post("/profile", response_model=CoachProfileResponse, summary="Merge profile fields")
def save_profile(
    request: CoachProfileRequest,
    user: TokenUser = Depends(get_current_user),
    service: CoachService = Depends(get_coach_service),
):
    return service.save_profile(user, request.model_dump(by_alias=True, exclude_none=True))


@router.get("/profile", response_model=CoachProfileResponse)
def get_profile(
    user: TokenUser = Depends(get_current_user),
    service: CoachService = Depends(get_coach_service),
):
    return {"success": True, "profile": service.get_profile(user)}


@router.get("/daily-plan", response_model=DailyPlanResponse)
def daily_plan(
    user: TokenUser = Depends(get_current_user),
    service: CoachService = Depends(get_coach_service),
):
    return service.daily_plan(user)


@router.post("/goal-chat", response_model=GoalChatResponse)
def goal_chat(
    request: GoalChatRequest,
    user: TokenUser = Depends(get_current_user),
    service: CoachService = Depends(get_coach_service),
):
    history = [turn.model_dump() for turn in request.history or []]
    return service.goal_chat(user, request.message, history)


@router.get("/ability-map", response_model=AbilityMapResponse)
def ability_map(
    user: TokenUser = Depends(get_current_user),
    service: CoachService = Depends(get_coach_service),
):
    return service.ability_map(user)
