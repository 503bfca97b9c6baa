"""
Mock Interview Routes - Question pools for mock interviews, AI generation
and saving finished runs.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from interview_coach.api.dependencies import (
    get_current_user,
    get_interview_service,
    get_question_service,
)
from interview_coach.core.security import TokenUser
from interview_coach.models.common import HistorySavedResponse, QuestionListResponse
from interview_coach.models.history import MockResultRequest
from interview_coach.models.questions import MockGenerateRequest, MockGenerateResponse
from interview_coach.services import InterviewService, QuestionService

router = APIRouter(prefix="/api/mock", tags=["Mock Interview"])


@router.get("/coding-questions", response_model=QuestionListResponse)
def coding_questions(
    difficulty: Optional[str] = Query(default=None, description="'all' disables the filter"),
    service: QuestionService = Depends(get_question_service),
):
    return {"questions": service.list_questions("coding", difficulty=difficulty)}


@router.get("/system-design-questions", response_model=QuestionListResponse)
def system_design_questions(
    difficulty: Optional[str] = Query(default=None, description="'all' disables the filter"),
    service: QuestionService = Depends(get_question_service),
):
    return {"questions": service.list_questions("system-design", difficulty=difficulty)}


@router.get("/behavioral-questions", response_model=QuestionListResponse)
def behavioral_questions(
    difficulty: Optional[str] = Query(default=None, description="'all' disables the filter"),
    service: QuestionService = Depends(get_question_service),
):
    return {"questions": service.list_questions("behavioral", difficulty=difficulty)}


@router.post("/ai-generate", response_model=MockGenerateResponse, summary="Generate a mock question")
def ai_generate(
    request: MockGenerateRequest,
    user: TokenUser = Depends(get_current_user),
    service: QuestionService = Depends(get_question_service),
):
    return service.generate_for_mock(user, request.type, request.difficulty, request.save_to_database)


@router.post("/save-interview-result", response_model=HistorySavedResponse, status_code=201)
def save_interview_result(
    request: MockResultRequest,
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    history_id = service.save_mock_result(
        user,
        question_id=request.question_id,
        question_data=request.question_data,
        user_solution=request.user_solution,
        feedback=request.feedback,
        interview_type=request.interview_type,
        time_spent=request.time_spent,
        completed_at=request.completed_at,
    )
    return {"message": "Interview result saved successfully.", "historyId": history_id}
