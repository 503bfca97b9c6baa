"""
System Design Routes - System design question bank and design analysis.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from interview_coach.api.dependencies import (
    get_analysis_service,
    get_current_user,
    get_history_service,
    get_question_service,
)
from interview_coach.core.security import TokenUser
from interview_coach.models.analysis import SystemDesignAnalyzeRequest
from interview_coach.models.common import (
    FeedbackResponse,
    HistorySavedResponse,
    QuestionListResponse,
    QuestionResponse,
)
from interview_coach.models.history import QuestionHistoryRequest
from interview_coach.services import AnalysisService, HistoryService, QuestionService

router = APIRouter(prefix="/api/system-design", tags=["System Design"])


@router.get("/questions", response_model=QuestionListResponse)
def list_questions(service: QuestionService = Depends(get_question_service)):
    return {"questions": service.list_questions("system-design")}


@router.get("/questions/filtered", response_model=QuestionListResponse)
def filtered_questions(
    difficulty: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    service: QuestionService = Depends(get_question_service),
):
    return {"questions": service.list_questions("system-design", difficulty=difficulty, category=category)}


@router.get("/questions/{question_id}", response_model=QuestionResponse)
def get_question(question_id: str, service: QuestionService = Depends(get_question_service)):
    return {"question": service.get_question("system-design", question_id)}


@router.post("/learning-history", response_model=HistorySavedResponse, status_code=201)
def save_learning_history(
    request: QuestionHistoryRequest,
    user: TokenUser = Depends(get_current_user),
    service: HistoryService = Depends(get_history_service),
):
    history_id = service.save_system_design(user, request.question_id, request.completed_at)
    return {"message": "System design question saved to learning history successfully.", "historyId": history_id}


@router.post("/analyze", response_model=FeedbackResponse, summary="Evaluate a design")
def analyze_design(
    request: SystemDesignAnalyzeRequest,
    _user: TokenUser = Depends(get_current_user),
    service: AnalysisService = Depends(get_analysis_service),
):
    feedback = service.analyze_system_design(
        request.question_data, request.voice_input, request.whiteboard_data, request.time_spent
    )
    return {"feedback": feedback}
