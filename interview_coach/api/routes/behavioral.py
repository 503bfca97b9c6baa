"""
Behavioral Routes - Behavioral question bank and answer analysis.
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
from interview_coach.models.analysis import BehavioralAnalyzeRequest, BehavioralAnalyzeResponse
from interview_coach.models.common import HistorySavedResponse, QuestionListResponse, QuestionResponse
from interview_coach.models.history import BehavioralHistoryRequest
from interview_coach.services import AnalysisService, HistoryService, QuestionService

router = APIRouter(prefix="/api/behavioral", tags=["Behavioral"])


@router.get("/questions", response_model=QuestionListResponse)
def list_questions(service: QuestionService = Depends(get_question_service)):
    return {"questions": service.list_questions("behavioral")}


@router.get("/questions/filtered", response_model=QuestionListResponse)
def filtered_questions(
    category: Optional[str] = Query(default=None),
    service: QuestionService = Depends(get_question_service),
):
    return {"questions": service.list_questions("behavioral", category=category)}


@router.get("/questions/{question_id}", response_model=QuestionResponse)
def get_question(question_id: str, service: QuestionService = Depends(get_question_service)):
    return {"question": service.get_question("behavioral", question_id)}


@router.post("/analyze", response_model=BehavioralAnalyzeResponse, summary="Analyze a behavioral answer")
def analyze_answer(request: BehavioralAnalyzeRequest, service: AnalysisService = Depends(get_analysis_service)):
    return service.analyze_behavioral(request.question, request.user_answer, request.question_id)


@router.post("/learning-history", response_model=HistorySavedResponse, status_code=201)
def save_learning_history(
    request: BehavioralHistoryRequest,
    user: TokenUser = Depends(get_current_user),
    service: HistoryService = Depends(get_history_service),
):
    inline_question = request.question_data or {
        "title": request.title,
        "prompt": request.prompt,
        "category": request.category,
        "difficulty": request.difficulty,
        "sampleAnswer": request.sample_answer,
    }
    history_id = service.save_behavioral(
        user,
        request.question_id,
        user_answer=request.user_answer,
        feedback=request.feedback,
        completed_at=request.completed_at,
        inline_question=inline_question,
    )
    return {"message": "Behavioral question saved to learning history successfully.", "historyId": history_id}
