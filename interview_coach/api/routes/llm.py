"""
LLM Routes - Large-language-model topic questions.

Endpoints:
- GET  /api/llm/questions[/filtered|/{id}]: Browse the bank
- GET  /api/llm/categories: Distinct categories and difficulties
- POST /api/llm/generate, /api/llm/save: Admin authoring
- POST /api/llm/learning-history: Record a studied question
- POST /api/llm/analyze: AI evaluation of an answer
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from interview_coach.api.dependencies import (
    get_analysis_service,
    get_current_user,
    get_history_service,
    get_question_service,
    require_admin,
)
from interview_coach.core.security import TokenUser
from interview_coach.models.analysis import LLMAnalyzeRequest
from interview_coach.models.common import (
    FeedbackResponse,
    HistorySavedResponse,
    MessageResponse,
    QuestionDataResponse,
    QuestionListResponse,
    QuestionResponse,
)
from interview_coach.models.history import QuestionHistoryRequest
from interview_coach.models.questions import CategoriesResponse, GenerateLLMQuestionRequest, SaveQuestionRequest
from interview_coach.services import AnalysisService, HistoryService, QuestionService

router = APIRouter(prefix="/api/llm", tags=["LLM Questions"])


@router.get("/questions", response_model=QuestionListResponse)
def list_questions(service: QuestionService = Depends(get_question_service)):
    return {"questions": service.list_questions("llm")}


@router.get("/questions/filtered", response_model=QuestionListResponse)
def filtered_questions(
    difficulty: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    service: QuestionService = Depends(get_question_service),
):
    return {"questions": service.list_questions("llm", difficulty=difficulty, category=category)}


@router.get("/questions/{question_id}", response_model=QuestionResponse)
def get_question(question_id: str, service: QuestionService = Depends(get_question_service)):
    return {"question": service.get_question("llm", question_id)}


@router.get("/categories", response_model=CategoriesResponse)
def categories(service: QuestionService = Depends(get_question_service)):
    return service.categories("llm")


@router.post("/generate", response_model=QuestionDataResponse, summary="Generate an LLM question")
def generate_question(
    request: GenerateLLMQuestionRequest,
    _admin: TokenUser = Depends(require_admin),
    service: QuestionService = Depends(get_question_service),
):
    question = service.generate_llm(request.title, request.description, request.category, request.difficulty)
    return {"questionData": question}


@router.post("/save", response_model=MessageResponse, status_code=201, summary="Save an LLM question")
def save_question(
    request: SaveQuestionRequest,
    _admin: TokenUser = Depends(require_admin),
    service: QuestionService = Depends(get_question_service),
):
    service.save_question("llm", request.question_data)
    return {"message": f"LLM question \"{request.question_data.get('title')}\" saved successfully!"}


@router.post("/learning-history", response_model=HistorySavedResponse, status_code=201)
def save_learning_history(
    request: QuestionHistoryRequest,
    user: TokenUser = Depends(get_current_user),
    service: HistoryService = Depends(get_history_service),
):
    history_id = service.save_llm(user, request.question_id, request.completed_at)
    return {"message": "LLM question saved to learning history successfully!", "historyId": history_id}


@router.post("/analyze", response_model=FeedbackResponse, summary="Evaluate an answer")
def analyze_answer(
    request: LLMAnalyzeRequest,
    _user: TokenUser = Depends(get_current_user),
    service: AnalysisService = Depends(get_analysis_service),
):
    return {"feedback": service.analyze_llm_answer(request.question_data, request.user_answer, request.time_spent)}
