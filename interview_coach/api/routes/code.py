"""
Code Routes - Coding practice, learning history and the wrong-question book.
"""
from fastapi import APIRouter, Depends

from interview_coach.api.dependencies import (
    get_analysis_service,
    get_current_user,
    get_history_service,
    get_question_service,
)
from interview_coach.core.security import TokenUser
from interview_coach.models.analysis import (
    CodeSubmitRequest,
    CodeSubmitResponse,
    ExecuteCodeRequest,
    ExecuteCodeResponse,
)
from interview_coach.models.common import HistorySavedResponse, MessageResponse, QuestionListResponse
from interview_coach.models.history import (
    CodingHistoryRequest,
    LearningHistoryResponse,
    WrongQuestionFeedbackResponse,
    WrongQuestionsResponse,
)
from interview_coach.services import AnalysisService, HistoryService, QuestionService

router = APIRouter(prefix="/api/code", tags=["Code"])


@router.get("/questions", response_model=QuestionListResponse, summary="All coding questions")
def list_questions(service: QuestionService = Depends(get_question_service)):
    return {"questions": service.list_questions("coding")}


@router.post("/execute", response_model=ExecuteCodeResponse, summary="Run code (simulated)")
def execute_code(request: ExecuteCodeRequest, service: AnalysisService = Depends(get_analysis_service)):
    return service.execute_code(request.user_code, request.language)


@router.post("/submit", response_model=CodeSubmitResponse, summary="Submit code for AI review")
def submit_code(request: CodeSubmitRequest, service: AnalysisService = Depends(get_analysis_service)):
    return service.submit_code(
        request.question.title, request.question.description, request.user_code, request.language
    )


@router.post(
    "/learning-history", response_model=HistorySavedResponse, status_code=201, summary="Save a solved coding question"
)
def save_learning_history(
    request: CodingHistoryRequest,
    user: TokenUser = Depends(get_current_user),
    service: HistoryService = Depends(get_history_service),
):
    history_id = service.save_coding(
        user,
        request.question_id,
        user_code=request.user_code,
        language=request.language,
        feedback=request.feedback,
        completed_at=request.completed_at,
    )
    return {"message": "Problem saved to learning history successfully.", "historyId": history_id}


@router.get("/learning-history/{user_id}", response_model=LearningHistoryResponse, summary="A user's history")
def get_learning_history(
    user_id: str,
    user: TokenUser = Depends(get_current_user),
    service: HistoryService = Depends(get_history_service),
):
    return {"history": service.list_for_user(user, user_id)}


@router.delete("/learning-history/{history_id}", response_model=MessageResponse, summary="Remove a history record")
def delete_learning_history(
    history_id: str,
    user: TokenUser = Depends(get_current_user),
    service: HistoryService = Depends(get_history_service),
):
    service.delete(user, history_id)
    return {"message": "Problem removed from learning history successfully."}


@router.get("/wrong-questions", response_model=WrongQuestionsResponse, summary="Wrong-question book")
def wrong_questions(
    user: TokenUser = Depends(get_current_user),
    service: HistoryService = Depends(get_history_service),
):
    return {
        "wrongQuestions": service.wrong_questions(user),
        "message": "Wrong questions retrieved successfully",
    }


@router.post(
    "/wrong-questions/{history_id}/ai-feedback",
    response_model=WrongQuestionFeedbackResponse,
    summary="AI explanation and redo plan"
)
def wrong_question_feedback(
    history_id: str,
    user: TokenUser = Depends(get_current_user),
    service: HistoryService = Depends(get_history_service),
):
    return service.wrong_question_feedback(user, history_id)
