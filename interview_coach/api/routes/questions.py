"""
Question Routes - Question-bank administration, coding bank browsing and
practice interview sessions.

Generation and saving are admin-only; browsing is public; sessions need
a signed-in user.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from interview_coach.api.dependencies import (
    get_current_user,
    get_interview_service,
    get_question_service,
    require_admin,
)
from interview_coach.core.security import TokenUser
from interview_coach.models.common import (
    FeedbackResponse,
    MessageResponse,
    QuestionDataResponse,
    QuestionListResponse,
)
from interview_coach.models.interview import (
    BehavioralStartRequest,
    BehavioralStartResponse,
    BehavioralSubmitRequest,
    CodingStartRequest,
    CodingStartResponse,
    CodingSubmitRequest,
    EndInterviewRequest,
    FinalReportResponse,
    InterviewHistoryResponse,
    SessionResponse,
    SystemDesignStartRequest,
    SystemDesignSubmitRequest,
)
from interview_coach.models.questions import (
    FilteredCodingResponse,
    FilterOptionsResponse,
    GenerateBehavioralRequest,
    GenerateQuestionRequest,
    SaveQuestionRequest,
)
from interview_coach.services import InterviewService, QuestionService

router = APIRouter(prefix="/api/questions", tags=["Questions"])


# ============================================================
# Admin: generate and save
# ============================================================

@router.post("/generate-coding", response_model=QuestionDataResponse, summary="Generate a coding question")
def generate_coding(
    request: GenerateQuestionRequest,
    _admin: TokenUser = Depends(require_admin),
    service: QuestionService = Depends(get_question_service),
):
    return {"questionData": service.generate_coding(request.title, request.description)}


@router.post("/save-coding", response_model=MessageResponse, status_code=201, summary="Save a coding question")
def save_coding(
    request: SaveQuestionRequest,
    _admin: TokenUser = Depends(require_admin),
    service: QuestionService = Depends(get_question_service),
):
    service.save_question("coding", request.question_data)
    return {"message": f"Question \"{request.question_data.get('title', '')}\" saved successfully!"}


@router.post("/generate-system", response_model=QuestionDataResponse, summary="Generate a system design question")
def generate_system(
    request: GenerateQuestionRequest,
    _admin: TokenUser = Depends(require_admin),
    service: QuestionService = Depends(get_question_service),
):
    return {"questionData": service.generate_system_design(request.title, request.description)}


@router.post(
    "/save-system-design",
    response_model=MessageResponse,
    status_code=201,
    summary="Save a system design question"
)
def save_system_design(
    request: SaveQuestionRequest,
    _admin: TokenUser = Depends(require_admin),
    service: QuestionService = Depends(get_question_service),
):
    service.save_question("system-design", request.question_data)
    return {"message": f"System design question \"{request.question_data.get('title')}\" saved successfully!"}


@router.post("/generate-behavioral", response_model=QuestionDataResponse, summary="Build a behavioral question")
async def generate_behavioral(
    request: GenerateBehavioralRequest,
    _admin: TokenUser = Depends(require_admin),
):
    return {"questionData": QuestionService.behavioral_template(request.skill)}


@router.post(
    "/save-behavioral",
    response_model=MessageResponse,
    status_code=201,
    summary="Save a behavioral question"
)
def save_behavioral(
    request: SaveQuestionRequest,
    _admin: TokenUser = Depends(require_admin),
    service: QuestionService = Depends(get_question_service),
):
    service.save_question("behavioral", request.question_data)
    return {"message": f"Behavioral question \"{request.question_data.get('title')}\" saved successfully!"}


# ============================================================
# Coding bank
# ============================================================

@router.get("/coding", response_model=QuestionListResponse, summary="List coding questions")
def list_coding(
    difficulty: Optional[str] = Query(default=None),
    service: QuestionService = Depends(get_question_service),
):
    return {"questions": service.list_questions("coding", difficulty=difficulty)}


@router.get("/coding/filtered", response_model=FilteredCodingResponse, summary="Filter coding questions")
def filtered_coding(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    difficulty: Optional[str] = Query(default=None),
    algorithms: Optional[str] = Query(default=None, description="Comma-separated"),
    data_structures: Optional[str] = Query(default=None, alias="dataStructures", description="Comma-separated"),
    companies: Optional[str] = Query(default=None, description="Comma-separated"),
    service: QuestionService = Depends(get_question_service),
):
    return service.filtered_coding(user_id, difficulty, algorithms, data_structures, companies)


@router.get("/coding/filter-options", response_model=FilterOptionsResponse, summary="Coding filter values")
def coding_filter_options(service: QuestionService = Depends(get_question_service)):
    return service.filter_options()


# ============================================================
# Coding interview sessions
# ============================================================

@router.post("/coding-interview/start", response_model=CodingStartResponse, status_code=201)
def start_coding_interview(
    request: CodingStartRequest,
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    return service.start_coding(user, request.difficulty, request.language, request.topic)


@router.post("/coding-interview/submit", response_model=FeedbackResponse)
def submit_coding_interview(
    request: CodingSubmitRequest,
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    feedback = service.submit_coding(
        user, request.session_id, request.solution, request.approach, request.time_spent
    )
    return {"feedback": feedback}


@router.post("/coding-interview/end", response_model=FinalReportResponse)
def end_coding_interview(
    request: EndInterviewRequest,
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    return service.end(user, "coding", request.session_id)


@router.get("/coding-interview/{session_id}", response_model=SessionResponse)
def get_coding_interview(
    session_id: str,
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    return {"session": service.get(user, "coding", session_id)}


# ============================================================
# Behavioral interview sessions
# ============================================================

@router.post("/behavioral-interview/start", response_model=BehavioralStartResponse, status_code=201)
def start_behavioral_interview(
    request: BehavioralStartRequest,
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    return service.start_behavioral(user, request.role, request.level, request.company)


@router.post("/behavioral-interview/submit", response_model=FeedbackResponse)
def submit_behavioral_interview(
    request: BehavioralSubmitRequest,
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    feedback = service.submit_behavioral(
        user, request.session_id, request.question_id, request.response, request.response_type
    )
    return {"feedback": feedback}


@router.post("/behavioral-interview/end", response_model=FinalReportResponse)
def end_behavioral_interview(
    request: EndInterviewRequest,
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    return service.end(user, "behavioral", request.session_id)


@router.get("/behavioral-interview/{session_id}", response_model=SessionResponse)
def get_behavioral_interview(
    session_id: str,
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    return {"session": service.get(user, "behavioral", session_id)}


# ============================================================
# System design interview sessions
# ============================================================

@router.post("/system-design-interview/start", response_model=CodingStartResponse, status_code=201)
def start_system_design_interview(
    request: SystemDesignStartRequest,
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    return service.start_system_design(user, request.topic, request.difficulty, request.language)


@router.post("/system-design-interview/submit", response_model=FeedbackResponse)
def submit_system_design_interview(
    request: SystemDesignSubmitRequest,
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    feedback = service.submit_system_design(
        user, request.session_id, request.voice_input, request.whiteboard_data, request.time_spent
    )
    return {"feedback": feedback}


@router.post("/system-design-interview/end", response_model=FinalReportResponse)
def end_system_design_interview(
    request: EndInterviewRequest,
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    return service.end(user, "system-design", request.session_id)


@router.get("/system-design-interview/{session_id}", response_model=SessionResponse)
def get_system_design_interview(
    session_id: str,
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    return {"session": service.get(user, "system-design", session_id)}


@router.get("/interview-history", response_model=InterviewHistoryResponse, summary="Finished interviews")
def interview_history(
    user: TokenUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    return {"history": service.interview_history(user)}
