"""
Resume Routes - Resume review, job-description matching and cover letters.
"""
from fastapi import APIRouter, Depends

from interview_coach.api.dependencies import get_current_user, get_resume_service
from interview_coach.core.security import TokenUser
from interview_coach.models.coach import (
    CoverLetterRequest,
    CoverLetterResponse,
    JDMatchingRequest,
    JDMatchingResponse,
    ResumeAnalysisResponse,
    ResumeAnalyzeRequest,
)
from interview_coach.services import ResumeService

router = APIRouter(prefix="/api/resume", tags=["Resume"])


@router.post("/analyze", response_model=ResumeAnalysisResponse)
def analyze_resume(
    request: ResumeAnalyzeRequest,
    _user: TokenUser = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    return service.analyze(request.resume_text, request.job_description)


@router.post("/jd-matching", response_model=JDMatchingResponse)
def jd_matching(
    request: JDMatchingRequest,
    _user: TokenUser = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    return service.match_job_description(request.resume_text, request.job_description)


@router.post("/cover-letter", response_model=CoverLetterResponse)
def cover_letter(
    request: CoverLetterRequest,
    _user: TokenUser = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    return service.cover_letter(
        request.resume_text,
        request.job_description,
        request.company_name,
        request.position_title,
        request.company_culture,
    )
