"""
Request and Response models for the coach agent and resume helpers.
"""
from typing import Any, Dict, List, Optional

from pydantic import Field

from interview_coach.models.common import CamelModel


class CoachProfileRequest(CamelModel):
    """Partial profile; only the fields sent are merged into the stored one."""
    target_companies: Optional[List[str]] = None
    tech_stacks: Optional[List[str]] = None
    language: Optional[str] = None
    available_time: Optional[float] = Field(default=None, ge=0)
    preferences: Optional[Any] = None


class CoachProfileResponse(CamelModel):
    success: bool = True
    profile: Optional[Dict[str, Any]] = None


class DailyPlanResponse(CamelModel):
    success: bool = True
    plan: Dict[str, Any]


class ChatTurn(CamelModel):
    role: str = Field(..., pattern="^(user|assistant)$")
    content: str


class GoalChatRequest(CamelModel):
    message: str = Field(..., min_length=1, max_length=4000)
    history: Optional[List[ChatTurn]] = None


class GoalChatResponse(CamelModel):
    success: bool = True
    reply: str


class AbilityMapResponse(CamelModel):
    success: bool = True
    abilities: List[Dict[str, Any]]
    recommendations: List[Dict[str, Any]]


class ResumeAnalyzeRequest(CamelModel):
    resume_text: str = Field(..., min_length=1)
    job_description: Optional[str] = None


class JDMatchingRequest(CamelModel):
    resume_text: str = Field(..., min_length=1)
    job_description: str = Field(..., min_length=1)


class CoverLetterRequest(CamelModel):
    resume_text: str = Field(..., min_length=1)
    job_description: str = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1)
    position_title: str = Field(..., min_length=1)
    company_culture: Optional[str] = None


class ResumeAnalysisResponse(CamelModel):
    success: bool = True
    analysis: Dict[str, Any]


class JDMatchingResponse(CamelModel):
    success: bool = True
    assessment: Dict[str, Any]


class CoverLetterResponse(CamelModel):
    success: bool = True
    cover_letter: Dict[str, Any]
