"""
Request and Response models for interview sessions.

A session goes start -> submit* -> end; every kind shares the end/get
shapes and differs only in what is submitted.
"""
from typing import Any, Dict, List, Optional

from pydantic import Field, model_validator

from interview_coach.models.common import CamelModel


class CodingStartRequest(CamelModel):
    difficulty: Optional[str] = "medium"
    language: Optional[str] = "python"
    topic: Optional[str] = None


class CodingSubmitRequest(CamelModel):
    session_id: str = Field(..., min_length=1)
    solution: str = Field(..., min_length=1)
    approach: Optional[str] = ""
    time_spent: int = Field(default=0, ge=0)


class BehavioralStartRequest(CamelModel):
    role: str = Field(..., min_length=1, max_length=200)
    level: str = Field(default="mid", max_length=100)
    company: str = Field(default="", max_length=200)


class BehavioralSubmitRequest(CamelModel):
    session_id: str = Field(..., min_length=1)
    question_id: str = Field(..., min_length=1)
    response: str = Field(..., min_length=1)
    response_type: str = "text"


class SystemDesignStartRequest(CamelModel):
    topic: Optional[str] = None
    difficulty: Optional[str] = "medium"
    language: Optional[str] = "en"


class SystemDesignSubmitRequest(CamelModel):
    """Either a spoken/written explanation or whiteboard strokes must be sent."""
    session_id: str = Field(..., min_length=1)
    voice_input: Optional[str] = None
    whiteboard_data: List[Any] = Field(default_factory=list)
    time_spent: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_has_content(self) -> "SystemDesignSubmitRequest":
        if not (self.voice_input or "").strip() and not self.whiteboard_data:
            raise ValueError("Either voiceInput or whiteboardData is required")
        return self


class EndInterviewRequest(CamelModel):
    session_id: str = Field(..., min_length=1)


class CodingStartResponse(CamelModel):
    session_id: str
    question_data: Dict[str, Any]


class BehavioralStartResponse(CamelModel):
    session_id: str
    interview_data: Dict[str, Any]


class FinalReportResponse(CamelModel):
    session_id: str
    final_report: Dict[str, Any]


class SessionResponse(CamelModel):
    session: Dict[str, Any]


class InterviewHistoryResponse(CamelModel):
    history: List[Dict[str, Any]]
