"""
Request and Response models for learning history and the wrong-question book.
"""
from typing import Any, Dict, List, Optional

from pydantic import Field

from interview_coach.models.common import CamelModel


class CodingHistoryRequest(CamelModel):
    question_id: str = Field(..., min_length=1)
    user_code: Optional[str] = ""
    language: Optional[str] = None
    feedback: Optional[Dict[str, Any]] = None
    completed_at: Optional[str] = None


class BehavioralHistoryRequest(CamelModel):
    """
    Behavioral history entry.

    AI-generated questions are not in the bank, so the question can also
    be described inline, either as questionData or as flat fields.
    """
    question_id: str = Field(..., min_length=1)
    user_answer: Optional[str] = ""
    feedback: Optional[Dict[str, Any]] = None
    completed_at: Optional[str] = None
    question_data: Optional[Dict[str, Any]] = None
    title: Optional[str] = None
    prompt: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[str] = None
    sample_answer: Optional[str] = None


class QuestionHistoryRequest(CamelModel):
    """Used by the system-design and LLM banks."""
    question_id: str = Field(..., min_length=1)
    completed_at: Optional[str] = None


class MockResultRequest(CamelModel):
    question_id: str = Field(..., min_length=1)
    question_data: Dict[str, Any] = Field(default_factory=dict)
    user_solution: Optional[str] = ""
    feedback: Dict[str, Any] = Field(default_factory=dict)
    interview_type: str = Field(..., min_length=1)
    time_spent: int = Field(default=0, ge=0)
    completed_at: Optional[str] = None


class LearningHistoryResponse(CamelModel):
    history: List[Dict[str, Any]]


class WrongQuestionsResponse(CamelModel):
    wrong_questions: List[Dict[str, Any]]
    message: str


class WrongQuestionFeedbackResponse(CamelModel):
    success: bool = True
    explanation: str
    redo_plan: List[Any]
