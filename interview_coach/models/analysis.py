"""
Request and Response models for single-answer analysis.

Code execution and review, behavioral answers, LLM answers and system
design answers.
"""
from typing import Any, Dict, List, Optional

from pydantic import Field

from interview_coach.models.common import CamelModel


class ExecuteCodeRequest(CamelModel):
    user_code: str = Field(..., min_length=1)
    language: Optional[str] = "python"
    test_cases: Optional[Any] = None


class ExecuteCodeResponse(CamelModel):
    success: bool
    message: str


class CodeQuestion(CamelModel):
    title: str = Field(..., min_length=1)
    description: str = ""


class CodeSubmitRequest(CamelModel):
    question: CodeQuestion
    user_code: str = Field(..., min_length=1)
    language: str = Field(..., min_length=1)


class CodeSubmitResponse(CamelModel):
    test_results: Dict[str, Any]
    complexity: Dict[str, Any] = Field(default_factory=dict)
    ai_analysis: str = ""


class BehavioralAnalyzeRequest(CamelModel):
    question_id: Optional[str] = None
    user_answer: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1)


class BehavioralAnalyzeResponse(CamelModel):
    success: bool
    message: str


class LLMAnalyzeRequest(CamelModel):
    question_data: Dict[str, Any]
    user_answer: str = Field(..., min_length=1)
    time_spent: int = Field(default=0, ge=0)


class SystemDesignAnalyzeRequest(CamelModel):
    question_data: Dict[str, Any]
    whiteboard_data: List[Any] = Field(default_factory=list)
    voice_input: Optional[str] = None
    time_spent: int = Field(default=0, ge=0)
