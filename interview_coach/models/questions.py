"""
Request and Response models for question-bank endpoints.

Covers admin generation/saving, bank browsing and the mock-interview
question routes.
"""
from typing import Any, Dict, List, Optional

from pydantic import Field

from interview_coach.models.common import CamelModel


class GenerateQuestionRequest(CamelModel):
    """Title and statement an admin wants expanded by the AI."""
    title: str = Field(..., min_length=1, max_length=500)
    description: str = Field(..., min_length=1, max_length=20000)


class GenerateLLMQuestionRequest(GenerateQuestionRequest):
    category: Optional[str] = None
    difficulty: Optional[str] = None


class GenerateBehavioralRequest(CamelModel):
    skill: str = Field(..., min_length=1, max_length=200, examples=["leadership"])


class SaveQuestionRequest(CamelModel):
    """
    Wrapper around a question document.

    Required keys inside questionData depend on the bank: coding questions
    need questionId, every other bank needs a title.
    """
    question_data: Dict[str, Any]


class FilteredCodingResponse(CamelModel):
    questions: List[Dict[str, Any]]
    total: int
    filters: Dict[str, Optional[str]]


class FilterOptionsResponse(CamelModel):
    difficulties: List[str]
    algorithms: List[str]
    data_structures: List[str]
    companies: List[str]


class CategoriesResponse(CamelModel):
    categories: List[str]
    difficulties: List[str]


class MockGenerateRequest(CamelModel):
    type: str = Field(..., description="coding, system-design or behavioral")
    difficulty: Optional[str] = "medium"
    save_to_database: bool = False


class MockGenerateResponse(CamelModel):
    question: Dict[str, Any]
    saved: bool = False
