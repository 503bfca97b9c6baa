"""
Shared schema pieces.

All request and response bodies use camelCase on the wire while the Python
attributes stay snake_case; CamelModel wires up the aliases once.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    """Response model for the /health endpoints."""
    status: str = Field(default="healthy")
    version: str
    timestamp: datetime = Field(default_factory=_now)


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str
    message: str
    details: Optional[str] = None


class MessageResponse(CamelModel):
    message: str


class HistorySavedResponse(CamelModel):
    """Returned by every learning/interview history save."""
    message: str
    history_id: str


class QuestionListResponse(CamelModel):
    questions: List[Dict[str, Any]]


class QuestionResponse(CamelModel):
    question: Dict[str, Any]


class QuestionDataResponse(CamelModel):
    question_data: Dict[str, Any]


class FeedbackResponse(CamelModel):
    feedback: Dict[str, Any]
