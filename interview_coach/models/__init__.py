"""
Models module - Pydantic schemas for data validation.

This module defines:
- Request models: Input validation for API endpoints
- Response models: Output formatting for API responses
"""
from interview_coach.models.common import (
    CamelModel,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
]
