"""
API module - FastAPI routes and HTTP handling.

This module handles:
- Request validation and parsing
- Response formatting
- Error handling
- Route definitions
"""
from interview_coach.api.main import app, create_app

__all__ = ["app", "create_app"]
