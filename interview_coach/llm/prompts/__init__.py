"""
Prompts module - AI prompt templates.

Prompts are stored as separate Python files for:
- Version control of prompt changes
- Clear documentation of prompt purpose
"""
from interview_coach.llm.prompts import (
    analysis_prompts,
    coach_prompts,
    interview_prompts,
    question_prompts,
)

__all__ = [
    "analysis_prompts",
    "coach_prompts",
    "interview_prompts",
    "question_prompts",
]
