"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No HTTP concerns (those belong in api/)
- Orchestrate between the document store and the AI client
"""
from interview_coach.services.analysis_service import AnalysisService
from interview_coach.services.auth_service import AuthService
from interview_coach.services.coach_service import CoachService
from interview_coach.services.history_service import HistoryService
from interview_coach.services.interview_service import InterviewService
from interview_coach.services.question_service import QuestionService
from interview_coach.services.resume_service import ResumeService

__all__ = [
    "AnalysisService",
    "AuthService",
    "CoachService",
    "HistoryService",
    "InterviewService",
    "QuestionService",
    "ResumeService",
]
