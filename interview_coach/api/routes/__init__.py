"""
API Routes module - Endpoint definitions.

Each file in this module defines routes for a specific domain:
- health.py        : Health and readiness checks
- auth.py          : Accounts and tokens
- questions.py     : Bank administration, coding bank, interview sessions
- code.py          : Coding practice, learning history, wrong questions
- behavioral.py    : Behavioral bank and analysis
- llm.py           : LLM-topic bank and analysis
- system_design.py : System design bank and analysis
- mock.py          : Mock interview pools and results
- coach_agent.py   : Coaching profile, plan, chat, ability map
- resume.py        : Resume helpers
"""
from interview_coach.api.routes.auth import router as auth_router
from interview_coach.api.routes.behavioral import router as behavioral_router
from interview_coach.api.routes.coach_agent import router as coach_agent_router
from interview_coach.api.routes.code import router as code_router
from interview_coach.api.routes.health import router as health_router
from interview_coach.api.routes.llm import router as llm_router
from interview_coach.api.routes.mock import router as mock_router
from interview_coach.api.routes.questions import router as questions_router
from interview_coach.api.routes.resume import router as resume_router
from interview_coach.api.routes.system_design import router as system_design_router

__all__ = [
    "auth_router",
    "behavioral_router",
    "coach_agent_router",
    "code_router",
    "health_router",
    "llm_router",
    "mock_router",
    "questions_router",
    "resume_router",
    "system_design_router",
]
