"""
Request dependencies.

The store and AI client are created once by the application lifespan (or
injected by create_app) and read from app.state here; services are cheap
wrappers built per request around them.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from interview_coach.core.config import Settings
from interview_coach.core.exceptions import AuthenticationError, PermissionDeniedError
from interview_coach.core.security import TokenUser, decode_access_token
from interview_coach.database.connection import DocumentStore
from interview_coach.llm.client import LLMClient
from interview_coach.services import (
    AnalysisService,
    AuthService,
    CoachService,
    HistoryService,
    InterviewService,
    QuestionService,
    ResumeService,
)

bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_llm_client(request: Request) -> LLMClient:
    return request.app.state.llm_client


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> TokenUser:
    """
    Resolve the caller from the bearer token.

    Raises:
        AuthenticationError: If no token is sent or it does not verify
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token is required")
    return decode_access_token(credentials.credentials, settings)


def require_admin(user: TokenUser = Depends(get_current_user)) -> TokenUser:
    if not user.is_admin:
        raise PermissionDeniedError("Admin privileges required")
    return user


# ============================================================
# Service factories
# ============================================================

def get_auth_service(
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(store, settings)


def get_question_service(
    store: DocumentStore = Depends(get_store),
    llm_client: LLMClient = Depends(get_llm_client),
) -> QuestionService:
    return QuestionService(store, llm_client)


def get_interview_service(
    store: DocumentStore = Depends(get_store),
    llm_client: LLMClient = Depends(get_llm_client),
) -> InterviewService:
    return InterviewService(store, llm_client)


def get_history_service(
    store: DocumentStore = Depends(get_store),
    llm_client: LLMClient = Depends(get_llm_client),
) -> HistoryService:
    return HistoryService(store, llm_client)


def get_analysis_service(
    store: DocumentStore = Depends(get_store),
    llm_client: LLMClient = Depends(get_llm_client),
) -> AnalysisService:
    return AnalysisService(store, llm_client)


def get_coach_service(
    store: DocumentStore = Depends(get_store),
    llm_client: LLMClient = Depends(get_llm_client),
) -> CoachService:
    return CoachService(store, llm_client)


def get_resume_service(
    store: DocumentStore = Depends(get_store),
    llm_client: LLMClient = Depends(get_llm_client),
) -> ResumeService:
    return ResumeService(store, llm_client)
