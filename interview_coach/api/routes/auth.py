"""
Auth Routes - Registration, login and account management.

Endpoints:
- GET  /api/auth/health: Liveness of the auth routes
- POST /api/auth/register: Create an account and return a token
- POST /api/auth/login: Exchange credentials for a token
- GET  /api/auth/me: Current user
- PUT  /api/auth/profile: Update name/profile
- PUT  /api/auth/change-password: Replace the password
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from interview_coach.api.dependencies import get_auth_service, get_current_user
from interview_coach.core.security import TokenUser
from interview_coach.models.auth import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
    RegisterRequest,
    UserResponse,
)
from interview_coach.models.common import MessageResponse
from interview_coach.services import AuthService

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.get("/health", summary="Auth routes health")
async def auth_health():
    return {
        "status": "OK",
        "message": "Auth routes are working",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/register", response_model=AuthResponse, status_code=201, summary="Register a new user")
def register(request: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    return service.register(request.email, request.password, request.name)


@router.post("/login", response_model=AuthResponse, summary="Log in")
def login(request: LoginRequest, service: AuthService = Depends(get_auth_service)):
    return service.login(request.email, request.password)


@router.get("/me", response_model=UserResponse, summary="Current user")
def me(
    user: TokenUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return {"user": service.get_user(user)}


@router.put("/profile", response_model=ProfileUpdateResponse, summary="Update profile")
def update_profile(
    request: ProfileUpdateRequest,
    user: TokenUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return service.update_profile(user, request.name, request.profile)


@router.put("/change-password", response_model=MessageResponse, summary="Change password")
def change_password(
    request: ChangePasswordRequest,
    user: TokenUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return service.change_password(user, request.current_password, request.new_password)
