"""
Request and Response models for the Auth API.
"""
from typing import Any, Dict, Optional

from pydantic import Field

from interview_coach.models.common import CamelModel


class RegisterRequest(CamelModel):
    """
    Request model for /api/auth/register.

    Attributes:
        email: Login email, stored lowercased
        password: Plain password, hashed before storage
        name: Optional display name
    """
    email: str = Field(..., min_length=3, max_length=254, examples=["candidate@example.com"])
    password: str = Field(..., min_length=1)
    name: Optional[str] = Field(default=None, max_length=200)


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProfileUpdateRequest(CamelModel):
    name: Optional[str] = Field(default=None, max_length=200)
    profile: Optional[Dict[str, Any]] = None


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class AuthResponse(CamelModel):
    """Token plus the public user document."""
    message: str
    token: str
    user: Dict[str, Any]


class UserResponse(CamelModel):
    user: Dict[str, Any]


class ProfileUpdateResponse(CamelModel):
    message: str
    user: Dict[str, Any]
