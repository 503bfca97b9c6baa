"""
Password hashing and bearer tokens.

Passwords are stored as bcrypt hashes. Tokens are HS256 JWTs carrying the
user's uid (sub), email and role; admin-only routes check the role claim.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
import jwt

from interview_coach.core.config import Settings
from interview_coach.core.exceptions import AuthenticationError
from interview_coach.core.logging_config import get_logger

logger = get_logger(__name__)

ALGORITHM = "HS256"
ROLE_USER = "user"
ROLE_ADMIN = "admin"


@dataclass(frozen=True)
class TokenUser:
    """Identity decoded from a verified bearer token."""
    uid: str
    email: str
    role: str = ROLE_USER

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash stored for this user
        logger.warning("Stored password hash could not be parsed")
        return False


def create_access_token(uid: str, email: str, role: str, settings: Settings) -> str:
    """
    Sign a bearer token for a user.

    Args:
        uid: User document key
        email: User email
        role: 'user' or 'admin'
        settings: Application settings holding the signing key and lifetime

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": uid,
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> TokenUser:
    """
    Verify a bearer token and return the identity it carries.

    Raises:
        AuthenticationError: If the token is expired, tampered with or incomplete
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid token")

    uid = payload.get("sub")
    if not uid:
        raise AuthenticationError("Invalid token")

    return TokenUser(
        uid=uid,
        email=payload.get("email", ""),
        role=payload.get("role", ROLE_USER),
    )
