"""
Auth Service - Accounts, credentials and bearer tokens.

Users live in the `users` collection keyed by a generated uid. Passwords
are bcrypt hashes; successful register/login calls return a signed token
whose role claim mirrors the stored role.
"""
from typing import Any, Dict, Optional

from pymongo.errors import DuplicateKeyError

from interview_coach.core.config import Settings
from interview_coach.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from interview_coach.core.security import (
    ROLE_USER,
    TokenUser,
    create_access_token,
    hash_password,
    verify_password,
)
from interview_coach.core.validators import validate_password
from interview_coach.database import collections
from interview_coach.database.connection import DocumentStore
from interview_coach.database.documents import new_id, to_public, utcnow
from interview_coach.services.base import BaseService


def public_user(doc: Dict[str, Any]) -> Dict[str, Any]:
    """User document without credential fields."""
    data = to_public(doc)
    data.pop("passwordHash", None)
    return data


def normalize_email(email: str) -> str:
    email = (email or "").strip().lower()
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise ValidationError("A valid email address is required.", field="email")
    return email


class AuthService(BaseService):
    """
    Service for registration, login and profile management.

    Example:
        >>> service = AuthService(store, settings)
        >>> result = service.register("a@b.co", "secret1", "Ada")
        >>> result["token"]
        'eyJ...'
    """

    def __init__(self, store: DocumentStore, settings: Settings):
        super().__init__(store)
        self.settings = settings

    def register(self, email: str, password: str, name: Optional[str] = None) -> Dict[str, Any]:
        """
        Create a user and sign a token for it.

        Raises:
            ValidationError: If the email is taken or the password is too weak
        """
        email = normalize_email(email)
        is_valid, error = validate_password(password)
        if not is_valid:
            raise ValidationError(error, field="password")

        users = self.collection(collections.USERS)
        if users.find_one({"email": email}) is not None:
            raise ValidationError("User with this email already exists.", field="email")

        now = utcnow()
        doc = {
            "_id": new_id(),
            "email": email,
            "name": (name or "").strip() or email.split("@")[0],
            "role": ROLE_USER,
            "passwordHash": hash_password(password, self.settings.bcrypt_rounds),
            "profile": {},
            "createdAt": now,
            "updatedAt": now,
            "lastLogin": now,
        }
        try:
            users.insert_one(doc)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration
            raise ValidationError("User with this email already exists.", field="email")

        self.logger.info(f"Registered user {doc['_id']}")
        return {
            "message": "User created successfully",
            "token": self._token_for(doc),
            "user": public_user(doc),
        }

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Verify credentials and sign a token.

        Raises:
            AuthenticationError: If the email is unknown or the password wrong
        """
        users = self.collection(collections.USERS)
        doc = users.find_one({"email": (email or "").strip().lower()})
        if doc is None or not verify_password(password, doc.get("passwordHash", "")):
            raise AuthenticationError("Invalid credentials")

        now = utcnow()
        users.update_one({"_id": doc["_id"]}, {"$set": {"lastLogin": now}})
        doc["lastLogin"] = now

        self.logger.info(f"User {doc['_id']} logged in")
        return {
            "message": "Login successful",
            "token": self._token_for(doc),
            "user": public_user(doc),
        }

    def get_user(self, user: TokenUser) -> Dict[str, Any]:
        doc = self.collection(collections.USERS).find_one({"_id": user.uid})
        if doc is None:
            raise NotFoundError("User not found", resource_id=user.uid)
        return public_user(doc)

    def update_profile(
        self,
        user: TokenUser,
        name: Optional[str] = None,
        profile: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Update the display name and/or merge profile fields."""
        updates: Dict[str, Any] = {"updatedAt": utcnow()}
        if name is not None:
            if not name.strip():
                raise ValidationError("Name cannot be empty.", field="name")
            updates["name"] = name.strip()
        for key, value in (profile or {}).items():
            updates[f"profile.{key}"] = value

        result = self.collection(collections.USERS).update_one({"_id": user.uid}, {"$set": updates})
        if result.matched_count == 0:
            raise NotFoundError("User not found", resource_id=user.uid)

        return {"message": "Profile updated successfully", "user": self.get_user(user)}

    def change_password(self, user: TokenUser, current_password: str, new_password: str) -> Dict[str, Any]:
        """
        Replace the password hash after checking the current password.

        Raises:
            ValidationError: If the current password is wrong or the new one too weak
        """
        users = self.collection(collections.USERS)
        doc = users.find_one({"_id": user.uid})
        if doc is None:
            raise NotFoundError("User not found", resource_id=user.uid)
        if not verify_password(current_password, doc.get("passwordHash", "")):
            raise ValidationError("Current password is incorrect.", field="currentPassword")

        is_valid, error = validate_password(new_password)
        if not is_valid:
            raise ValidationError(error, field="newPassword")

        users.update_one(
            {"_id": user.uid},
            {"$set": {
                "passwordHash": hash_password(new_password, self.settings.bcrypt_rounds),
                "updatedAt": utcnow(),
            }},
        )
        self.logger.info(f"Password changed for user {user.uid}")
        return {"message": "Password changed successfully"}

    def _token_for(self, doc: Dict[str, Any]) -> str:
        return create_access_token(
            uid=doc["_id"],
            email=doc["email"],
            role=doc.get("role", ROLE_USER),
            settings=self.settings,
        )
