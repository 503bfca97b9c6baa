from dataclasses import replace

import pytest

from interview_coach.core.exceptions import AuthenticationError
from interview_coach.core.security import (
    ROLE_ADMIN,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("secret123", rounds=4)
        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("wrong-password", hashed)

    def test_malformed_hash_does_not_verify(self):
        assert not verify_password("secret123", "not-a-bcrypt-hash")
        assert not verify_password("secret123", "")


class TestTokens:
    def test_round_trip_carries_role(self, settings):
        token = create_access_token("uid-1", "a@b.co", ROLE_ADMIN, settings)
        user = decode_access_token(token, settings)
        assert user.uid == "uid-1"
        assert user.email == "a@b.co"
        assert user.is_admin

    def test_wrong_secret_rejected(self, settings):
        token = create_access_token("uid-1", "a@b.co", "user", settings)
        with pytest.raises(AuthenticationError):
            decode_access_token(token, replace(settings, jwt_secret="another-secret"))

    def test_expired_token_rejected(self, settings):
        token = create_access_token("uid-1", "a@b.co", "user", replace(settings, jwt_expire_minutes=-1))
        with pytest.raises(AuthenticationError, match="expired"):
            decode_access_token(token, settings)

    def test_garbage_rejected(self, settings):
        with pytest.raises(AuthenticationError):
            decode_access_token("not.a.token", settings)


class TestSettings:
    def test_environment_helpers(self, settings):
        assert not settings.is_development()
        assert replace(settings, app_env="Development").is_development()
        assert not replace(settings, app_env="production").is_development()
