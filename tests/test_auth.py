from dataclasses import replace
from unittest.mock import patch

import mongomock
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from interview_coach.api.main import create_app
from interview_coach.core.security import decode_access_token
from interview_coach.database import collections
from interview_coach.database.connection import DocumentStore


class TestRegister:
    def test_register_returns_token_and_public_user(self, client, settings, store):
        response = client.post(
            "/api/auth/register",
            json={"email": "New@Example.com", "password": "secret123", "name": "Nia"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["user"]["email"] == "new@example.com"
        assert body["user"]["role"] == "user"
        assert "passwordHash" not in body["user"]
        assert decode_access_token(body["token"], settings).uid == body["user"]["id"]

        stored = store.collection(collections.USERS).find_one({"email": "new@example.com"})
        assert stored["passwordHash"] != "secret123"

    def test_duplicate_email_rejected(self, client, store):
        payload = {"email": "dup@example.com", "password": "secret123"}
        assert client.post("/api/auth/register", json=payload).status_code == 201

        response = client.post("/api/auth/register", json={**payload, "email": "DUP@example.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "User with this email already exists."
        assert store.collection(collections.USERS).count_documents({"email": "dup@example.com"}) == 1

    def test_short_password_rejected(self, client):
        response = client.post("/api/auth/register", json={"email": "a@example.com", "password": "abc"})
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_missing_field_is_400(self, client):
        response = client.post("/api/auth/register", json={"password": "secret123"})
        assert response.status_code == 400
        assert "email" in response.json()["message"]


class TestLogin:
    def test_login_role_matches_stored_role(self, client, settings, admin_headers):
        response = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "secret123"})

        assert response.status_code == 200
        token_user = decode_access_token(response.json()["token"], settings)
        assert token_user.role == "admin"
        assert response.json()["user"]["role"] == "admin"

    def test_wrong_password(self, client, user):
        response = client.post("/api/auth/login", json={"email": user.email, "password": "nope-nope"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "secret123"})
        assert response.status_code == 401


class TestAccount:
    def test_me_requires_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["message"] == "Access token is required"

    def test_me_rejects_bad_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_me(self, client, auth_headers, user):
        response = client.get("/api/auth/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["user"]["id"] == user.uid
        assert response.json()["user"]["name"] == "Casey"

    def test_update_profile_merges_fields(self, client, auth_headers):
        client.put("/api/auth/profile", headers=auth_headers, json={"profile": {"title": "SWE"}})
        response = client.put(
            "/api/auth/profile", headers=auth_headers, json={"name": "Casey B", "profile": {"level": "senior"}}
        )

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["name"] == "Casey B"
        assert user["profile"] == {"title": "SWE", "level": "senior"}

    def test_change_password(self, client, auth_headers, user):
        bad = client.put(
            "/api/auth/change-password",
            headers=auth_headers,
            json={"currentPassword": "wrong-one", "newPassword": "newsecret"},
        )
        assert bad.status_code == 400
        assert bad.json()["message"] == "Current password is incorrect."

        ok = client.put(
            "/api/auth/change-password",
            headers=auth_headers,
            json={"currentPassword": "secret123", "newPassword": "newsecret"},
        )
        assert ok.status_code == 200

        login = client.post("/api/auth/login", json={"email": user.email, "password": "newsecret"})
        assert login.status_code == 200


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"
        assert client.get("/api/auth/health").json()["status"] == "OK"

    def test_ready(self, client):
        response = client.get("/health/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_security_headers(self, client):
        response = client.get("/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestAuditMiddleware:
    def test_request_id_echoed_and_generated(self, settings, store, fake_llm):
        app = create_app(settings=replace(settings, enable_audit_logging=True), store=store, llm_client=fake_llm)

        with TestClient(app) as audited:
            echoed = audited.get("/health", headers={"X-Request-ID": "abc-123"})
            generated = audited.get("/api/auth/health")

        assert echoed.headers["X-Request-ID"] == "abc-123"
        assert len(generated.headers["X-Request-ID"]) == 12
        assert "X-Response-Time" in generated.headers
        assert generated.headers["Cache-Control"] == "no-store"


class TestDatabaseErrors:
    def test_unreachable_store_returns_503_until_it_answers(self, settings, fake_llm):
        mongo = mongomock.MongoClient()
        store = DocumentStore(mongo, "test-db")
        app = create_app(settings=settings, store=store, llm_client=fake_llm)
        down = patch.object(mongo, "server_info", side_effect=ServerSelectionTimeoutError("no servers found"))

        with TestClient(app) as offline:
            with down:
                ready = offline.get("/health/ready")
                login = offline.post("/api/auth/login", json={"email": "a@example.com", "password": "secret123"})
                alive = offline.get("/health")
            recovered = offline.get("/health/ready")
            register = offline.post("/api/auth/register", json={"email": "b@example.com", "password": "secret123"})

        assert ready.status_code == 503
        assert ready.json()["error"] == "database_unavailable"
        assert login.status_code == 503
        assert login.json()["message"] == "Database is not available"
        assert alive.status_code == 200
        assert recovered.status_code == 200
        assert register.status_code == 201

    def test_driver_error_becomes_database_error(self, client, user):
        failing = patch(
            "mongomock.collection.Collection.find_one",
            side_effect=ServerSelectionTimeoutError("primary stepped down"),
        )

        with failing:
            response = client.post("/api/auth/login", json={"email": user.email, "password": "secret123"})

        assert response.status_code == 500
        assert response.json()["error"] == "database_error"
        assert response.json()["message"] == "Database operation failed: primary stepped down"
