import os
from collections import deque
from dataclasses import replace

import mongomock
import pytest

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("ENABLE_AUDIT_LOGGING", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402

from interview_coach.api.main import create_app  # noqa: E402
from interview_coach.core.config import get_settings  # noqa: E402
from interview_coach.core.exceptions import LLMError  # noqa: E402
from interview_coach.core.security import ROLE_ADMIN, TokenUser, create_access_token  # noqa: E402
from interview_coach.database import collections  # noqa: E402
from interview_coach.database.connection import DocumentStore  # noqa: E402


class FakeLLM:
    """
    Stand-in for LLMClient that answers from a scripted queue.

    Queue a string to have it returned, an exception instance to have it
    raised, or a callable taking the prompt to run it and return its result.
    Every prompt received is recorded.
    """

    def __init__(self):
        self.replies = deque()
        self.prompts = []

    def queue(self, *replies):
        self.replies.extend(replies)

    def generate(self, prompt, system_prompt=None):
        self.prompts.append(prompt)
        if not self.replies:
            raise LLMError("Gemini API request failed: no scripted reply")
        reply = self.replies.popleft()
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply


@pytest.fixture
def settings():
    return replace(
        get_settings(),
        app_env="testing",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        enable_audit_logging=False,
    )


@pytest.fixture
def store():
    return DocumentStore(mongomock.MongoClient(), "test-db")


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def client(settings, store, fake_llm):
    app = create_app(settings=settings, store=store, llm_client=fake_llm)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "candidate@example.com", "password": "secret123", "name": "Casey"},
    )
    body = response.json()
    return TokenUser(uid=body["user"]["id"], email="candidate@example.com")


@pytest.fixture
def user_token(settings, user):
    return create_access_token(user.uid, user.email, user.role, settings)


@pytest.fixture
def auth_headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def other_headers(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "other@example.com", "password": "secret123"},
    )
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def admin_headers(client, store):
    response = client.post(
        "/api/auth/register",
        json={"email": "admin@example.com", "password": "secret123"},
    )
    uid = response.json()["user"]["id"]
    store.collection(collections.USERS).update_one({"_id": uid}, {"$set": {"role": ROLE_ADMIN}})
    login = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "secret123"})
    return {"Authorization": f"Bearer {login.json()['token']}"}


@pytest.fixture
def seeded_coding(store):
    bank = store.collection(collections.CODING_QUESTIONS)
    bank.insert_many([
        {
            "_id": "two-sum",
            "questionId": "two-sum",
            "title": "Two Sum",
            "description": "Find two numbers adding up to a target.",
            "difficulty": "Easy",
            "algorithms": ["Hash Table"],
            "dataStructures": ["Array"],
            "companies": ["Acme", "Globex"],
        },
        {
            "_id": "lru-cache",
            "questionId": "lru-cache",
            "title": "LRU Cache",
            "description": "Design a least-recently-used cache.",
            "difficulty": "Medium",
            "algorithms": ["Design"],
            "dataStructures": ["Linked List", "Hash Map"],
            "companies": ["Initech"],
        },
    ])
    return bank
