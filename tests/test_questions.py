import json

import pytest

from interview_coach.core.exceptions import LLMError, NotFoundError
from interview_coach.database import collections
from interview_coach.scripts import admin

CODING_QUESTION = {
    "questionId": "valid-parentheses",
    "title": "Valid Parentheses",
    "description": "Check that brackets are balanced.",
    "difficulty": "Easy",
    "algorithms": ["Stack"],
}


class TestAdminRoutes:
    def test_user_token_forbidden(self, client, auth_headers):
        for path, body in (
            ("/api/questions/generate-coding", {"title": "Two Sum", "description": "..."}),
            ("/api/questions/save-coding", {"questionData": CODING_QUESTION}),
            ("/api/questions/generate-behavioral", {"skill": "leadership"}),
            ("/api/llm/save", {"questionData": {"title": "Attention"}}),
        ):
            response = client.post(path, headers=auth_headers, json=body)
            assert response.status_code == 403, path
            assert response.json()["message"] == "Admin privileges required"

    def test_anonymous_is_401(self, client):
        response = client.post("/api/questions/save-coding", json={"questionData": CODING_QUESTION})
        assert response.status_code == 401

    def test_generate_coding(self, client, admin_headers, fake_llm):
        fake_llm.queue('Here you go:\n```json\n{"title": "Two Sum", "difficulty": "Easy"}\n```')

        response = client.post(
            "/api/questions/generate-coding",
            headers=admin_headers,
            json={"title": "Two Sum", "description": "Find two numbers"},
        )

        assert response.status_code == 200
        assert response.json()["questionData"] == {"title": "Two Sum", "difficulty": "Easy"}
        assert "Two Sum" in fake_llm.prompts[0]

    def test_generate_unparseable_reply_is_500(self, client, admin_headers, fake_llm):
        fake_llm.queue("Sorry, I can't do that.")

        response = client.post(
            "/api/questions/generate-system",
            headers=admin_headers,
            json={"title": "URL Shortener", "description": "Design bit.ly"},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "ai_response_error"
        assert response.json()["message"].startswith("Failed to generate question")

    def test_ai_failure_message_relayed(self, client, admin_headers, fake_llm):
        fake_llm.queue(LLMError("Gemini API request failed: quota exceeded"))

        response = client.post(
            "/api/questions/generate-coding",
            headers=admin_headers,
            json={"title": "Two Sum", "description": "..."},
        )

        assert response.status_code == 500
        assert "quota exceeded" in response.json()["message"]

    def test_save_coding_upserts_by_question_id(self, client, admin_headers, store):
        for title in ("Valid Parentheses", "Valid Parentheses II"):
            response = client.post(
                "/api/questions/save-coding",
                headers=admin_headers,
                json={"questionData": {**CODING_QUESTION, "title": title}},
            )
            assert response.status_code == 201

        bank = store.collection(collections.CODING_QUESTIONS)
        assert bank.count_documents({}) == 1
        assert bank.find_one({"_id": "valid-parentheses"})["title"] == "Valid Parentheses II"

    def test_save_coding_requires_question_id(self, client, admin_headers):
        response = client.post(
            "/api/questions/save-coding",
            headers=admin_headers,
            json={"questionData": {"title": "No id"}},
        )
        assert response.status_code == 400

    def test_save_system_design_keyed_by_slug(self, client, admin_headers, store):
        response = client.post(
            "/api/questions/save-system-design",
            headers=admin_headers,
            json={"questionData": {"title": "Design a URL Shortener!", "category": "Web"}},
        )

        assert response.status_code == 201
        assert store.collection(collections.SYSTEM_DESIGN_QUESTIONS).find_one({"_id": "design-a-url-shortener"})

    def test_save_rejects_title_without_slug(self, client, admin_headers):
        response = client.post(
            "/api/questions/save-behavioral",
            headers=admin_headers,
            json={"questionData": {"title": "???"}},
        )
        assert response.status_code == 400

    def test_behavioral_template_needs_no_ai(self, client, admin_headers, fake_llm):
        response = client.post(
            "/api/questions/generate-behavioral", headers=admin_headers, json={"skill": "Leadership"}
        )

        assert response.status_code == 200
        data = response.json()["questionData"]
        assert "Leadership" in data["title"]
        assert data["tags"] == ["leadership"]
        assert fake_llm.prompts == []


class TestCodingBank:
    def test_list_and_difficulty(self, client, seeded_coding):
        assert len(client.get("/api/questions/coding").json()["questions"]) == 2

        easy = client.get("/api/questions/coding", params={"difficulty": "Easy"}).json()["questions"]
        assert [q["id"] for q in easy] == ["two-sum"]

    def test_filtered_by_tags(self, client, seeded_coding):
        response = client.get(
            "/api/questions/coding/filtered",
            params={"dataStructures": "hash", "companies": "initech"},
        )

        body = response.json()
        assert body["total"] == 1
        assert body["questions"][0]["id"] == "lru-cache"
        assert body["filters"]["companies"] == "initech"

    def test_unmatched_filter_is_empty(self, client, seeded_coding):
        response = client.get("/api/questions/coding/filtered", params={"algorithms": "Dynamic Programming"})
        assert response.status_code == 200
        assert response.json()["questions"] == []
        assert response.json()["total"] == 0

    def test_filtered_excludes_completed(self, client, seeded_coding, store, user):
        store.collection(collections.LEARNING_HISTORY).insert_one(
            {"_id": "h1", "userId": user.uid, "questionId": "two-sum"}
        )

        response = client.get("/api/questions/coding/filtered", params={"userId": user.uid})

        assert [q["id"] for q in response.json()["questions"]] == ["lru-cache"]

    def test_filter_options(self, client, seeded_coding):
        body = client.get("/api/questions/coding/filter-options").json()
        assert body["difficulties"] == ["Easy", "Medium"]
        assert "Hash Table" in body["algorithms"]
        assert body["dataStructures"] == ["Array", "Linked List", "Hash Map"]
        assert sorted(body["companies"]) == ["Acme", "Globex", "Initech"]

    def test_code_questions_route(self, client, seeded_coding):
        assert len(client.get("/api/code/questions").json()["questions"]) == 2


class TestAdminScript:
    def test_load_questions_and_create_admin(self, store, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text(json.dumps({"questions": [
            {"title": "What is attention?", "category": "Transformers"},
            {"id": "custom-id", "title": "RLHF"},
            {"category": "no title"},
        ]}))

        written = admin.load_questions(store, "llm", admin.read_question_file(path))

        assert written == 2
        bank = store.collection(collections.LLM_QUESTIONS)
        assert bank.find_one({"_id": "what-is-attention"})["category"] == "Transformers"
        assert bank.find_one({"_id": "custom-id"})["title"] == "RLHF"

        assert admin.create_admin(store, "Root@Example.com", "secret123", bcrypt_rounds=4) is True
        assert admin.create_admin(store, "root@example.com", "secret123", bcrypt_rounds=4) is False
        users = admin.list_users(store)
        assert [(u["email"], u["role"]) for u in users] == [("root@example.com", "admin")]

    def test_promote_unknown_user(self, store):
        with pytest.raises(NotFoundError):
            admin.promote(store, "ghost@example.com")
