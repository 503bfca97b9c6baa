import pytest

from interview_coach.core.exceptions import LLMError
from interview_coach.database import collections


@pytest.fixture
def seeded_banks(store):
    store.collection(collections.BEHAVIORAL_QUESTIONS).insert_many([
        {"_id": "conflict", "title": "Conflict", "category": "Teamwork", "difficulty": "medium"},
        {"_id": "failure", "title": "Failure", "category": "Growth", "difficulty": "easy"},
    ])
    store.collection(collections.LLM_QUESTIONS).insert_many([
        {"_id": "attention", "title": "Attention", "category": "Transformers", "difficulty": "hard"},
        {"_id": "rlhf", "title": "RLHF", "category": "Alignment", "difficulty": "hard"},
        {"_id": "tokens", "title": "Tokenization", "category": "Transformers", "difficulty": "easy"},
    ])


class TestBehavioralBank:
    def test_list_filter_get(self, client, seeded_banks):
        assert len(client.get("/api/behavioral/questions").json()["questions"]) == 2

        growth = client.get("/api/behavioral/questions/filtered", params={"category": "Growth"}).json()
        assert [q["id"] for q in growth["questions"]] == ["failure"]

        assert client.get("/api/behavioral/questions/conflict").json()["question"]["title"] == "Conflict"
        assert client.get("/api/behavioral/questions/missing").status_code == 404

    def test_analyze_returns_raw_text(self, client, fake_llm):
        fake_llm.queue("**Situation**: clear.\n**Score**: 7/10")

        response = client.post(
            "/api/behavioral/analyze",
            json={"question": "Tell me about a conflict.", "userAnswer": "We disagreed on..."},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "**Situation**: clear.\n**Score**: 7/10"}

    def test_analyze_ai_failure(self, client, fake_llm):
        fake_llm.queue(LLMError("Gemini API key is not configured on the server."))

        response = client.post("/api/behavioral/analyze", json={"question": "Q", "userAnswer": "A"})

        assert response.status_code == 500
        assert response.json()["message"] == "Gemini API key is not configured on the server."


class TestLLMBank:
    def test_filtered_and_categories(self, client, seeded_banks):
        response = client.get(
            "/api/llm/questions/filtered", params={"category": "Transformers", "difficulty": "hard"}
        )
        assert [q["id"] for q in response.json()["questions"]] == ["attention"]

        categories = client.get("/api/llm/categories").json()
        assert categories["categories"] == ["Transformers", "Alignment"]
        assert categories["difficulties"] == ["hard", "easy"]

    def test_save_sets_timestamps(self, client, admin_headers, store):
        response = client.post(
            "/api/llm/save", headers=admin_headers, json={"questionData": {"title": "What is LoRA?"}}
        )

        assert response.status_code == 201
        doc = store.collection(collections.LLM_QUESTIONS).find_one({"_id": "what-is-lora"})
        assert doc["createdAt"] is not None
        assert doc["updatedAt"] is not None

    def test_generate_passes_category(self, client, admin_headers, fake_llm):
        fake_llm.queue('{"title": "KV cache", "category": "Inference"}')

        response = client.post(
            "/api/llm/generate",
            headers=admin_headers,
            json={"title": "KV cache", "description": "Explain it", "category": "Inference", "difficulty": "hard"},
        )

        assert response.json()["questionData"]["category"] == "Inference"
        assert "Inference" in fake_llm.prompts[0]

    def test_learning_history(self, client, auth_headers, seeded_banks, store):
        response = client.post("/api/llm/learning-history", headers=auth_headers, json={"questionId": "rlhf"})

        assert response.status_code == 201
        record = store.collection(collections.LEARNING_HISTORY).find_one({"_id": response.json()["historyId"]})
        assert record["questionData"] == {"title": "RLHF", "category": "Alignment", "difficulty": "hard"}

    def test_analyze_requires_auth(self, client):
        response = client.post("/api/llm/analyze", json={"questionData": {}, "userAnswer": "..."})
        assert response.status_code == 401

    def test_analyze(self, client, auth_headers, fake_llm):
        fake_llm.queue('{"overallScore": 82, "strengths": ["precise"]}')

        response = client.post(
            "/api/llm/analyze",
            headers=auth_headers,
            json={"questionData": {"title": "Attention"}, "userAnswer": "Weights tokens...", "timeSpent": 90},
        )

        assert response.json()["feedback"]["overallScore"] == 82


class TestSystemDesignBank:
    def test_analyze(self, client, auth_headers, fake_llm):
        fake_llm.queue('{"overallScore": 70}')

        response = client.post(
            "/api/system-design/analyze",
            headers=auth_headers,
            json={"questionData": {"title": "CDN"}, "voiceInput": "Edge caches"},
        )

        assert response.status_code == 200
        assert response.json()["feedback"] == {"overallScore": 70}


class TestMockInterview:
    def test_question_pools(self, client, seeded_coding):
        everything = client.get("/api/mock/coding-questions", params={"difficulty": "all"}).json()
        medium = client.get("/api/mock/coding-questions", params={"difficulty": "Medium"}).json()

        assert len(everything["questions"]) == 2
        assert [q["id"] for q in medium["questions"]] == ["lru-cache"]
        assert client.get("/api/mock/behavioral-questions").json()["questions"] == []

    def test_ai_generate_without_saving(self, client, auth_headers, fake_llm, store):
        fake_llm.queue('{"title": "Rotate Array", "difficulty": "easy"}')

        response = client.post(
            "/api/mock/ai-generate", headers=auth_headers, json={"type": "coding", "difficulty": "easy"}
        )

        assert response.json() == {"question": {"title": "Rotate Array", "difficulty": "easy"}, "saved": False}
        assert store.collection(collections.CODING_QUESTIONS).count_documents({}) == 0

    def test_ai_generate_save_needs_admin(self, client, auth_headers, fake_llm):
        response = client.post(
            "/api/mock/ai-generate",
            headers=auth_headers,
            json={"type": "coding", "saveToDatabase": True},
        )
        assert response.status_code == 403
        assert fake_llm.prompts == []

    def test_admin_save_slugs_question_id(self, client, admin_headers, fake_llm, store):
        fake_llm.queue('{"title": "Rotate Array", "difficulty": "easy"}')

        response = client.post(
            "/api/mock/ai-generate",
            headers=admin_headers,
            json={"type": "coding", "saveToDatabase": True},
        )

        assert response.json()["saved"] is True
        assert response.json()["question"]["id"] == "rotate-array"
        assert store.collection(collections.CODING_QUESTIONS).find_one({"_id": "rotate-array"})

    def test_invalid_type(self, client, auth_headers):
        response = client.post("/api/mock/ai-generate", headers=auth_headers, json={"type": "trivia"})
        assert response.status_code == 400

    def test_save_interview_result(self, client, auth_headers, store, user):
        response = client.post(
            "/api/mock/save-interview-result",
            headers=auth_headers,
            json={
                "questionId": "rotate-array",
                "questionData": {"title": "Rotate Array"},
                "userSolution": "def rotate(): ...",
                "feedback": {"overallScore": 45},
                "interviewType": "coding",
                "timeSpent": 600,
            },
        )

        assert response.status_code == 201
        doc = store.collection(collections.INTERVIEW_HISTORY).find_one({"_id": response.json()["historyId"]})
        assert doc["userId"] == user.uid
        assert doc["userSolutions"][0]["solution"] == "def rotate(): ..."
        assert doc["finalReport"] == {"overallScore": 45}
