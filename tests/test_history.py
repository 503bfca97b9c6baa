from unittest.mock import patch

from interview_coach.database import collections
from interview_coach.services.history_service import FEEDBACK_MESSAGE_LIMIT, clean_coding_feedback

REVIEW = {
    "testResults": {"passed": True, "summary": "10/10 test cases passed", "raw": [1, 2]},
    "complexity": {"time": "O(n)", "space": "O(1)", "notes": "ignored"},
    "aiAnalysis": "Good use of a hash map.",
    "extra": "dropped",
}


def save_coding(client, headers, question_id="two-sum", **extra):
    response = client.post(
        "/api/code/learning-history",
        headers=headers,
        json={"questionId": question_id, "userCode": "return []", "feedback": REVIEW, **extra},
    )
    assert response.status_code == 201
    return response.json()["historyId"]


class TestCodeRoutes:
    def test_execute_pass_and_fail(self, client):
        with patch("interview_coach.services.analysis_service.random.random", return_value=0.1):
            passed = client.post("/api/code/execute", json={"userCode": "print(1)", "language": "python"})
        with patch("interview_coach.services.analysis_service.random.random", return_value=0.9):
            failed = client.post("/api/code/execute", json={"userCode": "print(1)"})

        assert passed.json() == {"success": True, "message": "All test cases passed!"}
        assert failed.json()["success"] is False

    def test_submit_review(self, client, fake_llm):
        fake_llm.queue('{"complexity": {"time": "O(n log n)", "space": "O(n)"}, "aiAnalysis": "Sort first."}')

        with patch("interview_coach.services.analysis_service.random.random", return_value=0.95):
            response = client.post(
                "/api/code/submit",
                json={"question": {"title": "Merge Intervals"}, "userCode": "...", "language": "python"},
            )

        body = response.json()
        assert response.status_code == 200
        assert body["testResults"] == {"passed": False, "summary": "7/10 test cases passed"}
        assert body["complexity"]["time"] == "O(n log n)"
        assert body["aiAnalysis"] == "Sort first."


class TestLearningHistory:
    def test_save_coding_uses_bank_question(self, client, auth_headers, seeded_coding, store, user):
        history_id = save_coding(client, auth_headers)

        record = store.collection(collections.LEARNING_HISTORY).find_one({"_id": history_id})
        assert record["userId"] == user.uid
        assert record["questionData"]["title"] == "Two Sum"
        assert record["language"] == "python"
        assert record["feedback"] == {
            "testResults": {"passed": True, "summary": "10/10 test cases passed"},
            "complexity": {"time": "O(n)", "space": "O(1)"},
            "aiAnalysis": "Good use of a hash map.",
        }

    def test_save_coding_fallback_for_unknown_question(self, client, auth_headers, store):
        history_id = save_coding(client, auth_headers, question_id="ai-generated-42")

        record = store.collection(collections.LEARNING_HISTORY).find_one({"_id": history_id})
        assert record["questionData"]["title"] == "ai-generated-42"
        assert record["questionData"]["description"] == "Mock interview question"

    def test_user_id_in_body_is_ignored(self, client, auth_headers, store, user):
        history_id = save_coding(client, auth_headers, userId="someone-else")

        assert store.collection(collections.LEARNING_HISTORY).find_one({"_id": history_id})["userId"] == user.uid

    def test_list_newest_first(self, client, auth_headers, user):
        save_coding(client, auth_headers, completedAt="2025-01-01T10:00:00Z")
        save_coding(client, auth_headers, question_id="lru-cache", completedAt="2025-03-01T10:00:00Z")

        history = client.get(f"/api/code/learning-history/{user.uid}", headers=auth_headers).json()["history"]

        assert [h["questionId"] for h in history] == ["lru-cache", "two-sum"]

    def test_list_other_user_forbidden(self, client, auth_headers):
        response = client.get("/api/code/learning-history/not-me", headers=auth_headers)
        assert response.status_code == 403

    def test_delete_checks_ownership(self, client, auth_headers, other_headers, store):
        history_id = save_coding(client, auth_headers)

        denied = client.delete(f"/api/code/learning-history/{history_id}", headers=other_headers)
        assert denied.status_code == 403
        assert store.collection(collections.LEARNING_HISTORY).count_documents({"_id": history_id}) == 1

        ok = client.delete(f"/api/code/learning-history/{history_id}", headers=auth_headers)
        assert ok.status_code == 200
        assert store.collection(collections.LEARNING_HISTORY).count_documents({"_id": history_id}) == 0

        missing = client.delete(f"/api/code/learning-history/{history_id}", headers=auth_headers)
        assert missing.status_code == 404

    def test_behavioral_inline_question_and_truncation(self, client, auth_headers, store):
        long_message = "x" * (FEEDBACK_MESSAGE_LIMIT + 50)

        response = client.post(
            "/api/behavioral/learning-history",
            headers=auth_headers,
            json={
                "questionId": "generated-1",
                "userAnswer": "I led the migration.",
                "title": "Leading change",
                "category": "Leadership",
                "feedback": {"success": True, "message": long_message},
            },
        )

        assert response.status_code == 201
        record = store.collection(collections.LEARNING_HISTORY).find_one({"_id": response.json()["historyId"]})
        assert record["questionData"]["title"] == "Leading change"
        assert record["questionData"]["category"] == "Leadership"
        assert record["feedback"]["message"].endswith("... (truncated)")
        assert len(record["feedback"]["message"]) == FEEDBACK_MESSAGE_LIMIT + len("... (truncated)")

    def test_system_design_history_needs_bank_question(self, client, auth_headers, store):
        missing = client.post(
            "/api/system-design/learning-history", headers=auth_headers, json={"questionId": "nope"}
        )
        assert missing.status_code == 404
        assert missing.json()["message"] == "Question not found."

        store.collection(collections.SYSTEM_DESIGN_QUESTIONS).insert_one(
            {"_id": "cdn", "title": "Design a CDN", "detailedAnswer": "Edge caches...", "designSteps": ["a"]}
        )
        saved = client.post("/api/system-design/learning-history", headers=auth_headers, json={"questionId": "cdn"})
        assert saved.status_code == 201
        record = store.collection(collections.LEARNING_HISTORY).find_one({"_id": saved.json()["historyId"]})
        assert record["questionData"]["answer"] == "Edge caches..."
        assert record["interviewType"] == "system-design"


class TestWrongQuestions:
    def test_merges_learning_and_interview_entries(self, client, auth_headers, store, user):
        save_coding(client, auth_headers, completedAt="2025-01-01T00:00:00Z")
        store.collection(collections.INTERVIEW_HISTORY).insert_one({
            "_id": "iv1",
            "userId": user.uid,
            "interviewType": "behavioral",
            "questionData": {"title": "Conflict"},
            "userSolutions": [
                {"response": "First answer", "feedback": {"score": 40}, "timestamp": "2025-02-01T00:00:00Z"},
                {"response": "Second answer", "feedback": {"score": 55}, "timestamp": "2025-02-02T00:00:00Z"},
            ],
            "endTime": "2025-02-02T00:00:00Z",
        })

        response = client.get("/api/code/wrong-questions", headers=auth_headers)

        items = response.json()["wrongQuestions"]
        assert [i["id"] for i in items][:2] == ["iv1_1", "iv1_0"]
        assert items[0]["userAnswer"] == "Second answer"
        assert items[-1]["type"] == "learning"
        assert response.json()["message"] == "Wrong questions retrieved successfully"

    def test_ai_feedback_json(self, client, auth_headers, fake_llm):
        history_id = save_coding(client, auth_headers)
        fake_llm.queue('{"explanation": "Use a hash map.", "redoPlan": ["Review hashing", "Retry"]}')

        response = client.post(f"/api/code/wrong-questions/{history_id}/ai-feedback", headers=auth_headers)

        assert response.json() == {
            "success": True,
            "explanation": "Use a hash map.",
            "redoPlan": ["Review hashing", "Retry"],
        }

    def test_ai_feedback_plain_text_fallback(self, client, auth_headers, fake_llm):
        history_id = save_coding(client, auth_headers)
        fake_llm.queue("Just practice more.")

        response = client.post(f"/api/code/wrong-questions/{history_id}/ai-feedback", headers=auth_headers)

        assert response.json()["explanation"] == "Just practice more."
        assert response.json()["redoPlan"] == []

    def test_ai_feedback_foreign_record(self, client, auth_headers, other_headers):
        history_id = save_coding(client, auth_headers)
        response = client.post(f"/api/code/wrong-questions/{history_id}/ai-feedback", headers=other_headers)
        assert response.status_code == 403


class TestCleanCodingFeedback:
    def test_non_dict(self):
        assert clean_coding_feedback(None) == {}
        assert clean_coding_feedback("text") == {}
