"""
History Service - Learning history and the wrong-question book.

Learning-history records are append-only and always stamped with the
authenticated user's uid. The wrong-question book is a read-side merge of
learning records and the per-answer entries of finished interviews.
"""
from typing import Any, Dict, List, Optional

from interview_coach.core.exceptions import NotFoundError, PermissionDeniedError
from interview_coach.core.security import TokenUser
from interview_coach.core.validators import is_valid_document_id
from interview_coach.database import collections
from interview_coach.database.documents import new_id, timestamp_key, to_public_list, utcnow
from interview_coach.llm.parsing import MalformedResponse, parse_json_response, strip_code_fence
from interview_coach.llm.prompts import analysis_prompts
from interview_coach.services.base import BaseService, parse_client_time

FEEDBACK_MESSAGE_LIMIT = 10000
TRUNCATION_SUFFIX = "... (truncated)"


def clean_coding_feedback(feedback: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Keep only the complexity, aiAnalysis and testResults parts of a code review."""
    cleaned: Dict[str, Any] = {}
    if not isinstance(feedback, dict):
        return cleaned

    complexity = feedback.get("complexity")
    if isinstance(complexity, dict):
        cleaned["complexity"] = {
            "time": complexity.get("time") or "",
            "space": complexity.get("space") or "",
        }
    if isinstance(feedback.get("aiAnalysis"), str):
        cleaned["aiAnalysis"] = feedback["aiAnalysis"]
    test_results = feedback.get("testResults")
    if isinstance(test_results, dict):
        cleaned["testResults"] = {
            "passed": bool(test_results.get("passed")),
            "summary": test_results.get("summary") or "",
        }
    return cleaned


def truncate_feedback_message(feedback: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not isinstance(feedback, dict):
        return feedback
    message = feedback.get("message")
    if isinstance(message, str) and len(message) > FEEDBACK_MESSAGE_LIMIT:
        return {**feedback, "message": message[:FEEDBACK_MESSAGE_LIMIT] + TRUNCATION_SUFFIX}
    return feedback


def _solution_text(entry: Dict[str, Any]) -> str:
    return entry.get("solution") or entry.get("response") or entry.get("voiceInput") or ""


class HistoryService(BaseService):
    """
    Service for learning history records and wrong-question review.

    Example:
        >>> service = HistoryService(store, llm_client)
        >>> service.save_coding(user, "two-sum", user_code="...", feedback={...})
        '4f1c...'
        >>> service.list_for_user(user, user.uid)
    """

    def save_coding(
        self,
        user: TokenUser,
        question_id: str,
        user_code: Optional[str] = "",
        language: Optional[str] = None,
        feedback: Optional[Dict[str, Any]] = None,
        completed_at: Optional[str] = None
    ) -> str:
        """
        Record a solved coding question.

        Questions not found in the bank (e.g. AI-generated mock questions)
        are recorded with a fallback structure titled by their id.
        """
        question = None
        if is_valid_document_id(question_id):
            question = self.collection(collections.CODING_QUESTIONS).find_one({"_id": question_id})
        if question is None:
            self.logger.info(f"Using fallback question data for '{question_id}'")
            question = {}

        question_data = {
            "title": question.get("title") or question_id,
            "description": question.get("description") or ("" if question else "Mock interview question"),
            "difficulty": question.get("difficulty") or "medium",
            "topic": question.get("topic") or "programming",
            "algorithms": question.get("algorithms") if isinstance(question.get("algorithms"), list) else [],
            "dataStructures": (
                question.get("dataStructures") if isinstance(question.get("dataStructures"), list) else []
            ),
        }

        return self._insert(user, {
            "questionId": question_id,
            "questionData": question_data,
            "userCode": user_code or "",
            "language": language or "python",
            "feedback": clean_coding_feedback(feedback),
            "interviewType": "coding",
        }, completed_at)

    def save_behavioral(
        self,
        user: TokenUser,
        question_id: str,
        user_answer: Optional[str] = "",
        feedback: Optional[Dict[str, Any]] = None,
        completed_at: Optional[str] = None,
        inline_question: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Record an answered behavioral question.

        Args:
            inline_question: Question fields sent by the client, used when
                the id is not in the bank
        """
        question = self.collection(collections.BEHAVIORAL_QUESTIONS).find_one({"_id": question_id})
        if question is None:
            question = inline_question or {}

        question_data = {
            "title": question.get("title") or "",
            "prompt": question.get("prompt") or "",
            "category": question.get("category") or "",
            "difficulty": question.get("difficulty") or "",
            "sampleAnswer": question.get("sampleAnswer") or "",
        }

        return self._insert(user, {
            "questionId": question_id,
            "questionData": question_data,
            "userAnswer": user_answer or "",
            "feedback": truncate_feedback_message(feedback),
            "interviewType": "behavioral",
        }, completed_at)

    def save_system_design(self, user: TokenUser, question_id: str, completed_at: Optional[str] = None) -> str:
        question = self._require_question(collections.SYSTEM_DESIGN_QUESTIONS, question_id)
        return self._insert(user, {
            "questionId": question_id,
            "questionData": {
                "title": question.get("title"),
                "description": question.get("description"),
                "category": question.get("category"),
                "difficulty": question.get("difficulty"),
                "answer": question.get("detailedAnswer") or question.get("answer"),
                "designSteps": question.get("designSteps") or question.get("design_steps") or [],
            },
            "interviewType": "system-design",
        }, completed_at)

    def save_llm(self, user: TokenUser, question_id: str, completed_at: Optional[str] = None) -> str:
        question = self._require_question(collections.LLM_QUESTIONS, question_id)
        return self._insert(user, {
            "questionId": question_id,
            "questionData": {
                "title": question.get("title"),
                "category": question.get("category"),
                "difficulty": question.get("difficulty"),
            },
            "interviewType": "llm",
        }, completed_at)

    def list_for_user(self, user: TokenUser, user_id: str) -> List[Dict[str, Any]]:
        """
        A user's learning history, newest first.

        Raises:
            PermissionDeniedError: If user_id is not the caller's uid
        """
        if user_id != user.uid:
            raise PermissionDeniedError("You can only view your own learning history")
        docs = list(self.collection(collections.LEARNING_HISTORY).find({"userId": user_id}))
        docs.sort(key=lambda d: timestamp_key(d.get("completedAt")), reverse=True)
        return to_public_list(docs)

    def delete(self, user: TokenUser, history_id: str) -> None:
        self.get_owned(collections.LEARNING_HISTORY, history_id, user, "History record")
        self.collection(collections.LEARNING_HISTORY).delete_one({"_id": history_id})
        self.logger.info(f"Deleted learning history {history_id} for user {user.uid}")

    def wrong_questions(self, user: TokenUser) -> List[Dict[str, Any]]:
        """Learning records and interview answers merged, newest first."""
        items: List[Dict[str, Any]] = []

        for doc in self.collection(collections.LEARNING_HISTORY).find({"userId": user.uid}):
            items.append({
                "id": doc["_id"],
                "type": "learning",
                "interviewType": doc.get("interviewType") or "unknown",
                "questionData": doc.get("questionData") or {},
                "userAnswer": doc.get("userAnswer") or doc.get("userCode") or "",
                "feedback": doc.get("feedback") or {},
                "completedAt": doc.get("completedAt"),
                "savedAt": doc.get("savedAt"),
            })

        for doc in self.collection(collections.INTERVIEW_HISTORY).find({"userId": user.uid}):
            for index, entry in enumerate(doc.get("userSolutions") or []):
                items.append({
                    "id": f"{doc['_id']}_{index}",
                    "type": "interview",
                    "interviewType": doc.get("interviewType") or "unknown",
                    "questionData": doc.get("questionData") or {},
                    "userAnswer": _solution_text(entry),
                    "feedback": entry.get("feedback") or {},
                    "completedAt": entry.get("timestamp") or doc.get("endTime"),
                    "savedAt": doc.get("endTime"),
                })

        items.sort(key=lambda item: timestamp_key(item.get("completedAt")), reverse=True)
        self.logger.debug(f"Found {len(items)} wrong-question entries for user {user.uid}")
        return items

    def wrong_question_feedback(self, user: TokenUser, history_id: str) -> Dict[str, Any]:
        """
        Ask the AI to explain a past question and plan a redo.

        A reply that is not JSON is returned as the explanation with an
        empty plan.
        """
        record = self.get_owned(collections.LEARNING_HISTORY, history_id, user, "History record")
        reply = self.llm_client.generate(analysis_prompts.get_wrong_question_feedback_prompt(record))
        try:
            data = parse_json_response(reply)
        except MalformedResponse:
            self.logger.info(f"Non-JSON wrong-question feedback for {history_id}; returning raw text")
            return {"success": True, "explanation": strip_code_fence(reply), "redoPlan": []}

        redo_plan = data.get("redoPlan")
        return {
            "success": True,
            "explanation": str(data.get("explanation") or ""),
            "redoPlan": redo_plan if isinstance(redo_plan, list) else [],
        }

    def _require_question(self, collection_name: str, question_id: str) -> Dict[str, Any]:
        question = self.collection(collection_name).find_one({"_id": question_id})
        if question is None:
            raise NotFoundError("Question not found.", resource_id=question_id)
        return question

    def _insert(self, user: TokenUser, record: Dict[str, Any], completed_at: Optional[str]) -> str:
        history_id = new_id()
        self.collection(collections.LEARNING_HISTORY).insert_one({
            "_id": history_id,
            "userId": user.uid,
            **record,
            "completedAt": parse_client_time(completed_at) or utcnow(),
            "savedAt": utcnow(),
        })
        self.logger.info(f"Saved {record['interviewType']} learning history {history_id} for user {user.uid}")
        return history_id
