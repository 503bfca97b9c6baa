"""
Interview Service - Practice interview sessions.

This service runs the session lifecycle shared by the three interview kinds:
1. start  - create an active session holding the question material
2. submit - grade one answer with the AI and append it to the session
3. end    - produce the final report, close the session, write history
4. get    - read a session back

Appends use $push/$inc so concurrent submissions to one session are both
kept; nothing here deduplicates. Every write is conditional on the session
still being active, and end also requires the submission count it graded,
so once a session is completed nothing else lands in it.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from interview_coach.core.exceptions import AIResponseError, NotFoundError, ValidationError
from interview_coach.core.security import TokenUser
from interview_coach.core.validators import sanitize_prompt_text
from interview_coach.database import collections
from interview_coach.database.documents import new_id, timestamp_key, to_public, to_public_list, utcnow
from interview_coach.llm.prompts import interview_prompts, question_prompts
from interview_coach.services.base import BaseService, parse_client_time
from interview_coach.services.question_service import QuestionService

STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"
END_ATTEMPTS = 3


@dataclass(frozen=True)
class SessionKind:
    """Where a kind of session is stored and which fields carry its data."""
    name: str
    collection: str
    entries_field: str
    material_field: str


CODING = SessionKind("coding", collections.CODING_INTERVIEWS, "solutions", "questionData")
BEHAVIORAL = SessionKind("behavioral", collections.BEHAVIORAL_INTERVIEWS, "responses", "interviewData")
SYSTEM_DESIGN = SessionKind(
    "system-design", collections.SYSTEM_DESIGN_INTERVIEWS, "submissions", "questionData"
)

SESSION_KINDS = {kind.name: kind for kind in (CODING, BEHAVIORAL, SYSTEM_DESIGN)}


def empty_report() -> Dict[str, Any]:
    """Final report for a session that ended without any submission."""
    return {
        "overallScore": 0,
        "categoryScores": {},
        "strengths": [],
        "areasForImprovement": [],
        "hiringRecommendation": "no",
        "summary": "The interview ended before any answer was submitted.",
    }


def _completed_error() -> ValidationError:
    return ValidationError("This interview session has already been completed.", field="sessionId")


class InterviewService(BaseService):
    """
    Service for coding, behavioral and system design interview sessions.

    Example:
        >>> service = InterviewService(store, llm_client)
        >>> started = service.start_coding(user, difficulty="Easy")
        >>> service.submit_coding(user, started["sessionId"], "def f(): ...")
        {'score': 80, ...}
        >>> service.end(user, "coding", started["sessionId"])["finalReport"]
    """

    # ------------------------------------------------------------
    # Start
    # ------------------------------------------------------------

    def start_coding(
        self,
        user: TokenUser,
        difficulty: Optional[str] = "medium",
        language: Optional[str] = "python",
        topic: Optional[str] = None
    ) -> Dict[str, Any]:
        """Start a coding session on a bank question, or a generated one if none match."""
        questions = QuestionService(self.store, self.llm_client)
        question = questions.random_question("coding", difficulty=difficulty)
        if question is None:
            self.logger.info(f"No bank question for difficulty={difficulty}; generating one")
            prompt = question_prompts.get_random_coding_question_prompt(
                difficulty or "medium", topic, language
            )
            question = self.ask_json(prompt, "generate question")

        settings = {"difficulty": difficulty, "language": language, "topic": topic}
        session_id = self._create(CODING, user, question, settings)
        return {"sessionId": session_id, "questionData": question}

    def start_behavioral(self, user: TokenUser, role: str, level: str, company: str) -> Dict[str, Any]:
        """Start a behavioral session with an AI-prepared question set."""
        prompt = interview_prompts.get_behavioral_question_set_prompt(
            sanitize_prompt_text(role, 200), sanitize_prompt_text(level, 100), sanitize_prompt_text(company, 200)
        )
        generated = self.ask_json(prompt, "generate interview questions")

        raw_questions = generated.get("questions")
        if not isinstance(raw_questions, list) or not raw_questions:
            raise AIResponseError("Failed to generate interview questions: no questions in response")

        questions: List[Dict[str, Any]] = []
        for index, item in enumerate(raw_questions, start=1):
            if isinstance(item, str):
                item = {"question": item}
            elif not isinstance(item, dict):
                continue
            questions.append({**item, "id": str(item.get("id") or f"q{index}")})

        interview_data = {"role": role, "level": level, "company": company, "questions": questions}
        session_id = self._create(BEHAVIORAL, user, interview_data, {"role": role, "level": level})
        return {"sessionId": session_id, "interviewData": interview_data}

    def start_system_design(
        self,
        user: TokenUser,
        topic: Optional[str] = None,
        difficulty: Optional[str] = "medium",
        language: Optional[str] = "en"
    ) -> Dict[str, Any]:
        """Start a system design session; topic narrows the bank by category."""
        questions = QuestionService(self.store, self.llm_client)
        question = questions.random_question("system-design", difficulty=difficulty, category=topic)
        if question is None:
            self.logger.info(f"No bank question for difficulty={difficulty}, topic={topic}; generating one")
            prompt = question_prompts.get_random_system_design_question_prompt(difficulty or "medium", topic)
            question = self.ask_json(prompt, "generate question")

        settings = {"difficulty": difficulty, "language": language, "topic": topic}
        session_id = self._create(SYSTEM_DESIGN, user, question, settings)
        return {"sessionId": session_id, "questionData": question}

    # ------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------

    def submit_coding(
        self,
        user: TokenUser,
        session_id: str,
        solution: str,
        approach: Optional[str] = "",
        time_spent: int = 0
    ) -> Dict[str, Any]:
        session = self._load_active(CODING, session_id, user)
        prompt = interview_prompts.get_coding_submission_prompt(
            session.get("questionData") or {},
            sanitize_prompt_text(solution),
            sanitize_prompt_text(approach, 5000),
            time_spent,
        )
        feedback = self.ask_json(prompt, "analyze solution")
        self._append(CODING, session_id, {
            "solution": solution,
            "approach": approach or "",
            "timeSpent": time_spent,
            "feedback": feedback,
        })
        return feedback

    def submit_behavioral(
        self,
        user: TokenUser,
        session_id: str,
        question_id: str,
        response: str,
        response_type: str = "text"
    ) -> Dict[str, Any]:
        session = self._load_active(BEHAVIORAL, session_id, user)
        interview_data = session.get("interviewData") or {}
        question = next(
            (q for q in interview_data.get("questions") or [] if q.get("id") == question_id),
            None,
        )
        if question is None:
            raise NotFoundError("Question not found in this interview", resource_id=question_id)

        prompt = interview_prompts.get_behavioral_submission_prompt(
            interview_data, question, sanitize_prompt_text(response)
        )
        feedback = self.ask_json(prompt, "analyze response")
        self._append(BEHAVIORAL, session_id, {
            "questionId": question_id,
            "question": question.get("question") or question.get("title") or "",
            "response": response,
            "responseType": response_type,
            "feedback": feedback,
        })
        return feedback

    def submit_system_design(
        self,
        user: TokenUser,
        session_id: str,
        voice_input: Optional[str] = None,
        whiteboard_data: Optional[List[Any]] = None,
        time_spent: int = 0
    ) -> Dict[str, Any]:
        whiteboard_data = whiteboard_data or []
        if not (voice_input or "").strip() and not whiteboard_data:
            raise ValidationError("Either voiceInput or whiteboardData is required.")

        session = self._load_active(SYSTEM_DESIGN, session_id, user)
        prompt = interview_prompts.get_system_design_submission_prompt(
            session.get("questionData") or {},
            sanitize_prompt_text(voice_input),
            whiteboard_data,
            time_spent,
        )
        feedback = self.ask_json(prompt, "analyze design")
        self._append(SYSTEM_DESIGN, session_id, {
            "voiceInput": voice_input or "",
            "whiteboardData": whiteboard_data,
            "timeSpent": time_spent,
            "feedback": feedback,
        })
        return feedback

    # ------------------------------------------------------------
    # End / read
    # ------------------------------------------------------------

    def end(self, user: TokenUser, kind_name: str, session_id: str) -> Dict[str, Any]:
        """
        Close a session and record it in the user's interview history.

        Sessions without submissions get an empty report and no AI call.
        A submission that lands while the report is being written makes
        the report stale, so the session is reloaded and graded again.

        Raises:
            NotFoundError: If the session does not exist
            PermissionDeniedError: If it belongs to another user
            ValidationError: If it was already completed, or kept
                receiving submissions while being ended
        """
        kind = SESSION_KINDS[kind_name]
        for _ in range(END_ATTEMPTS):
            session = self._load_active(kind, session_id, user)
            entries = session.get(kind.entries_field) or []
            material = session.get(kind.material_field) or {}

            if entries:
                final_report = self.ask_json(
                    self._final_report_prompt(kind, material, entries), "generate final report"
                )
            else:
                final_report = empty_report()

            end_time = utcnow()
            result = self.collection(kind.collection).update_one(
                {
                    "_id": session_id,
                    "status": STATUS_ACTIVE,
                    "submissionCount": session.get("submissionCount", 0),
                },
                {"$set": {"status": STATUS_COMPLETED, "endTime": end_time, "finalReport": final_report}},
            )
            if result.matched_count:
                break
            self.logger.info(f"{kind.name} session {session_id} changed while ending; reloading")
        else:
            raise ValidationError(
                "This interview session is still receiving submissions; try ending it again.",
                field="sessionId",
            )

        self.collection(collections.INTERVIEW_HISTORY).insert_one({
            "_id": new_id(),
            "userId": user.uid,
            "sessionId": session_id,
            "interviewType": kind.name,
            "questionData": material,
            "userSolutions": entries,
            "finalReport": final_report,
            "startTime": session.get("startTime"),
            "endTime": end_time,
        })

        self.logger.info(f"Ended {kind.name} session {session_id} with {len(entries)} submissions")
        return {"sessionId": session_id, "finalReport": final_report}

    def get(self, user: TokenUser, kind_name: str, session_id: str) -> Dict[str, Any]:
        kind = SESSION_KINDS[kind_name]
        return to_public(self.get_owned(kind.collection, session_id, user, "Interview session"))

    def interview_history(self, user: TokenUser) -> List[Dict[str, Any]]:
        """The user's finished interviews, newest first."""
        docs = list(self.collection(collections.INTERVIEW_HISTORY).find({"userId": user.uid}))
        docs.sort(key=lambda d: timestamp_key(d.get("endTime")), reverse=True)
        return to_public_list(docs)

    def save_mock_result(
        self,
        user: TokenUser,
        question_id: str,
        question_data: Dict[str, Any],
        user_solution: str,
        feedback: Dict[str, Any],
        interview_type: str,
        time_spent: int = 0,
        completed_at: Optional[str] = None
    ) -> str:
        """Record a finished mock interview run outside a server-side session."""
        completed = parse_client_time(completed_at) or utcnow()
        history_id = new_id()
        self.collection(collections.INTERVIEW_HISTORY).insert_one({
            "_id": history_id,
            "userId": user.uid,
            "questionId": question_id,
            "interviewType": interview_type,
            "questionData": question_data,
            "userSolutions": [{
                "solution": user_solution or "",
                "feedback": feedback,
                "timestamp": completed,
            }],
            "finalReport": feedback,
            "timeSpent": time_spent,
            "endTime": completed,
            "savedAt": utcnow(),
        })
        self.logger.info(f"Saved mock {interview_type} result {history_id} for user {user.uid}")
        return history_id

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------

    def _create(
        self,
        kind: SessionKind,
        user: TokenUser,
        material: Dict[str, Any],
        settings: Dict[str, Any]
    ) -> str:
        session_id = new_id()
        self.collection(kind.collection).insert_one({
            "_id": session_id,
            "userId": user.uid,
            "status": STATUS_ACTIVE,
            kind.material_field: material,
            "settings": settings,
            kind.entries_field: [],
            "submissionCount": 0,
            "startTime": utcnow(),
            "endTime": None,
            "finalReport": None,
        })
        self.logger.info(f"Started {kind.name} session {session_id} for user {user.uid}")
        return session_id

    def _load_active(self, kind: SessionKind, session_id: str, user: TokenUser) -> Dict[str, Any]:
        session = self.get_owned(kind.collection, session_id, user, "Interview session")
        if session.get("status") == STATUS_COMPLETED:
            raise _completed_error()
        return session

    def _append(self, kind: SessionKind, session_id: str, entry: Dict[str, Any]) -> None:
        """Push one graded entry; the session may have been ended while grading ran."""
        entry["timestamp"] = utcnow()
        result = self.collection(kind.collection).update_one(
            {"_id": session_id, "status": STATUS_ACTIVE},
            {"$push": {kind.entries_field: entry}, "$inc": {"submissionCount": 1}},
        )
        if not result.matched_count:
            self.logger.info(f"Dropped submission to {kind.name} session {session_id}: completed meanwhile")
            raise _completed_error()

    @staticmethod
    def _final_report_prompt(kind: SessionKind, material: Dict[str, Any], entries: List[Dict[str, Any]]) -> str:
        if kind is CODING:
            return interview_prompts.get_coding_final_report_prompt(material, entries)
        if kind is BEHAVIORAL:
            return interview_prompts.get_behavioral_final_report_prompt(material, entries)
        return interview_prompts.get_system_design_final_report_prompt(material, entries)
