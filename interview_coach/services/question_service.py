"""
Question Service - Question banks, AI generation and admin saves.

Four banks share the same access pattern (list, filter, get by id, save
under a natural key); only coding questions carry their own key, the
others are keyed by the slug of their title.
"""
import random
from typing import Any, Dict, List, Optional

from interview_coach.core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from interview_coach.core.security import TokenUser
from interview_coach.core.validators import sanitize_prompt_text, slugify, split_filter
from interview_coach.database import collections
from interview_coach.database.documents import to_public, to_public_list, utcnow
from interview_coach.llm.prompts import question_prompts
from interview_coach.services.base import BaseService

BANK_LABELS = {
    "coding": "Coding question",
    "system-design": "System design question",
    "behavioral": "Behavioral question",
    "llm": "LLM question",
}


def bank_collection(kind: str) -> str:
    try:
        return collections.QUESTION_BANKS[kind]
    except KeyError:
        raise ValidationError(f"Unknown question type '{kind}'", field="type")


def _matches_any(values: Optional[List[str]], wanted: List[str]) -> bool:
    """Case-insensitive substring match of any wanted term against any stored value."""
    if not values:
        return False
    lowered = [str(v).lower() for v in values]
    return any(term.lower() in value for term in wanted for value in lowered)


def _distinct(values) -> List[str]:
    seen: List[str] = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


class QuestionService(BaseService):
    """
    Service for reading and writing the question banks.

    Example:
        >>> service = QuestionService(store, llm_client)
        >>> service.list_questions("coding", difficulty="Easy")
        [{'id': 'two-sum', 'title': 'Two Sum', ...}]
    """

    # ------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------

    def list_questions(
        self,
        kind: str,
        difficulty: Optional[str] = None,
        category: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """List a bank, optionally filtered by exact difficulty and category."""
        query: Dict[str, Any] = {}
        if difficulty and difficulty != "all":
            query["difficulty"] = difficulty
        if category:
            query["category"] = category
        return to_public_list(self.collection(bank_collection(kind)).find(query))

    def get_question(self, kind: str, question_id: str) -> Dict[str, Any]:
        doc = self.collection(bank_collection(kind)).find_one({"_id": question_id})
        if doc is None:
            raise NotFoundError(f"{BANK_LABELS[kind]} not found", resource_id=question_id)
        return to_public(doc)

    def filtered_coding(
        self,
        user_id: Optional[str] = None,
        difficulty: Optional[str] = None,
        algorithms: Optional[str] = None,
        data_structures: Optional[str] = None,
        companies: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Coding questions filtered by tags, minus those the user already did.

        Tag filters are comma-separated lists; a question matches a filter
        when any of its tags contains any listed term, ignoring case.
        """
        questions = self.list_questions("coding", difficulty=difficulty)

        for field_name, raw in (
            ("algorithms", algorithms),
            ("dataStructures", data_structures),
            ("companies", companies),
        ):
            wanted = split_filter(raw)
            if wanted:
                questions = [q for q in questions if _matches_any(q.get(field_name), wanted)]

        if user_id:
            completed = {
                doc.get("questionId")
                for doc in self.collection(collections.LEARNING_HISTORY).find(
                    {"userId": user_id}, {"questionId": 1}
                )
            }
            questions = [q for q in questions if q["id"] not in completed]

        return {
            "questions": questions,
            "total": len(questions),
            "filters": {
                "difficulty": difficulty,
                "algorithms": algorithms,
                "dataStructures": data_structures,
                "companies": companies,
            },
        }

    def filter_options(self) -> Dict[str, List[str]]:
        docs = list(self.collection(collections.CODING_QUESTIONS).find())
        return {
            "difficulties": _distinct(d.get("difficulty") for d in docs),
            "algorithms": _distinct(a for d in docs for a in d.get("algorithms") or []),
            "dataStructures": _distinct(s for d in docs for s in d.get("dataStructures") or []),
            "companies": _distinct(c for d in docs for c in d.get("companies") or []),
        }

    def categories(self, kind: str) -> Dict[str, List[str]]:
        docs = list(self.collection(bank_collection(kind)).find({}, {"category": 1, "difficulty": 1}))
        return {
            "categories": _distinct(d.get("category") for d in docs),
            "difficulties": _distinct(d.get("difficulty") for d in docs),
        }

    def random_question(
        self,
        kind: str,
        difficulty: Optional[str] = None,
        category: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """Pick one matching question at random, or None if nothing matches."""
        questions = self.list_questions(kind, difficulty=difficulty, category=category)
        if not questions:
            return None
        return random.choice(questions)

    # ------------------------------------------------------------
    # AI generation
    # ------------------------------------------------------------

    def generate_coding(self, title: str, description: str) -> Dict[str, Any]:
        prompt = question_prompts.get_coding_question_prompt(
            sanitize_prompt_text(title, 500), sanitize_prompt_text(description)
        )
        return self.ask_json(prompt, "generate question")

    def generate_system_design(self, title: str, description: str) -> Dict[str, Any]:
        prompt = question_prompts.get_system_design_question_prompt(
            sanitize_prompt_text(title, 500), sanitize_prompt_text(description)
        )
        return self.ask_json(prompt, "generate question")

    def generate_llm(
        self,
        title: str,
        description: str,
        category: Optional[str] = None,
        difficulty: Optional[str] = None
    ) -> Dict[str, Any]:
        prompt = question_prompts.get_llm_question_prompt(
            sanitize_prompt_text(title, 500), sanitize_prompt_text(description), category, difficulty
        )
        return self.ask_json(prompt, "generate LLM question")

    @staticmethod
    def behavioral_template(skill: str) -> Dict[str, Any]:
        """Fixed question structure built around one skill; no AI involved."""
        skill = skill.strip()
        return {
            "title": f"Tell me about a time you demonstrated {skill}",
            "prompt": (
                f"Describe a situation where you had to use your {skill} skills. "
                "What was the context, what did you do, and what was the result?"
            ),
            "category": "Behavioral",
            "tags": [skill.lower()],
        }

    def generate_random(self, kind: str, difficulty: Optional[str] = None) -> Dict[str, Any]:
        """Ask the AI for a new question of the given kind (mock interviews)."""
        difficulty = difficulty or "medium"
        if kind == "coding":
            prompt = question_prompts.get_random_coding_question_prompt(difficulty)
        elif kind == "system-design":
            prompt = question_prompts.get_random_system_design_question_prompt(difficulty)
        elif kind == "behavioral":
            prompt = question_prompts.get_random_behavioral_question_prompt(difficulty)
        else:
            raise ValidationError("Invalid type. Use coding, system-design or behavioral.", field="type")
        return self.ask_json(prompt, "generate question")

    def generate_for_mock(
        self,
        user: TokenUser,
        kind: str,
        difficulty: Optional[str],
        save_to_database: bool
    ) -> Dict[str, Any]:
        """
        Generate a question and optionally add it to its bank.

        Raises:
            PermissionDeniedError: If saving is requested by a non-admin
        """
        if kind not in ("coding", "system-design", "behavioral"):
            raise ValidationError("Invalid type. Use coding, system-design or behavioral.", field="type")
        if save_to_database and not user.is_admin:
            raise PermissionDeniedError("Only admins can save generated questions")

        question = self.generate_random(kind, difficulty)
        if save_to_database:
            if kind == "coding" and not question.get("questionId"):
                question["questionId"] = slugify(str(question.get("title") or ""))
            question_id = self.save_question(kind, question)
            question = {"id": question_id, **question}
        return {"question": question, "saved": save_to_database}

    # ------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------

    def save_question(self, kind: str, question_data: Dict[str, Any]) -> str:
        """
        Store a question under its natural key, replacing any previous version.

        Coding questions are keyed by questionId; every other bank by the
        slug of the title. LLM questions also get createdAt/updatedAt.

        Returns:
            The document key

        Raises:
            ValidationError: If the key field is missing or slugs to nothing
        """
        data = {k: v for k, v in question_data.items() if k not in ("_id", "id")}

        if kind == "coding":
            doc_id = str(data.get("questionId") or "").strip()
            if not doc_id:
                raise ValidationError("Valid question data is required.", field="questionId")
        else:
            title = str(data.get("title") or "").strip()
            if not title:
                raise ValidationError("Valid question data is required.", field="title")
            doc_id = slugify(title)
            if not doc_id:
                raise ValidationError("A valid ID could not be generated from the title.", field="title")

        if kind == "llm":
            now = utcnow()
            data["createdAt"] = now
            data["updatedAt"] = now

        self.collection(bank_collection(kind)).replace_one({"_id": doc_id}, data, upsert=True)
        self.logger.info(f"Saved {kind} question '{doc_id}'")
        return doc_id
