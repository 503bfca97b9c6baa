"""
Coach Service - Preparation profile, daily plans, goal chat and ability map.

The ability map is computed from the user's learning history: a record
with a numeric score counts as correct at 60 or above and wrong below.
Records carrying no score at all are left out of the counts.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from interview_coach.core.security import TokenUser
from interview_coach.core.validators import sanitize_prompt_text, slugify
from interview_coach.database import collections
from interview_coach.database.documents import timestamp_key, utcnow
from interview_coach.llm.prompts import coach_prompts
from interview_coach.services.base import BaseService

PASSING_SCORE = 60
RECENT_HISTORY_LIMIT = 10

TYPE_LABELS = {
    "coding": "Coding",
    "system-design": "System Design",
    "behavioral": "Behavioral",
    "llm": "LLM",
}


def record_score(feedback: Any) -> Optional[float]:
    """
    Numeric score of a feedback payload, if it has one.

    Looks at score/overallScore first; a code review without a score
    falls back to its test outcome (100 passed, 0 failed).
    """
    if not isinstance(feedback, dict):
        return None
    for key in ("score", "overallScore"):
        value = feedback.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    test_results = feedback.get("testResults")
    if isinstance(test_results, dict) and "passed" in test_results:
        return 100.0 if test_results.get("passed") else 0.0
    return None


def knowledge_point(question_data: Dict[str, Any]) -> str:
    """
    Label a record is counted under: category, else first algorithm, else topic.

    Saved coding records always carry a topic (falling back to
    "programming"), so it is consulted after the algorithms.
    """
    if question_data.get("category"):
        return str(question_data["category"])
    algorithms = question_data.get("algorithms")
    if isinstance(algorithms, list) and algorithms:
        return str(algorithms[0])
    if question_data.get("topic"):
        return str(question_data["topic"])
    return "General"


def build_ability_map(records: List[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """
    Count correct/wrong answers per (type, knowledge point).

    Returns:
        Tuple of (abilities, recommendations); a recommendation is made for
        every entry with more wrong than correct answers.
    """
    counts: Dict[Tuple[str, str], Dict[str, int]] = {}
    for record in records:
        score = record_score(record.get("feedback"))
        if score is None:
            continue
        type_label = TYPE_LABELS.get(record.get("interviewType"), str(record.get("interviewType") or "Other"))
        point = knowledge_point(record.get("questionData") or {})
        bucket = counts.setdefault((type_label, point), {"correct": 0, "wrong": 0})
        bucket["correct" if score >= PASSING_SCORE else "wrong"] += 1

    abilities = [
        {"type": type_label, "knowledgePoint": point, **bucket}
        for (type_label, point), bucket in counts.items()
    ]
    recommendations = [
        {
            "type": a["type"],
            "knowledgePoint": a["knowledgePoint"],
            "exerciseId": f"{slugify(a['type'])}-{slugify(a['knowledgePoint'])}",
            "title": f"{a['knowledgePoint']} Practice",
        }
        for a in abilities
        if a["wrong"] > a["correct"]
    ]
    return abilities, recommendations


class CoachService(BaseService):
    """
    Service behind the coach agent.

    Example:
        >>> service = CoachService(store, llm_client)
        >>> service.save_profile(user, {"targetCompanies": ["Acme"]})
        >>> service.ability_map(user)
        {'success': True, 'abilities': [...], 'recommendations': [...]}
    """

    def save_profile(self, user: TokenUser, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Merge the given fields into the stored profile."""
        updates = {key: value for key, value in fields.items() if value is not None}
        updates["updatedAt"] = utcnow()
        self.collection(collections.COACH_PROFILES).update_one(
            {"_id": user.uid}, {"$set": updates}, upsert=True
        )
        self.logger.info(f"Coach profile updated for user {user.uid}: {sorted(updates)}")
        return {"success": True, "profile": self.get_profile(user)}

    def get_profile(self, user: TokenUser) -> Optional[Dict[str, Any]]:
        doc = self.collection(collections.COACH_PROFILES).find_one({"_id": user.uid})
        if doc is None:
            return None
        doc.pop("_id", None)
        return doc

    def daily_plan(self, user: TokenUser) -> Dict[str, Any]:
        """Ask the AI for today's plan from the profile and recent practice."""
        profile = self.get_profile(user) or {}
        records = list(self.collection(collections.LEARNING_HISTORY).find({"userId": user.uid}))
        records.sort(key=lambda d: timestamp_key(d.get("completedAt")), reverse=True)
        recent = [
            {
                "interviewType": r.get("interviewType"),
                "title": (r.get("questionData") or {}).get("title"),
                "score": record_score(r.get("feedback")),
            }
            for r in records[:RECENT_HISTORY_LIMIT]
        ]

        prompt = coach_prompts.get_daily_plan_prompt(profile, recent, date.today().isoformat())
        plan = self.ask_json(prompt, "generate daily plan", coach_prompts.COACH_SYSTEM_PROMPT)
        return {"success": True, "plan": plan}

    def goal_chat(
        self,
        user: TokenUser,
        message: str,
        history: Optional[List[Dict[str, str]]] = None
    ) -> Dict[str, Any]:
        prompt = coach_prompts.get_goal_chat_prompt(
            sanitize_prompt_text(message, 4000), history, self.get_profile(user)
        )
        reply = self.llm_client.generate(prompt, coach_prompts.COACH_SYSTEM_PROMPT)
        return {"success": True, "reply": reply.strip()}

    def ability_map(self, user: TokenUser) -> Dict[str, Any]:
        """Compute and store the user's ability map."""
        records = self.collection(collections.LEARNING_HISTORY).find({"userId": user.uid})
        abilities, recommendations = build_ability_map(list(records))
        self.collection(collections.ABILITY_MAPS).replace_one(
            {"_id": user.uid},
            {"abilities": abilities, "recommendations": recommendations, "updatedAt": utcnow()},
            upsert=True,
        )
        return {"success": True, "abilities": abilities, "recommendations": recommendations}
