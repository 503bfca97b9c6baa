"""
Analysis Service - One-off grading of answers outside interview sessions.

Code execution is simulated: there is no sandbox, so a run passes with a
fixed probability and the AI review carries the real signal.
"""
import random
from typing import Any, Dict, List, Optional

from interview_coach.core.validators import sanitize_prompt_text
from interview_coach.llm.prompts import analysis_prompts
from interview_coach.services.base import BaseService

PASS_PROBABILITY = 0.7


def simulated_run_passes() -> bool:
    return random.random() < PASS_PROBABILITY


class AnalysisService(BaseService):
    """Service for code review, behavioral, LLM and system design answer analysis."""

    def execute_code(self, user_code: str, language: Optional[str] = None) -> Dict[str, Any]:
        self.logger.debug(f"Simulating execution of {len(user_code)} characters of {language or 'code'}")
        if simulated_run_passes():
            return {"success": True, "message": "All test cases passed!"}
        return {"success": False, "message": "Compilation error or some test cases failed."}

    def submit_code(self, title: str, description: str, user_code: str, language: str) -> Dict[str, Any]:
        """
        Review submitted code with the AI and attach simulated test results.

        Returns:
            Dict with testResults, complexity and aiAnalysis
        """
        prompt = analysis_prompts.get_code_review_prompt(
            sanitize_prompt_text(title, 500),
            sanitize_prompt_text(description),
            sanitize_prompt_text(user_code),
            language,
        )
        analysis = self.ask_json(prompt, "analyze code")

        passed = simulated_run_passes()
        complexity = analysis.get("complexity")
        return {
            "testResults": {
                "passed": passed,
                "summary": "10/10 test cases passed" if passed else "7/10 test cases passed",
            },
            "complexity": complexity if isinstance(complexity, dict) else {},
            "aiAnalysis": str(analysis.get("aiAnalysis") or ""),
        }

    def analyze_behavioral(self, question: str, user_answer: str, question_id: Optional[str] = None) -> Dict[str, Any]:
        """Free-text STAR analysis; the reply is passed through untouched."""
        prompt = analysis_prompts.get_behavioral_analysis_prompt(
            sanitize_prompt_text(question, 5000), sanitize_prompt_text(user_answer), question_id
        )
        return {"success": True, "message": self.llm_client.generate(prompt)}

    def analyze_llm_answer(self, question_data: Dict[str, Any], user_answer: str, time_spent: int = 0) -> Dict[str, Any]:
        prompt = analysis_prompts.get_llm_answer_analysis_prompt(
            question_data, sanitize_prompt_text(user_answer), time_spent
        )
        return self.ask_json(prompt, "analyze solution")

    def analyze_system_design(
        self,
        question_data: Dict[str, Any],
        voice_input: Optional[str],
        whiteboard_data: List[Any],
        time_spent: int = 0
    ) -> Dict[str, Any]:
        prompt = analysis_prompts.get_system_design_analysis_prompt(
            question_data, sanitize_prompt_text(voice_input), whiteboard_data, time_spent
        )
        return self.ask_json(prompt, "analyze design")
