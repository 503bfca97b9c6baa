"""
Resume Service - Resume review, JD matching and cover letters.

These endpoints are lenient: a reply that is not JSON still produces a
response, with the raw text placed in the payload's main text field.
"""
from typing import Any, Callable, Dict, Optional

from interview_coach.core.validators import sanitize_prompt_text
from interview_coach.llm.parsing import MalformedResponse, parse_json_response, strip_code_fence
from interview_coach.llm.prompts import coach_prompts
from interview_coach.services.base import BaseService


def _analysis_fallback(text: str) -> Dict[str, Any]:
    return {
        "overallAssessment": text,
        "optimizationSuggestions": [],
        "recommendedModifications": [],
        "skillsToHighlight": [],
        "experienceImprovements": [],
        "formattingSuggestions": [],
    }


def _matching_fallback(text: str) -> Dict[str, Any]:
    return {
        "matchingScore": 0,
        "matchingAnalysis": {},
        "missingSkills": [],
        "projectSuggestions": [],
        "experienceGaps": [],
        "reinforcementPoints": [],
        "rawResponse": text,
    }


def _cover_letter_fallback(text: str) -> Dict[str, Any]:
    return {
        "coverLetter": text,
        "keyHighlights": [],
        "customizationNotes": "Generated based on resume and job description",
    }


class ResumeService(BaseService):
    """Service for resume-related AI help; it never touches the store."""

    def analyze(self, resume_text: str, job_description: Optional[str] = None) -> Dict[str, Any]:
        prompt = coach_prompts.get_resume_analysis_prompt(
            sanitize_prompt_text(resume_text), sanitize_prompt_text(job_description) or None
        )
        return {"success": True, "analysis": self._ask_lenient(prompt, _analysis_fallback)}

    def match_job_description(self, resume_text: str, job_description: str) -> Dict[str, Any]:
        prompt = coach_prompts.get_jd_matching_prompt(
            sanitize_prompt_text(resume_text), sanitize_prompt_text(job_description)
        )
        return {"success": True, "assessment": self._ask_lenient(prompt, _matching_fallback)}

    def cover_letter(
        self,
        resume_text: str,
        job_description: str,
        company_name: str,
        position_title: str,
        company_culture: Optional[str] = None
    ) -> Dict[str, Any]:
        prompt = coach_prompts.get_cover_letter_prompt(
            sanitize_prompt_text(resume_text),
            sanitize_prompt_text(job_description),
            sanitize_prompt_text(company_name, 200),
            sanitize_prompt_text(position_title, 200),
            sanitize_prompt_text(company_culture, 2000) or None,
        )
        return {"success": True, "coverLetter": self._ask_lenient(prompt, _cover_letter_fallback)}

    def _ask_lenient(self, prompt: str, fallback: Callable[[str], Dict[str, Any]]) -> Dict[str, Any]:
        reply = self.llm_client.generate(prompt)
        try:
            return parse_json_response(reply)
        except MalformedResponse as e:
            self.logger.info(f"Resume reply was not JSON ({e}); using raw text")
            return fallback(strip_code_fence(reply))
