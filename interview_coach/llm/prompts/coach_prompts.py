"""
Coaching Prompts - Daily plans, goal chat and resume help.
"""
import json
from typing import Any, Dict, List, Optional

COACH_SYSTEM_PROMPT = """You are a friendly, practical interview coach.
Give concrete, actionable advice. Keep answers short unless asked for detail."""


def get_daily_plan_prompt(profile: Dict[str, Any], recent_history: List[Dict[str, Any]], today: str) -> str:
    history = json.dumps(recent_history, ensure_ascii=False, default=str)[:4000]
    return f"""
Create today's interview-preparation plan ({today}) for this candidate.

Profile:
- Target companies: {', '.join(profile.get('targetCompanies') or []) or 'not specified'}
- Tech stacks: {', '.join(profile.get('techStacks') or []) or 'not specified'}
- Preferred language: {profile.get('language') or 'not specified'}
- Available time today (hours): {profile.get('availableTime') or 'not specified'}
- Preferences: {profile.get('preferences') or 'none'}

Recently completed practice (newest first):
{history}

Return a single JSON object:
{{
  "date": "{today}",
  "focus": "one-line theme of the day",
  "tasks": [
    {{ "type": "coding/system-design/behavioral/llm/review", "title": "...", "durationMinutes": 30, "reason": "..." }}
  ],
  "tips": ["..."]
}}
"""


def get_goal_chat_prompt(message: str, history: Optional[List[Dict[str, str]]], profile: Optional[Dict[str, Any]]) -> str:
    lines = []
    for turn in history or []:
        role = "Coach" if turn.get("role") == "assistant" else "Candidate"
        lines.append(f"{role}: {turn.get('content', '')}")
    transcript = "\n".join(lines) or "(new conversation)"
    profile_text = json.dumps(profile or {}, ensure_ascii=False, default=str)[:2000]
    return f"""
Candidate profile: {profile_text}

Conversation so far:
{transcript}

Candidate: {message}
Coach:"""


def get_resume_analysis_prompt(resume_text: str, job_description: Optional[str]) -> str:
    return f"""
Analyze the following resume and provide optimization suggestions for the job description:

RESUME:
{resume_text}

JOB DESCRIPTION:
{job_description or 'General optimization'}

Format your response as JSON with the following structure:
{{
    "overallAssessment": "string",
    "optimizationSuggestions": ["array of suggestions"],
    "recommendedModifications": ["array of modifications"],
    "skillsToHighlight": ["array of skills"],
    "experienceImprovements": ["array of improvements"],
    "formattingSuggestions": ["array of formatting tips"]
}}
"""


def get_jd_matching_prompt(resume_text: str, job_description: str) -> str:
    return f"""
Analyze the matching degree between the resume and job description, and provide reinforcement suggestions:

RESUME:
{resume_text}

JOB DESCRIPTION:
{job_description}

Format your response as JSON with the following structure:
{{
    "matchingScore": 0-100,
    "matchingAnalysis": {{
        "skills": {{ "score": 0-100, "details": "string" }},
        "experience": {{ "score": 0-100, "details": "string" }},
        "education": {{ "score": 0-100, "details": "string" }},
        "projects": {{ "score": 0-100, "details": "string" }}
    }},
    "missingSkills": ["array of missing skills"],
    "projectSuggestions": ["array of project suggestions"],
    "experienceGaps": ["array of gaps and solutions"],
    "reinforcementPoints": ["array of reinforcement suggestions"]
}}
"""


def get_cover_letter_prompt(
    resume_text: str,
    job_description: str,
    company_name: str,
    position_title: str,
    company_culture: Optional[str]
) -> str:
    return f"""
Generate a customized cover letter based on the following information:

RESUME:
{resume_text}

JOB DESCRIPTION:
{job_description}

COMPANY NAME: {company_name}
POSITION TITLE: {position_title}
COMPANY CULTURE: {company_culture or 'Not specified'}

The letter should address the job requirements, highlight relevant experience,
fit the company culture when given, and have a strong opening and closing.

Format your response as JSON with the following structure:
{{
    "coverLetter": "full cover letter text",
    "keyHighlights": ["array of key points highlighted"],
    "customizationNotes": "explanation of how the letter was customized"
}}
"""
