"""
Interview Session Prompts - Question sets, per-submission grading and
final reports for coding, behavioral and system design sessions.
"""
import json
from typing import Any, Dict, List


def _dump(value: Any, limit: int = 6000) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)[:limit]


def get_coding_submission_prompt(
    question_data: Dict[str, Any],
    solution: str,
    approach: str,
    time_spent: int
) -> str:
    return f"""
Act as a technical interviewer grading a live coding interview.

Problem: {question_data.get('title', '')}
Description: {question_data.get('description', '')}
Difficulty: {question_data.get('difficulty', 'medium')}

Candidate's solution:
```
{solution}
```
Candidate's explanation of the approach: {approach or '(none)'}
Time spent: {time_spent} seconds

Return a single JSON object:
{{
  "score": 0-100,
  "correctness": "excellent/good/fair/poor",
  "efficiency": "excellent/good/fair/poor",
  "codeQuality": "excellent/good/fair/poor",
  "problemSolving": "excellent/good/fair/poor",
  "communication": "excellent/good/fair/poor",
  "complexity": {{ "time": "...", "space": "..." }},
  "suggestions": ["..."],
  "detailedFeedback": "..."
}}
"""


def get_coding_final_report_prompt(question_data: Dict[str, Any], solutions: List[Dict[str, Any]]) -> str:
    return f"""
Act as a hiring-panel technical interviewer. Write the final report for a coding interview.

Problem: {question_data.get('title', '')}
Submissions (in order, with per-submission feedback):
{_dump(solutions)}

Return a single JSON object:
{{
  "overallScore": 0-100,
  "categoryScores": {{ "correctness": 0-100, "efficiency": 0-100, "codeQuality": 0-100, "problemSolving": 0-100, "communication": 0-100 }},
  "strengths": ["..."],
  "areasForImprovement": ["..."],
  "hiringRecommendation": "strong_yes/yes/maybe/no",
  "summary": "..."
}}
"""


def get_behavioral_question_set_prompt(role: str, level: str, company: str, count: int = 5) -> str:
    return f"""
Act as an experienced behavioral interviewer at {company or 'a technology company'}.
Prepare {count} behavioral interview questions for a {level or 'mid-level'} {role or 'software engineer'} candidate.

Return a single JSON object:
{{
  "questions": [
    {{ "id": "q1", "question": "...", "category": "leadership/teamwork/conflict/failure/...", "focus": "what a strong answer demonstrates" }}
  ]
}}
"""


def get_behavioral_submission_prompt(
    interview_data: Dict[str, Any],
    question: Dict[str, Any],
    response: str
) -> str:
    return f"""
Act as a behavioral interviewer for a {interview_data.get('level', '')} {interview_data.get('role', '')} role at {interview_data.get('company', '')}.

Question: {question.get('question') or question.get('title') or ''}
Candidate's answer:
{response}

Grade the answer with the STAR method. Return a single JSON object:
{{
  "overallScore": 0-100,
  "communication": "excellent/good/fair/poor",
  "specificity": "excellent/good/fair/poor",
  "leadership": "excellent/good/fair/poor",
  "problemSolving": "excellent/good/fair/poor",
  "starAnalysis": {{
    "situation": {{ "score": 0-100, "feedback": "..." }},
    "task": {{ "score": 0-100, "feedback": "..." }},
    "action": {{ "score": 0-100, "feedback": "..." }},
    "result": {{ "score": 0-100, "feedback": "..." }}
  }},
  "suggestions": ["..."],
  "nextQuestion": "a natural follow-up question"
}}
"""


def get_behavioral_final_report_prompt(interview_data: Dict[str, Any], responses: List[Dict[str, Any]]) -> str:
    return f"""
Act as a hiring manager. Write the final report for a behavioral interview.

Role: {interview_data.get('role', '')} ({interview_data.get('level', '')}) at {interview_data.get('company', '')}
Answers and per-answer feedback:
{_dump(responses)}

Return a single JSON object:
{{
  "overallScore": 0-100,
  "categoryScores": {{ "communication": 0-100, "leadership": 0-100, "problemSolving": 0-100, "teamwork": 0-100 }},
  "strengths": ["..."],
  "areasForImprovement": ["..."],
  "hiringRecommendation": "strong_yes/yes/maybe/no",
  "summary": "..."
}}
"""


def get_system_design_submission_prompt(
    question_data: Dict[str, Any],
    voice_input: str,
    whiteboard_data: List[Any],
    time_spent: int
) -> str:
    return f"""
Act as a senior system design interviewer in a live interview.

Question: {question_data.get('title', '')}
Description: {question_data.get('description', '')}

Candidate's explanation so far:
{voice_input or '(none)'}
Whiteboard: {len(whiteboard_data)} strokes drawn.
Time spent: {time_spent} seconds

Return a single JSON object:
{{
  "overallScore": 0-100,
  "systemDesign": "excellent/good/fair/poor",
  "technicalDepth": "excellent/good/fair/poor",
  "communication": "excellent/good/fair/poor",
  "innovation": "excellent/good/fair/poor",
  "strengths": ["..."],
  "areasForImprovement": ["..."],
  "nextHints": ["hints for the next part of the design"]
}}
"""


def get_system_design_final_report_prompt(question_data: Dict[str, Any], submissions: List[Dict[str, Any]]) -> str:
    return f"""
Act as a hiring-panel architect. Write the final report for a system design interview.

Question: {question_data.get('title', '')}
Submissions and per-submission feedback:
{_dump(submissions)}

Return a single JSON object:
{{
  "overallScore": 0-100,
  "categoryScores": {{ "systemDesign": 0-100, "technicalDepth": 0-100, "communication": 0-100, "innovation": 0-100 }},
  "strengths": ["..."],
  "areasForImprovement": ["..."],
  "hiringRecommendation": "strong_yes/yes/maybe/no",
  "summary": "..."
}}
"""
