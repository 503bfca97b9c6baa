"""
Analysis Prompts - Grading of single answers outside interview sessions.
"""
import json
from typing import Any, Dict, List, Optional


def get_code_review_prompt(title: str, description: str, user_code: str, language: str) -> str:
    return f"""
Act as an expert code reviewer for a job interview practice platform.
Analyze the following code submission for the problem described below.

Problem Title: "{title}"
Problem Description: "{description}"

User's Code ({language}):
```{language}
{user_code}
```

Provide a concise analysis in a single, valid JSON object format.
Do not include any text or markdown formatting outside of the JSON object itself.
Escape any double quotes inside string values.

The JSON object must have the following structure:
{{
  "complexity": {{ "time": "The time complexity of the user's code, e.g., O(N)", "space": "The space complexity, e.g., O(1)" }},
  "aiAnalysis": "A constructive code review: an overall evaluation, then specific strengths and areas for improvement."
}}
"""


def get_behavioral_analysis_prompt(question: str, user_answer: str, question_id: Optional[str] = None) -> str:
    """The reply is shown as-is, so no JSON is requested."""
    return f"""
Act as an expert behavioral interviewer evaluating a candidate's response.

Question: {question}
Question ID: {question_id or 'n/a'}
Candidate's Answer: {user_answer}

Provide a comprehensive analysis of the candidate's response, including:

1. **Structure**: how well the response follows the STAR framework
2. **Strengths**: what the response does well
3. **Suggestions**: specific improvements
4. **STAR guidance**: advice on each STAR component
5. **Improved example**: a concrete rewrite of a weak part
6. **Overall score**: a score out of 100 with a brief explanation

Format your response as a detailed analysis with clear sections and actionable feedback.
"""


def get_llm_answer_analysis_prompt(question_data: Dict[str, Any], user_answer: str, time_spent: int = 0) -> str:
    return f"""
You are a senior technical interviewer for Large Language Model roles. Evaluate the following answer.

Question: {question_data.get('title') or 'LLM Question'}
Description: {question_data.get('description', '')}
Difficulty: {question_data.get('difficulty') or 'medium'}
Category: {question_data.get('category') or 'LLM General'}

Candidate's answer:
{user_answer}
Time spent: {time_spent} seconds

Assess technical accuracy, feasibility of the approach, depth and breadth,
practical considerations and possible optimizations.

Return the evaluation as JSON:
{{
  "overallScore": 85,
  "categoryScores": {{
    "technicalAccuracy": 85,
    "implementationFeasibility": 80,
    "technicalDepth": 85,
    "practicalApplication": 80,
    "optimization": 85
  }},
  "strengths": ["..."],
  "areasForImprovement": ["..."],
  "recommendations": ["..."],
  "technicalFeedback": "...",
  "implementationSuggestions": "...",
  "nextSteps": "...",
  "hiringRecommendation": "strong_yes/yes/maybe/no"
}}
"""


def get_system_design_analysis_prompt(
    question_data: Dict[str, Any],
    voice_input: str,
    whiteboard_data: List[Any],
    time_spent: int = 0
) -> str:
    return f"""
You are a senior system design interviewer. Evaluate the candidate's design.

Question: {question_data.get('title') or 'System Design Question'}
Description: {question_data.get('description', '')}
Difficulty: {question_data.get('difficulty') or 'medium'}

Candidate's spoken/written explanation:
{voice_input or '(none)'}

Whiteboard: {len(whiteboard_data)} strokes drawn.
Time spent: {time_spent} seconds

Return the evaluation as JSON:
{{
  "overallScore": 80,
  "systemDesign": "excellent/good/fair/poor",
  "technicalDepth": "excellent/good/fair/poor",
  "communication": "excellent/good/fair/poor",
  "innovation": "excellent/good/fair/poor",
  "strengths": ["..."],
  "areasForImprovement": ["..."],
  "suggestions": ["..."],
  "detailedFeedback": "..."
}}
"""


def get_wrong_question_feedback_prompt(record: Dict[str, Any]) -> str:
    question = record.get("questionData") or {}
    feedback = record.get("feedback") or {}
    return f"""
You are an interview coach. For the following question the user struggled with, provide:
1. A clear, concise explanation of a strong answer (as if teaching a student).
2. A step-by-step redo plan for the user to master this knowledge point.

Question: {question.get('title', '')}
Details: {question.get('description') or question.get('prompt') or ''}
Type: {record.get('interviewType', 'unknown')}
User's Answer: {record.get('userAnswer') or record.get('userCode') or ''}
Previous Feedback: {json.dumps(feedback, ensure_ascii=False, default=str)[:4000]}

Format your response as JSON:
{{
  "explanation": "...",
  "redoPlan": ["step 1", "step 2"]
}}
"""
