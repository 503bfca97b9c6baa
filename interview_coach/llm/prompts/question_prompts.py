"""
Question Generation Prompts - Prompts that create question-bank entries.

Every prompt asks for a single JSON object; the reply is read with
parse_json_response(), so the requested shape is documentation for the
model, not a validated schema.
"""
from typing import Optional


def get_coding_question_prompt(title: str, description: str) -> str:
    """
    Prompt for a full analysis of a known coding problem.

    Args:
        title: Problem title entered by an admin
        description: Problem statement

    Returns:
        Prompt text
    """
    return f"""
Act as an expert computer science tutor. Based on the following interview problem, generate a detailed analysis.
Problem Title: "{title}"
Problem Description: "{description}"

Provide the output in a single, clean JSON object format. Do not include any text outside of the JSON object.

The JSON object must have the following exact structure:
{{
  "questionId": "A unique, URL-friendly string ID based on the title (e.g., 'two-sum').",
  "title": "{title}",
  "description": "{description}",
  "example": "A concise example with input and output, clearly formatted with newlines.",
  "solution": "A correct and well-commented Python solution as a single string with escaped newlines.",
  "explanation": "A detailed, step-by-step explanation of the solution's logic.",
  "testCases": "Python code as a string with a 'main' function that tests the solution, including edge cases.",
  "complexity": {{ "time": "e.g. O(N)", "space": "e.g. O(1)" }},
  "dataStructures": ["relevant", "data", "structures"],
  "algorithms": ["relevant", "algorithms"],
  "difficulty": "Easy, Medium, or Hard"
}}
"""


def get_system_design_question_prompt(title: str, description: str) -> str:
    """Prompt for a detailed answer to a system design problem."""
    return f"""
Act as a senior system architect. Based on the following design problem, provide a detailed solution.
Problem Title: "{title}"
Core Description: "{description}"

Provide the output in a single, clean JSON object format. Do not include any text outside of the JSON object.

The JSON object must have the following structure:
{{
  "title": "{title}",
  "description": "{description}",
  "category": "A category like 'Large Model Design', 'Object-Oriented Design', 'Machine Learning Design', or 'General System Design'.",
  "detailedAnswer": "A detailed, well-structured markdown answer with headers and lists, newlines escaped.",
  "tags": ["relevant", "keywords"]
}}
"""


def get_llm_question_prompt(
    title: str,
    description: str,
    category: Optional[str] = None,
    difficulty: Optional[str] = None
) -> str:
    """Prompt for an LLM-topic interview question with a reference answer."""
    category = category or "LLM General"
    difficulty = difficulty or "medium"
    return f"""
Act as an expert in Large Language Models (LLMs). Based on the following LLM topic, provide a detailed interview question and comprehensive answer.

Topic Title: "{title}"
Description: "{description}"
Category: "{category}"
Difficulty: "{difficulty}"

Provide the output in a single, clean JSON object format:
{{
  "title": "{title}",
  "englishTitle": "English translation of the title",
  "description": "{description}",
  "category": "{category}",
  "difficulty": "{difficulty}",
  "detailedAnswer": "Comprehensive technical answer with explanations, implementation steps and best practices",
  "tags": ["tag1", "tag2", "tag3"],
  "designSteps": ["Step 1", "Step 2", "Step 3"],
  "keyPoints": ["Key point 1", "Key point 2", "Key point 3"]
}}

The answer should cover concepts and principles, implementation approaches,
optimization techniques, common challenges and real-world applications.
"""


def get_random_coding_question_prompt(
    difficulty: str = "medium",
    topic: Optional[str] = None,
    language: Optional[str] = None
) -> str:
    """Prompt for a brand-new coding question of a given difficulty."""
    extras = ""
    if topic:
        extras += f"Topic: {topic}\n"
    if language and language != "any":
        extras += f"Preferred language for the reference solution: {language}\n"
    return f"""
Act as an expert computer science interviewer. Generate a new coding interview question for a candidate.
Difficulty: {difficulty}
{extras}
Provide the output in a single, clean JSON object format:
{{
  "questionId": "url-friendly-id",
  "title": "...",
  "description": "...",
  "example": "...",
  "constraints": ["..."],
  "hints": ["..."],
  "solution": "...",
  "explanation": "...",
  "testCases": "...",
  "complexity": {{ "time": "...", "space": "..." }},
  "dataStructures": ["..."],
  "algorithms": ["..."],
  "difficulty": "{difficulty}"
}}
"""


def get_random_system_design_question_prompt(difficulty: str = "medium", topic: Optional[str] = None) -> str:
    """Prompt for a brand-new system design question."""
    topic_line = f"Topic: {topic}\n" if topic else ""
    return f"""
Act as a senior system architect. Generate a new system design interview question for a candidate.
Difficulty: {difficulty}
{topic_line}
Provide the output in a single, clean JSON object format:
{{
  "title": "...",
  "description": "...",
  "category": "...",
  "requirements": ["..."],
  "detailedAnswer": "...",
  "tags": ["..."],
  "difficulty": "{difficulty}"
}}
"""


def get_random_behavioral_question_prompt(difficulty: str = "medium") -> str:
    """Prompt for a brand-new behavioral question."""
    return f"""
Act as an expert behavioral interviewer. Generate a new behavioral interview question for a candidate.
Difficulty: {difficulty}
Provide the output in a single, clean JSON object format:
{{
  "title": "...",
  "prompt": "...",
  "category": "...",
  "sampleAnswer": "...",
  "difficulty": "{difficulty}"
}}
"""
