"""
LLM module - Generative-AI integration.

This module handles all AI interactions:
- Prompt construction
- API calls to Gemini or Groq
- JSON extraction from replies
"""
from interview_coach.llm.client import LLMClient
from interview_coach.llm.parsing import MalformedResponse, extract_json, parse_json_response

__all__ = [
    "LLMClient",
    "MalformedResponse",
    "extract_json",
    "parse_json_response",
]
