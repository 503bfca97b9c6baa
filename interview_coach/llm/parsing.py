"""
Extraction of JSON objects from AI replies.

Prompts ask the model for a single JSON object, but replies often wrap it
in prose or ```json fences. The extraction takes everything from the first
'{' to the last '}'. Prompts are tuned around this exact behavior, so no
smarter recovery is attempted.
"""
import json
from typing import Any, Dict


class MalformedResponse(ValueError):
    """Raised when an AI reply does not contain a usable JSON object."""


def extract_json(text: str) -> str:
    """
    Return the substring from the first '{' through the last '}'.

    Example:
        >>> extract_json('Sure! ```json\\n{"a":1}\\n```')
        '{"a":1}'

    Raises:
        MalformedResponse: If no '{' or no '}' follows it in the text
    """
    if not text:
        raise MalformedResponse("Could not find a valid JSON object in the API response.")

    first_brace = text.find("{")
    last_brace = text.rfind("}")
    if first_brace == -1 or last_brace == -1 or last_brace < first_brace:
        raise MalformedResponse("Could not find a valid JSON object in the API response.")

    return text[first_brace:last_brace + 1]


def parse_json_response(text: str) -> Dict[str, Any]:
    """
    Extract and decode the JSON object embedded in an AI reply.

    Raises:
        MalformedResponse: If extraction fails, the JSON does not decode,
            or the decoded value is not an object
    """
    json_text = extract_json(text)
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"AI response is not valid JSON: {e.msg}") from e

    if not isinstance(data, dict):
        raise MalformedResponse("AI response JSON is not an object.")

    return data


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json / ``` fence, if present."""
    stripped = text.strip()
    if stripped.startswith("```json"):
        stripped = stripped[7:]
    elif stripped.startswith("```"):
        stripped = stripped[3:]
    else:
        return stripped
    if stripped.endswith("```"):
        stripped = stripped[:-3]
    return stripped.strip()
