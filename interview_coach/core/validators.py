"""
Input Validators - Sanitization and id helpers.

This module provides small, shared checks used by the services:
- Document id validation
- Slug generation for question titles
- Prompt text sanitization
- Comma-separated filter parsing
"""
import re
from typing import List, Optional, Tuple

from interview_coach.core.logging_config import get_logger

logger = get_logger(__name__)

# Keys that are safe to use directly as document ids
_DOCUMENT_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{1,1500}$")
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def is_valid_document_id(value: Optional[str]) -> bool:
    """Check whether a string can be used as a document key."""
    return bool(value) and bool(_DOCUMENT_ID_RE.match(value))


def slugify(title: str) -> str:
    """
    Build a URL-friendly id from a title.

    Lowercases the title, collapses every run of characters outside
    [a-z0-9] into '-' and strips leading/trailing dashes.

    Example:
        >>> slugify("Design a URL Shortener!")
        'design-a-url-shortener'
    """
    return _NON_SLUG_RE.sub("-", title.lower()).strip("-")


def sanitize_prompt_text(text: Optional[str], max_length: int = 20000) -> str:
    """
    Sanitize free text before it is placed into a prompt.

    - Removes null bytes
    - Strips leading/trailing whitespace
    - Limits length

    Args:
        text: Raw user text
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    cleaned = text.replace("\x00", "").strip()

    if len(cleaned) > max_length:
        logger.warning(f"Prompt text truncated from {len(cleaned)} to {max_length} characters")
        cleaned = cleaned[:max_length]

    return cleaned


def split_filter(value: Optional[str]) -> List[str]:
    """Split a comma-separated query value, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def validate_password(password: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a new password.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not password or len(password) < 6:
        return False, "Password must be at least 6 characters long."
    if len(password.encode("utf-8")) > 72:
        return False, "Password must be at most 72 bytes long."
    return True, None
