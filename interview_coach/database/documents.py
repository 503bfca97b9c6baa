"""
Helpers for turning stored documents into API payloads.

Documents keep their key in `_id`; API responses expose it as `id`.
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional


def new_id() -> str:
    """Generate a document key for records without a natural id."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_public(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return a copy of a document with `_id` renamed to `id`."""
    if doc is None:
        return None
    data = dict(doc)
    doc_id = data.pop("_id", None)
    return {"id": doc_id, **data}


def to_public_list(docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [to_public(doc) for doc in docs]


def timestamp_key(value: Any) -> float:
    """
    Sort key for mixed timestamp values.

    Stored times may be aware or naive datetimes (naive ones are UTC) or
    ISO strings written by older clients; anything else sorts first.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return 0.0
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    return 0.0
