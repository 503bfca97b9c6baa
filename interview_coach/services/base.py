"""
Base class shared by the services.

A service is built per request around the store and AI client held by
the application; it carries no state of its own.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from interview_coach.core.exceptions import AIResponseError, NotFoundError, PermissionDeniedError
from interview_coach.core.logging_config import LoggerMixin
from interview_coach.core.security import TokenUser
from interview_coach.database.connection import DocumentStore
from interview_coach.llm.client import LLMClient
from interview_coach.llm.parsing import MalformedResponse, parse_json_response


def parse_client_time(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp sent by the client; unparseable values are dropped."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class BaseService(LoggerMixin):
    """Holds the store and AI client and the lookups every service repeats."""

    def __init__(self, store: DocumentStore, llm_client: Optional[LLMClient] = None):
        self.store = store
        self.llm_client = llm_client

    def collection(self, name: str):
        return self.store.collection(name)

    def ask_json(self, prompt: str, action: str, system_prompt: Optional[str] = None) -> Dict[str, Any]:
        """
        Send a prompt and decode the JSON object in the reply.

        Args:
            prompt: Prompt text
            action: Verb phrase used in the error, e.g. "generate question"

        Raises:
            LLMError: If the AI call fails
            AIResponseError: If the reply has no usable JSON object
        """
        reply = self.llm_client.generate(prompt, system_prompt)
        try:
            return parse_json_response(reply)
        except MalformedResponse as e:
            self.logger.warning(f"Unusable AI reply while trying to {action}: {e}")
            raise AIResponseError(f"Failed to {action}: {e}") from e

    def get_owned(self, collection_name: str, doc_id: str, user: TokenUser, label: str) -> Dict[str, Any]:
        """
        Load a document that must belong to the caller.

        Raises:
            NotFoundError: If the document does not exist
            PermissionDeniedError: If it belongs to another user
        """
        doc = self.collection(collection_name).find_one({"_id": doc_id})
        if doc is None:
            raise NotFoundError(f"{label} not found", resource_id=doc_id)
        if doc.get("userId") != user.uid:
            raise PermissionDeniedError(f"You do not have access to this {label.lower()}")
        return doc
