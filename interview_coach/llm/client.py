"""
LLM Client for generative-AI text completion.

This module provides a clean interface to the configured AI provider:
- Google Gemini (default) through google-generativeai
- Groq through the groq SDK

The handlers only ever send one prompt and read back free-form text, so
the client exposes generate() for text and generate_json() for replies
that embed a JSON object. There is no fallback between providers and no
retry: a failure is reported to the caller as an LLMError.
"""
from typing import Any, Dict, Optional

import google.generativeai as genai
from groq import Groq

from interview_coach.core.config import Settings
from interview_coach.core.exceptions import LLMError
from interview_coach.core.logging_config import get_logger
from interview_coach.llm.parsing import parse_json_response

logger = get_logger(__name__)


class LLMClient:
    """
    Client for the configured generative-AI provider.

    Example:
        >>> client = LLMClient(settings)
        >>> client.generate_json('Return {"ok": true} as JSON')
        {'ok': True}
    """

    def __init__(self, settings: Settings):
        """Initialize the client for the provider named in settings."""
        self.settings = settings
        self.provider = settings.llm_provider
        self.temperature = settings.llm_temperature
        self.max_tokens = settings.llm_max_tokens
        self._groq_client: Optional[Groq] = None

        if self.provider == "groq":
            self.model = settings.groq_model
            if settings.groq_api_key:
                self._groq_client = Groq(api_key=settings.groq_api_key)
        else:
            self.model = settings.gemini_model
            if settings.gemini_api_key:
                genai.configure(api_key=settings.gemini_api_key)

        logger.info(f"LLM client initialized: provider={self.provider}, model={self.model}")

    def generate(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """
        Send a prompt and return the reply text.

        Raises:
            LLMError: If the provider is not configured or the request fails
        """
        logger.debug(f"Sending prompt to {self.provider}: {len(prompt)} characters")

        if self.provider == "groq":
            text = self._generate_groq(prompt, system_prompt)
        else:
            text = self._generate_gemini(prompt, system_prompt)

        if not text:
            raise LLMError(f"{self._provider_label()} API returned an empty response.")

        logger.debug(f"Received {len(text)} characters from {self.provider}")
        return text

    def generate_json(self, prompt: str, system_prompt: Optional[str] = None) -> Dict[str, Any]:
        """
        Send a prompt and decode the JSON object embedded in the reply.

        Raises:
            LLMError: If the request fails
            MalformedResponse: If the reply has no decodable JSON object
        """
        return parse_json_response(self.generate(prompt, system_prompt))

    def _generate_gemini(self, prompt: str, system_prompt: Optional[str]) -> str:
        if not self.settings.gemini_api_key:
            raise LLMError("Gemini API key is not configured on the server.")

        try:
            model = genai.GenerativeModel(
                model_name=self.model,
                system_instruction=system_prompt,
            )
            response = model.generate_content(
                prompt,
                generation_config=genai.types.GenerationConfig(
                    temperature=self.temperature,
                    max_output_tokens=self.max_tokens,
                ),
            )
            return response.text
        except Exception as e:
            logger.error(f"Gemini request failed ({self.model}): {e}")
            raise LLMError(f"Gemini API request failed: {e}") from e

    def _generate_groq(self, prompt: str, system_prompt: Optional[str]) -> str:
        if self._groq_client is None:
            raise LLMError("Groq API key is not configured on the server.")

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            response = self._groq_client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            return response.choices[0].message.content
        except Exception as e:
            logger.error(f"Groq request failed ({self.model}): {e}")
            raise LLMError(f"Groq API request failed: {e}") from e

    def _provider_label(self) -> str:
        return "Groq" if self.provider == "groq" else "Gemini"
