"""AI gateway for QuizForge: one prompt in, raw candidate text out."""

import abc
import logging
from typing import Any, Optional

import requests
from openai import OpenAI, OpenAIError

from config.settings import AIConfig, get_ai_config
from .errors import ContentBlocked, EmptyOrInvalidResponse, UpstreamCallFailed
from .prompt_composer import build_gemini_payload

logger = logging.getLogger(__name__)


class AIGateway(abc.ABC):
    """Single-attempt text generation; failures are raised, never retried."""

    @abc.abstractmethod
    def generate(self, prompt: str) -> str:
        raise NotImplementedError()


class GeminiGateway(AIGateway):
    """Calls the Gemini generateContent REST endpoint."""

    def __init__(self, config: Optional[AIConfig] = None):
        self.config = config or get_ai_config()
        if not self.config.gemini_api_key:
            logger.warning("GEMINI_API_KEY not set; every AI call will be rejected upstream.")

    def generate(self, prompt: str) -> str:
        logger.info(f"Calling Gemini (prompt length={len(prompt)})")
        try:
            response = requests.post(
                self.config.gemini_api_url,
                params={"key": self.config.gemini_api_key or ""},
                json=build_gemini_payload(prompt),
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error(f"Gemini request failed: {e}")
            raise UpstreamCallFailed(f"Gemini request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"Gemini API call failed with status {response.status_code}")
            raise UpstreamCallFailed(
                f"Gemini API call failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise EmptyOrInvalidResponse("AI response body is not JSON.") from e

        return self._extract_text(body)

    # ------------------------------------------------------------------
    # Utility: envelope parsing
    # ------------------------------------------------------------------
    def _extract_text(self, body: Any) -> str:
        if not isinstance(body, dict):
            raise EmptyOrInvalidResponse("AI response was empty or invalid.")

        candidates = body.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            feedback = body.get("promptFeedback") or {}
            reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
            if reason:
                logger.warning(f"AI prompt was blocked. Reason: {reason}")
                raise ContentBlocked(str(reason))
            raise EmptyOrInvalidResponse("AI response was empty or invalid.")

        try:
            text = candidates[0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise EmptyOrInvalidResponse("AI response is missing candidate text.") from e

        if not isinstance(text, str) or not text.strip():
            raise EmptyOrInvalidResponse("AI response candidate text is empty.")
        return text


class OpenAIGateway(AIGateway):
    """Calls OpenAI chat completions."""

    def __init__(self, config: Optional[AIConfig] = None, client: Optional[Any] = None):
        self.config = config or get_ai_config()
        self.client = client

        if self.client is None:
            if not self.config.openai_api_key:
                logger.warning("OpenAI API key not set; AI generation will fail over to fallback.")
            else:
                self.client = OpenAI(
                    api_key=self.config.openai_api_key,
                    timeout=self.config.timeout_seconds,
                    max_retries=0,
                )
                logger.info(f"Initialized OpenAI client (model={self.config.openai_model})")

    def generate(self, prompt: str) -> str:
        if not self.client:
            raise UpstreamCallFailed("OpenAI client unavailable (missing API key).")

        try:
            response = self.client.chat.completions.create(
                model=self.config.openai_model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI call failed: {e}")
            raise UpstreamCallFailed(f"OpenAI call failed: {e}") from e

        if not response.choices:
            raise EmptyOrInvalidResponse("AI response was empty or invalid.")

        choice = response.choices[0]
        if choice.finish_reason == "content_filter":
            logger.warning("AI prompt was blocked. Reason: content_filter")
            raise ContentBlocked("content_filter")

        content = str(choice.message.content or "").strip()
        if not content:
            raise EmptyOrInvalidResponse("AI response candidate text is empty.")
        return content


def get_ai_gateway(config: Optional[AIConfig] = None) -> AIGateway:
    """Return the gateway for the configured provider."""
    config = config or get_ai_config()
    provider = (config.provider or "gemini").lower()

    if provider == "gemini":
        return GeminiGateway(config)
    if provider == "openai":
        return OpenAIGateway(config)
    raise ValueError(f"Unknown AI provider: {provider}")
