"""
Transform Service - polishes informal English or Roman Urdu with Claude.

This service is pure Python with no Streamlit dependencies,
making it easy to test and reuse across different contexts.
Each call is a single attempt; nothing is retried or cached.
"""

import logging
from typing import Optional

import anthropic

from config.settings import get_settings
from models.conversion import ToneType
from services.errors import ConfigurationError, ServiceError

logger = logging.getLogger(__name__)


class TransformService:
    """Service for the text polishing engine."""

    SYSTEM_INSTRUCTION = """You are the LinguaFlow Pro Engine, a high-performance language automation system.
Your goal is to transform text (English or Roman Urdu) into high-quality polished English.

TONE DEFINITIONS:
- Normal: Clear, simple, direct English. Avoids slang but stays friendly.
- Moderate: Standard professional English. Suitable for emails and general work.
- Fluent: Native-speaker quality. Uses natural idioms and smoother transitions.
- High-Level: Academic and sophisticated. Uses precise vocabulary and complex structures.
- Professional: Authoritative and corporate. Focused on clarity and impact.
- Creative: Imaginative and expressive. Uses vivid adjectives, metaphors, and evocative phrasing while maintaining clarity.

OPERATIONAL RULES:
1. Translate Roman Urdu accurately before polishing.
2. Return ONLY the polished result. No explanations.
3. Preserve key entities (names, dates, numbers)."""

    VARIATION_INSTRUCTION = "You are a variation engine. Provide ONLY the 3 variations separated by '---'."

    VARIATION_PROMPT = """Base Text: {text}

Task: Generate 3 alternate versions that differ in style: 1. A bit more concise, 2. A bit more descriptive/flowy, 3. More punchy/assertive. Format: Separate versions strictly with the delimiter '---' and no other text."""

    VARIATION_DELIMITER = "---"
    MAX_VARIATIONS = 3

    def __init__(self, client: Optional[anthropic.AsyncAnthropic] = None):
        settings = get_settings()
        self.settings = settings
        self.model = settings.claude_model
        self._client = client

    def _get_client(self) -> anthropic.AsyncAnthropic:
        """Create the API client on first use; a missing key blocks the call."""
        if self._client is None:
            if not self.settings.anthropic_api_key:
                raise ConfigurationError(
                    "Anthropic API key is not configured. Set ANTHROPIC_API_KEY."
                )
            self._client = anthropic.AsyncAnthropic(api_key=self.settings.anthropic_api_key)
        return self._client

    @staticmethod
    def build_prompt(text: str, tone: ToneType) -> str:
        """Format the user turn sent with the system instruction."""
        return f"Current Tone Context: {ToneType(tone).value}\n\nInput Text: {text}"

    async def _complete(self, system: str, content: str, temperature: float) -> str:
        client = self._get_client()
        try:
            response = await client.messages.create(
                model=self.model,
                max_tokens=self.settings.transform_max_tokens,
                temperature=temperature,
                system=system,
                messages=[{"role": "user", "content": content}]
            )
        except anthropic.APIError as e:
            logger.error(f"Transform service error: {e}")
            raise ServiceError(getattr(e, "message", None) or str(e)) from e

        # Concatenate text blocks; other block types are ignored
        return "".join(
            block.text for block in response.content if block.type == "text"
        ).strip()

    async def transform(self, text: str, tone: ToneType) -> str:
        """
        Polish text in the requested tone.

        Args:
            text: Informal English or Roman Urdu input
            tone: Target tone preset

        Returns:
            The polished English text

        Raises:
            ConfigurationError: if no API key is configured
            ServiceError: if the call fails or returns no text
        """
        result = await self._complete(
            self.SYSTEM_INSTRUCTION,
            self.build_prompt(text, tone),
            self.settings.transform_temperature,
        )
        if not result:
            raise ServiceError("No response received.")
        return result

    async def variations(self, text: str) -> list[str]:
        """
        Suggest up to three stylistic alternates for a polished text.

        Variations are advisory: failures are logged and yield an
        empty list. A missing API key still raises ConfigurationError.
        """
        try:
            result = await self._complete(
                self.VARIATION_INSTRUCTION,
                self.VARIATION_PROMPT.format(text=text),
                self.settings.variation_temperature,
            )
        except ServiceError as e:
            logger.warning(f"Variation request failed: {e}")
            return []

        parts = [part.strip() for part in result.split(self.VARIATION_DELIMITER)]
        return [part for part in parts if part][: self.MAX_VARIATIONS]
