"""
Speech Service - text-to-speech through the Gemini TTS model.

The model answers with raw 16-bit little-endian PCM (24 kHz, mono).
The service hands that back as a base64 string; decoding and WAV
packaging live in services.audio_codec.

This service is pure Python with no Streamlit dependencies.
"""

import base64
import logging
from typing import Optional

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from config.settings import get_settings
from services.errors import ConfigurationError, ServiceError

logger = logging.getLogger(__name__)


class SpeechService:
    """Service for speech synthesis."""

    def __init__(self, client: Optional[genai.Client] = None):
        settings = get_settings()
        self.settings = settings
        self.model = settings.tts_model
        self.voice = settings.tts_voice
        self.sample_rate = settings.tts_sample_rate
        self.channels = settings.tts_channels
        self._client = client

    def _get_client(self) -> genai.Client:
        """Create the API client on first use; a missing key blocks the call."""
        if self._client is None:
            if not self.settings.google_api_key:
                raise ConfigurationError(
                    "Google API key is not configured. Set GOOGLE_API_KEY."
                )
            self._client = genai.Client(api_key=self.settings.google_api_key)
        return self._client

    def build_prompt(self, text: str) -> str:
        """Prefix the delivery instruction, if one is configured."""
        instruction = self.settings.tts_delivery_instruction.strip()
        return f"{instruction}: {text}" if instruction else text

    def _speech_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_modalities=["AUDIO"],
            speech_config=types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(
                        voice_name=self.voice,
                    )
                )
            ),
        )

    async def synthesize(self, text: str) -> str:
        """
        Convert text to speech.

        Args:
            text: Text to speak

        Returns:
            Base64 encoded raw PCM audio

        Raises:
            ConfigurationError: if no API key is configured
            ServiceError: if the call fails or returns no audio
        """
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=self.build_prompt(text),
                config=self._speech_config(),
            )
        except (genai_errors.APIError, httpx.HTTPError) as e:
            logger.error(f"Speech service error: {e}")
            raise ServiceError(f"Speech generation failed: {e}") from e

        payload = self._extract_audio(response)
        if not payload:
            raise ServiceError("No audio data received.")
        if isinstance(payload, (bytes, bytearray)):
            return base64.b64encode(bytes(payload)).decode("ascii")
        return payload

    @staticmethod
    def _extract_audio(response: object) -> bytes | str | None:
        """Pull the first inline audio part out of a response."""
        for candidate in getattr(response, "candidates", None) or []:
            content = getattr(candidate, "content", None)
            for part in getattr(content, "parts", None) or []:
                inline = getattr(part, "inline_data", None)
                if inline is not None and getattr(inline, "data", None):
                    return inline.data
        return None
