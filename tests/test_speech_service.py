"""Tests for SpeechService."""

from __future__ import annotations

import asyncio
import base64
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from config.settings import get_settings
from services.errors import ConfigurationError, ServiceError
from services.speech_service import SpeechService


def _response(data) -> SimpleNamespace:  # noqa: ANN001
    part = SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type="audio/L16;rate=24000"))
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


def _client(response=None, error: Exception | None = None) -> MagicMock:  # noqa: ANN001
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response, side_effect=error)
    return client


def test_inline_bytes_are_base64_encoded() -> None:
    pcm = b"\x00\x00\xff\x7f"
    service = SpeechService(client=_client(_response(pcm)))

    payload = asyncio.run(service.synthesize("Hello there."))

    assert base64.b64decode(payload) == pcm


def test_string_payload_passes_through() -> None:
    service = SpeechService(client=_client(_response("AAD/fw==")))

    assert asyncio.run(service.synthesize("Hello there.")) == "AAD/fw=="


def test_request_asks_for_audio_with_voice_and_instruction() -> None:
    client = _client(_response(b"\x00\x00"))
    service = SpeechService(client=client)

    asyncio.run(service.synthesize("Hello there."))

    kwargs = client.aio.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-2.5-flash-preview-tts"
    assert kwargs["contents"] == "Say clearly and naturally: Hello there."
    config = kwargs["config"]
    assert config.response_modalities == ["AUDIO"]
    assert config.speech_config.voice_config.prebuilt_voice_config.voice_name == "Kore"


def test_default_audio_format() -> None:
    service = SpeechService(client=_client())

    assert service.sample_rate == 24000
    assert service.channels == 1


def test_missing_audio_is_service_error() -> None:
    empty = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[]))])
    service = SpeechService(client=_client(empty))

    with pytest.raises(ServiceError) as excinfo:
        asyncio.run(service.synthesize("Hello there."))
    assert str(excinfo.value) == "No audio data received."


def test_transport_failure_is_service_error() -> None:
    service = SpeechService(client=_client(error=httpx.ConnectError("unreachable")))

    with pytest.raises(ServiceError) as excinfo:
        asyncio.run(service.synthesize("Hello there."))
    assert excinfo.value.user_message.startswith("Speech generation failed")


def test_missing_key_is_configuration_error(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setenv("GOOGLE_API_KEY", "")
    get_settings.cache_clear()
    service = SpeechService()

    with pytest.raises(ConfigurationError):
        asyncio.run(service.synthesize("Hello there."))
