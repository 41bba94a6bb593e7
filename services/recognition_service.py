"""
Recognition Service - turns recorded microphone audio into dictation events.

The browser records a WAV clip; this service runs it through the Google
Web Speech recognizer (speech_recognition) segment by segment and yields
RecognitionEvent objects lazily:

- interim events carry the transcript recognized so far
- one final event carries the complete transcript

Consumers append final text to the working input and show interim text
as an ephemeral preview.

This service is pure Python with no Streamlit dependencies.
"""

import io
import logging
from dataclasses import dataclass
from typing import Iterator

import speech_recognition as sr

from models.conversion import DEFAULT_RECOGNITION_LANGUAGE
from services.errors import MalformedAudioError, ServiceError

logger = logging.getLogger(__name__)

DEFAULT_SEGMENT_SECONDS = 15.0


@dataclass(frozen=True)
class RecognitionEvent:
    text: str
    is_final: bool = False


class RecognitionService:
    """Service for speech-to-text dictation."""

    def __init__(self, segment_seconds: float = DEFAULT_SEGMENT_SECONDS):
        self.recognizer = sr.Recognizer()
        self.segment_seconds = segment_seconds

    def events(
        self,
        audio_bytes: bytes,
        language: str = DEFAULT_RECOGNITION_LANGUAGE,
    ) -> Iterator[RecognitionEvent]:
        """
        Recognize a WAV recording.

        Args:
            audio_bytes: Recorded audio (WAV format)
            language: BCP-47 recognition language, e.g. 'en-US' or 'ur-PK'

        Yields:
            Interim events per recognized segment, then one final event
            (only when something was understood)

        Raises:
            MalformedAudioError: if the recording cannot be read
            ServiceError: if the recognizer service cannot be reached
        """
        pieces: list[str] = []
        for segment in self._segments(audio_bytes):
            text = self._recognize(segment, language)
            if not text:
                continue
            pieces.append(text)
            yield RecognitionEvent(text=" ".join(pieces), is_final=False)

        if pieces:
            yield RecognitionEvent(text=" ".join(pieces), is_final=True)

    def transcribe(self, audio_bytes: bytes, language: str = DEFAULT_RECOGNITION_LANGUAGE) -> str:
        """Recognize a recording and return only the final transcript."""
        final = ""
        for event in self.events(audio_bytes, language):
            if event.is_final:
                final = event.text
        return final

    def _segments(self, audio_bytes: bytes) -> Iterator[sr.AudioData]:
        try:
            with sr.AudioFile(io.BytesIO(audio_bytes)) as source:
                while True:
                    segment = self.recognizer.record(source, duration=self.segment_seconds)
                    if not segment.frame_data:
                        break
                    yield segment
        except (ValueError, EOFError, OSError) as e:
            logger.error(f"Unreadable recording: {e}")
            raise MalformedAudioError("Recording could not be read.") from e

    def _recognize(self, segment: sr.AudioData, language: str) -> str:
        try:
            result = self.recognizer.recognize_google(segment, language=language, show_all=True)
        except sr.UnknownValueError:
            logger.warning("Could not understand audio")
            return ""
        except sr.RequestError as e:
            logger.error(f"Speech recognition service error: {e}")
            raise ServiceError(f"Speech recognition failed: {e}") from e

        # show_all returns [] when nothing was understood
        if not isinstance(result, dict):
            return ""
        alternatives = result.get("alternative") or []
        if not alternatives:
            return ""
        return str(alternatives[0].get("transcript", "")).strip()
