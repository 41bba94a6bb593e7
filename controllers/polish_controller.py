"""
Polish Controller - manages the polishing workspace and its state.

This controller handles:
- Session state initialization (one explicit AppState per browser session)
- Coordinating the transform, speech, recognition and history services
- Playback toggling and WAV export
- Converting every service error into a user-visible message

Views only read state through the controller and call its mutation
methods; nothing else touches the history or the playback handle.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

import streamlit as st

from config.settings import get_settings
from models.audio import FloatAudioBuffer
from models.conversion import (
    ConversionRecord,
    ToneType,
    DEFAULT_TONE,
    DEFAULT_RECOGNITION_LANGUAGE,
    RECOGNITION_LANGUAGES,
    get_tone,
    now_ms,
)
from services import audio_codec
from services.errors import (
    CapabilityUnavailableError,
    LinguaFlowError,
    MalformedAudioError,
    PersistenceError,
)
from services.history_service import HistoryService
from services.playback_service import AudioSink, BrowserAudioSink, PlaybackController
from services.recognition_service import RecognitionEvent, RecognitionService
from services.speech_service import SpeechService
from services.storage_service import DatabaseStorage, KeyValueStorage
from services.transform_service import TransformService

logger = logging.getLogger(__name__)

STATE_KEY = "polish"
HISTORY_KEY = "polish_history"
PLAYBACK_KEY = "polish_playback"


@dataclass
class AppState:
    """Everything the polishing page needs to render."""
    input_text: str = ""
    output_text: str = ""
    tone: ToneType = DEFAULT_TONE
    error: Optional[str] = None
    notice: Optional[str] = None
    interim_transcript: str = ""
    recognition_language: str = DEFAULT_RECOGNITION_LANGUAGE
    compare_mode: bool = False
    variations: list[str] = field(default_factory=list)
    pending_download: Optional[tuple[str, bytes]] = None
    audio_key: int = 0
    capability_reported: bool = False


class PolishController:
    """Controller for the polishing workspace."""

    def __init__(
        self,
        session_state=None,
        transform: Optional[TransformService] = None,
        speech: Optional[SpeechService] = None,
        recognition: Optional[RecognitionService] = None,
        storage: Optional[KeyValueStorage] = None,
        sink: Optional[AudioSink] = None,
    ):
        self.settings = get_settings()
        self.session = st.session_state if session_state is None else session_state
        self.transform = transform or TransformService()
        self.speech = speech or SpeechService()
        self.recognition = recognition or RecognitionService()
        self._init_session_state(storage, sink)

    def _init_session_state(self, storage: Optional[KeyValueStorage], sink: Optional[AudioSink]):
        """Initialize session state if not already set."""
        if STATE_KEY not in self.session:
            self.session[STATE_KEY] = AppState()

        if HISTORY_KEY not in self.session:
            history = HistoryService(
                storage or DatabaseStorage(),
                key=self.settings.history_storage_key,
                cap=self.settings.history_cap,
            )
            history.load()
            self.session[HISTORY_KEY] = history

        if PLAYBACK_KEY not in self.session:
            self.session[PLAYBACK_KEY] = PlaybackController(sink or BrowserAudioSink())

    # Session state accessors
    @property
    def state(self) -> AppState:
        return self.session[STATE_KEY]

    @property
    def history(self) -> HistoryService:
        return self.session[HISTORY_KEY]

    @property
    def playback(self) -> PlaybackController:
        return self.session[PLAYBACK_KEY]

    def get_history(self) -> list[ConversionRecord]:
        """Get past conversions, newest first."""
        return self.history.records

    def is_speaking(self) -> bool:
        return self.playback.is_playing

    def get_active_audio(self) -> Optional[FloatAudioBuffer]:
        """Buffer of the playback in progress, for the view to render."""
        handle = self.playback.active_handle
        return getattr(handle, "buffer", None) if handle is not None else None

    def take_error(self) -> Optional[str]:
        """Get the pending error message and clear it."""
        error = self.state.error
        self.state.error = None
        return error

    def take_notice(self) -> Optional[str]:
        """Get the pending notice and clear it."""
        notice = self.state.notice
        self.state.notice = None
        return notice

    def _run(self, coro):
        """Run a service coroutine to completion from the script thread."""
        return asyncio.run(coro)

    # Input editing
    def set_input(self, text: str):
        self.state.input_text = text[: self.settings.max_chars]

    def clear_input(self):
        self.state.input_text = ""
        self.state.interim_transcript = ""

    def set_tone(self, tone: ToneType | str):
        self.state.tone = get_tone(tone)

    def set_recognition_language(self, language: str):
        if language in RECOGNITION_LANGUAGES:
            self.state.recognition_language = language

    def toggle_compare_mode(self):
        self.state.compare_mode = not self.state.compare_mode

    def increment_audio_key(self):
        """Increment audio key to reset the microphone widget."""
        self.state.audio_key += 1

    # Transform
    def convert(self) -> bool:
        """
        Polish the working input in the selected tone.

        On success the output is replaced and a history record is added.

        Returns:
            True if a new output was produced
        """
        state = self.state
        text = state.input_text
        if not text.strip():
            return False

        state.error = None
        tone = state.tone
        try:
            result = self._run(self.transform.transform(text, tone))
        except LinguaFlowError as e:
            state.error = e.user_message
            return False

        state.output_text = result
        state.variations = []
        state.pending_download = None

        record = ConversionRecord.create(text, result, tone)
        try:
            self.history.append(record)
        except PersistenceError as e:
            # The record stays in the in-memory history
            state.notice = e.user_message
        logger.info(f"Converted {len(text)} chars in tone {tone.value}")
        return True

    def generate_variations(self) -> bool:
        """Ask for alternate phrasings of the current output."""
        state = self.state
        if not state.output_text:
            return False
        try:
            state.variations = self._run(self.transform.variations(state.output_text))
        except LinguaFlowError as e:
            state.error = e.user_message
            return False
        if not state.variations:
            state.notice = "No variations available right now."
        return bool(state.variations)

    def apply_variation(self, index: int):
        """Promote a variation to the current output."""
        state = self.state
        if 0 <= index < len(state.variations):
            state.output_text = state.variations[index]
            state.pending_download = None

    # Audio
    def speak(self) -> bool:
        """
        Toggle speech playback for the current output.

        Stops playback if audio is playing; otherwise synthesizes,
        decodes and starts it.

        Returns:
            True if audio is playing afterwards
        """
        state = self.state
        if not state.output_text:
            return False

        if self.playback.is_playing:
            self.playback.stop()
            return False

        try:
            payload = self._run(self.speech.synthesize(state.output_text))
            buffer = audio_codec.decode(payload, self.speech.sample_rate, self.speech.channels)
            self.playback.play(buffer)
        except MalformedAudioError as e:
            logger.error(f"Audio generation failed: {e}")
            state.error = MalformedAudioError.default_message
            return False
        except LinguaFlowError as e:
            logger.error(f"Audio generation failed: {e}")
            state.error = e.user_message
            return False
        return self.playback.is_playing

    def stop_speaking(self):
        self.playback.stop()

    def prepare_download(self) -> bool:
        """
        Synthesize the current output and package it as a WAV file.

        The result is left in state.pending_download as (filename, bytes).
        """
        state = self.state
        if not state.output_text:
            return False

        try:
            payload = self._run(self.speech.synthesize(state.output_text))
            pcm = audio_codec.decode_base64(payload)
            audio_codec.validate_frames(pcm, self.speech.channels)
            wav = audio_codec.build_wav(pcm, self.speech.sample_rate, self.speech.channels)
        except LinguaFlowError as e:
            logger.error(f"Download failed: {e}")
            state.error = "Download failed."
            return False

        state.pending_download = (f"polished_speech_{now_ms()}.wav", wav)
        return True

    # History
    def use_history_item(self, record_id: str) -> bool:
        """Load a past conversion into the workspace without reordering history."""
        record = self.history.restore(record_id)
        if record is None:
            return False
        state = self.state
        state.input_text = record.input
        state.output_text = record.output
        state.tone = record.tone
        state.variations = []
        state.pending_download = None
        return True

    def clear_history(self):
        try:
            self.history.clear()
        except PersistenceError as e:
            self.state.notice = e.user_message

    # Dictation
    def handle_recognition_event(self, event: RecognitionEvent):
        """Final text joins the working input; interim text is only previewed."""
        state = self.state
        if event.is_final:
            joined = f"{state.input_text} {event.text}".strip()
            state.input_text = joined[: self.settings.max_chars]
            state.interim_transcript = ""
        else:
            state.interim_transcript = event.text

    def consume_recognition(self, events: Iterable[RecognitionEvent]):
        for event in events:
            self.handle_recognition_event(event)

    def transcribe(self, audio_bytes: bytes) -> bool:
        """
        Dictate from a recorded clip.

        Returns:
            True if any text was recognized
        """
        state = self.state
        before = state.input_text
        try:
            self.consume_recognition(
                self.recognition.events(audio_bytes, state.recognition_language)
            )
        except LinguaFlowError as e:
            state.error = e.user_message
            return False
        finally:
            state.interim_transcript = ""

        if state.input_text == before:
            state.notice = "Could not understand audio. Please try again."
            return False
        return True

    def report_error(self, error: LinguaFlowError):
        """
        Surface an error raised outside the controller, e.g. by a view.

        A missing capability is not an action failure: it becomes a
        notice and is reported only once per session.
        """
        state = self.state
        if isinstance(error, CapabilityUnavailableError):
            if state.capability_reported:
                return
            state.capability_reported = True
            state.notice = error.user_message
            return
        state.error = error.user_message
