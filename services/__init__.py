"""
Services layer - pure business logic, no Streamlit dependencies.
"""

from services.transform_service import TransformService
from services.speech_service import SpeechService
from services.recognition_service import RecognitionService, RecognitionEvent
from services.history_service import HistoryService
from services.storage_service import DatabaseStorage, KeyValueStorage
from services.playback_service import (
    PlaybackController,
    PlaybackState,
    BrowserAudioSink,
)

__all__ = [
    "TransformService",
    "SpeechService",
    "RecognitionService",
    "RecognitionEvent",
    "HistoryService",
    "DatabaseStorage",
    "KeyValueStorage",
    "PlaybackController",
    "PlaybackState",
    "BrowserAudioSink",
]
