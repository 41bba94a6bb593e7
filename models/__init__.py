"""
Models - domain models, audio value types and database entities.
"""

from models.conversion import (
    ConversionRecord,
    ToneType,
    TONES,
    DEFAULT_TONE,
    RECOGNITION_LANGUAGES,
    DEFAULT_RECOGNITION_LANGUAGE,
)
from models.audio import FloatAudioBuffer, WavHeader

__all__ = [
    # Conversion domain
    "ConversionRecord",
    "ToneType",
    "TONES",
    "DEFAULT_TONE",
    "RECOGNITION_LANGUAGES",
    "DEFAULT_RECOGNITION_LANGUAGE",
    # Audio
    "FloatAudioBuffer",
    "WavHeader",
]
