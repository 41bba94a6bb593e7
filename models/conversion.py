"""
Conversion models - Pydantic models for the polishing domain.

A ConversionRecord is created once, when a transform succeeds, and is
never mutated afterwards. Records are serialized to JSON for the
persisted history.
"""

import threading
import time
from enum import Enum

from pydantic import BaseModel, Field


class ToneType(str, Enum):
    """Style presets understood by the transform engine."""
    NORMAL = "Normal"
    MODERATE = "Moderate"
    FLUENT = "Fluent"
    HIGH_LEVEL = "High-Level"
    PROFESSIONAL = "Professional"
    CREATIVE = "Creative"


TONES = [tone for tone in ToneType]
DEFAULT_TONE = ToneType.PROFESSIONAL

# Languages offered for microphone dictation {code: display_name}
RECOGNITION_LANGUAGES = {
    "en-US": "English (US)",
    "en-GB": "English (UK)",
    "ur-PK": "Urdu / Roman Urdu (Pakistan)",
    "hi-IN": "Hindi (India)",
}
DEFAULT_RECOGNITION_LANGUAGE = "en-US"


_id_lock = threading.Lock()
_last_id = 0


def now_ms() -> int:
    return int(time.time() * 1000)


def next_record_id() -> str:
    """
    Time-based id, strictly increasing within this process.

    Two records created in the same millisecond get consecutive values
    instead of the same one.
    """
    global _last_id
    with _id_lock:
        candidate = now_ms()
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return str(candidate)


class ConversionRecord(BaseModel):
    """One historical input/output pair with metadata."""
    id: str
    timestamp: int = Field(..., description="Creation time, ms since epoch")
    input: str
    output: str
    tone: ToneType

    model_config = {"frozen": True}

    @classmethod
    def create(cls, input_text: str, output_text: str, tone: ToneType) -> "ConversionRecord":
        """Stamp a new record with a fresh id and the current time."""
        return cls(
            id=next_record_id(),
            timestamp=now_ms(),
            input=input_text.strip(),
            output=output_text,
            tone=tone,
        )


def get_tone(label: str) -> ToneType:
    """Resolve a tone label, falling back to the default tone."""
    try:
        return ToneType(label)
    except ValueError:
        return DEFAULT_TONE
