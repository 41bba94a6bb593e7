"""
Audio UI components for dictation, playback and WAV export.
"""

import streamlit as st
from typing import Optional

from models.audio import FloatAudioBuffer
from services.errors import CapabilityUnavailableError


def render_mic_input(audio_key: int) -> Optional[bytes]:
    """
    Render the microphone recorder.

    Args:
        audio_key: Unique key for the audio input widget

    Returns:
        Recorded WAV bytes if a clip was captured, None otherwise

    Raises:
        CapabilityUnavailableError: if this Streamlit build cannot record
    """
    if not hasattr(st, "audio_input"):
        raise CapabilityUnavailableError()

    audio = st.audio_input(
        "Dictate",
        key=f"audio_input_{audio_key}",
        label_visibility="collapsed"
    )
    if audio:
        return audio.read()
    return None


def render_audio_playback(buffer: Optional[FloatAudioBuffer]):
    """
    Play decoded audio in the browser.

    Args:
        buffer: Float samples to play (first channel is rendered)
    """
    if buffer is not None and buffer.frame_count:
        st.audio(buffer.channels[0], sample_rate=buffer.sample_rate, autoplay=True)


def render_wav_download(pending: Optional[tuple[str, bytes]]):
    """
    Render a download button for a prepared WAV file.

    Args:
        pending: (filename, wav_bytes) or None
    """
    if pending:
        filename, data = pending
        st.download_button(
            "Save WAV",
            data=data,
            file_name=filename,
            mime="audio/wav",
            use_container_width=True,
        )
