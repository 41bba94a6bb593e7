"""
Reusable UI components.
"""

from views.components.audio import render_mic_input, render_audio_playback, render_wav_download
from views.components.history_panel import render_history_panel
from views.components.tone_selector import render_tone_selector

__all__ = [
    # Audio
    "render_mic_input",
    "render_audio_playback",
    "render_wav_download",
    # Workspace
    "render_history_panel",
    "render_tone_selector",
]
