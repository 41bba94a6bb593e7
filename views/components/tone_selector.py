"""
Tone selector component.
"""

import streamlit as st
from typing import Callable

from models.conversion import ToneType, TONES


def render_tone_selector(
    current_tone: ToneType,
    on_select: Callable[[ToneType], None],
):
    """
    Render the tone presets as a horizontal radio group.

    Args:
        current_tone: Currently selected tone
        on_select: Callback when the tone changes
    """
    st.markdown("**Tone**")
    selected = st.radio(
        "Tone",
        options=TONES,
        index=TONES.index(current_tone) if current_tone in TONES else 0,
        format_func=lambda tone: tone.value,
        horizontal=True,
        label_visibility="collapsed",
    )
    if selected != current_tone:
        on_select(selected)
