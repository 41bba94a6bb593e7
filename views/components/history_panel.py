"""
History sidebar component.
"""

import streamlit as st
from datetime import datetime
from typing import Callable

from models.conversion import ConversionRecord


def _preview(text: str, limit: int = 60) -> str:
    text = " ".join(text.split())
    return text if len(text) <= limit else text[: limit - 1] + "…"


def render_history_panel(
    records: list[ConversionRecord],
    on_select: Callable[[str], None],
    on_clear: Callable[[], None],
):
    """
    Render past conversions in the sidebar.

    Args:
        records: History, newest first
        on_select: Callback with the record id when an entry is chosen
        on_clear: Callback when the user clears the history
    """
    with st.sidebar:
        st.markdown("### History")

        if not records:
            st.caption("No conversions yet.")
            return

        for record in records:
            when = datetime.fromtimestamp(record.timestamp / 1000).strftime("%b %d, %H:%M")
            st.caption(f"{record.tone.value} · {when}")
            if st.button(
                _preview(record.output),
                key=f"history_{record.id}",
                help=record.input,
                use_container_width=True,
            ):
                on_select(record.id)
                st.rerun()

        st.markdown("---")
        if st.button("Clear History", type="secondary", use_container_width=True):
            on_clear()
            st.rerun()
