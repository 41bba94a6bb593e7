"""
Polish View - UI for the text polishing workspace.

This view handles all rendering for the polishing assistant.
It delegates business logic to the PolishController.
"""

import streamlit as st

from controllers.polish_controller import PolishController
from models.conversion import RECOGNITION_LANGUAGES
from services.errors import CapabilityUnavailableError
from views.components.audio import render_audio_playback, render_mic_input, render_wav_download
from views.components.history_panel import render_history_panel
from views.components.tone_selector import render_tone_selector


class PolishView:
    """View for the polishing workspace."""

    def __init__(self):
        self.controller = PolishController()

    def render(self):
        """Main render method."""
        st.title("LinguaFlow")
        st.markdown("Turn informal English or Roman Urdu into polished English.")

        render_history_panel(
            self.controller.get_history(),
            on_select=self.controller.use_history_item,
            on_clear=self.controller.clear_history,
        )

        # Filled last so messages raised while rendering show on this run
        message_area = st.container()

        input_col, output_col = st.columns(2)
        with input_col:
            self._render_input()
        with output_col:
            self._render_output()

        with message_area:
            self._render_messages()

    def _render_messages(self):
        error = self.controller.take_error()
        if error:
            st.error(error)
        notice = self.controller.take_notice()
        if notice:
            st.warning(notice)

    def _render_input(self):
        """Render the text box, dictation controls and convert button."""
        state = self.controller.state
        max_chars = self.controller.settings.max_chars

        st.markdown("### Your Text")
        text = st.text_area(
            "Input",
            value=state.input_text,
            max_chars=max_chars,
            height=220,
            placeholder="Type or dictate in English or Roman Urdu...",
            label_visibility="collapsed",
        )
        if text != state.input_text:
            self.controller.set_input(text)

        if state.interim_transcript:
            st.caption(f"_{state.interim_transcript}_")

        self._render_dictation()

        render_tone_selector(state.tone, on_select=self.controller.set_tone)

        convert_col, clear_col = st.columns([3, 1])
        with convert_col:
            if st.button("Polish", type="primary", use_container_width=True,
                         disabled=not state.input_text.strip()):
                with st.spinner("Polishing..."):
                    self.controller.convert()
                st.rerun()
        with clear_col:
            if st.button("Clear", use_container_width=True, disabled=not state.input_text):
                self.controller.clear_input()
                st.rerun()

    def _render_dictation(self):
        """Render the language picker and microphone recorder."""
        state = self.controller.state
        with st.expander("Dictate"):
            codes = list(RECOGNITION_LANGUAGES.keys())
            language = st.selectbox(
                "Recognition language",
                options=codes,
                index=codes.index(state.recognition_language),
                format_func=lambda code: RECOGNITION_LANGUAGES[code],
                key="recognition_language",
            )
            if language != state.recognition_language:
                self.controller.set_recognition_language(language)

            try:
                audio_bytes = render_mic_input(state.audio_key)
            except CapabilityUnavailableError as e:
                self.controller.report_error(e)
                st.caption("Type your text instead.")
                return

            if audio_bytes:
                with st.spinner("Transcribing..."):
                    self.controller.transcribe(audio_bytes)
                self.controller.increment_audio_key()
                st.rerun()

    def _render_output(self):
        """Render the polished result and its audio actions."""
        state = self.controller.state

        st.markdown("### Polished")
        if not state.output_text:
            st.caption("Your polished text will appear here.")
            return

        st.checkbox(
            "Compare with original",
            value=state.compare_mode,
            key="compare_mode",
            on_change=self.controller.toggle_compare_mode,
        )

        if state.compare_mode:
            original_col, refined_col = st.columns(2)
            with original_col:
                st.caption("Original")
                st.markdown(f"_{state.input_text}_")
            with refined_col:
                st.caption("Refined")
                st.markdown(state.output_text)
        else:
            st.info(state.output_text)

        st.code(state.output_text, language=None, wrap_lines=True)

        listen_col, export_col, vary_col = st.columns(3)
        with listen_col:
            label = "Stop" if self.controller.is_speaking() else "Listen"
            if st.button(label, use_container_width=True):
                with st.spinner("Generating audio..."):
                    self.controller.speak()
                st.rerun()
        with export_col:
            if st.button("Export WAV", use_container_width=True):
                with st.spinner("Preparing audio..."):
                    self.controller.prepare_download()
                st.rerun()
        with vary_col:
            if st.button("Variations", use_container_width=True):
                with st.spinner("Finding alternatives..."):
                    self.controller.generate_variations()
                st.rerun()

        render_audio_playback(self.controller.get_active_audio())
        render_wav_download(state.pending_download)
        self._render_variations()

    def _render_variations(self):
        variations = self.controller.state.variations
        if not variations:
            return
        st.markdown("**Variations**")
        for index, variation in enumerate(variations):
            st.markdown(variation)
            if st.button("Use this", key=f"variation_{index}"):
                self.controller.apply_variation(index)
                st.rerun()
