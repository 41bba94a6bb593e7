"""
LinguaFlow - Home Page

A text polishing assistant: type or dictate informal English or
Roman Urdu, pick a tone, and get polished English back, with speech
playback, WAV export and a short local history.
"""

import logging

import streamlit as st

# Page configuration (must be first Streamlit command)
st.set_page_config(
    page_title="LinguaFlow",
    page_icon="✨",
    layout="wide"
)

from config.database import init_db
from config.settings import get_settings
from views.polish_view import PolishView

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

init_db()

view = PolishView()
view.render()
