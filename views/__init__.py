"""
Views layer - Streamlit UI rendering.
"""

from views.polish_view import PolishView

__all__ = ["PolishView"]
