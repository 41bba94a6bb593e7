"""
Controllers layer - orchestration and session state management.
"""

from controllers.polish_controller import AppState, PolishController

__all__ = ["AppState", "PolishController"]
