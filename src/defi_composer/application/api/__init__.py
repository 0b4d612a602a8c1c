"""
Application API Layer

Provides a unified facade for all composition operations.
Used by the CLI and by view layers.
"""
from .composition_engine import CompositionEngine

__all__ = [
    "CompositionEngine",
]
