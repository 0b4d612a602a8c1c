"""
Application layer for compositions feature.
"""
from defi_composer.features.compositions.application.composition_store import CompositionStore

__all__ = [
    'CompositionStore',
]
