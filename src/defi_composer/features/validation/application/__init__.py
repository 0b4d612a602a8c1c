"""
Application layer for validation feature.
"""
from defi_composer.features.validation.application.composition_validator import (
    CompositionValidator,
    validate_composition,
)

__all__ = [
    'CompositionValidator',
    'validate_composition',
]
