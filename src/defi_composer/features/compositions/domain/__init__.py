"""
Domain layer for compositions feature.
"""
from defi_composer.features.compositions.domain.composition import (
    Composition,
    create_composition,
    DEFAULT_NAME,
    DEFAULT_DESCRIPTION,
)

__all__ = [
    'Composition',
    'create_composition',
    'DEFAULT_NAME',
    'DEFAULT_DESCRIPTION',
]
