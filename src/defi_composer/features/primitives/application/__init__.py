"""
Application layer for primitives feature.
"""
from defi_composer.features.primitives.application.primitive_registry import (
    PrimitiveRegistry,
    get_primitive_registry,
)

__all__ = [
    'PrimitiveRegistry',
    'get_primitive_registry',
]
