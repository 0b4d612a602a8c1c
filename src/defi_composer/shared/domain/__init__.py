"""
Shared domain layer.

Contains:
- Composer errors
- Value objects (Position, ResourceType, ParameterValue variants)
"""
from defi_composer.shared.domain.errors import (
    CompositionError,
    UnknownKindError,
    PrimitiveNotFoundError,
    ImmutableFieldError,
    ParameterValueError,
)

__all__ = [
    'CompositionError',
    'UnknownKindError',
    'PrimitiveNotFoundError',
    'ImmutableFieldError',
    'ParameterValueError',
]
