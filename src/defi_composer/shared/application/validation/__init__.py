"""
Shared field checks used by settings and the composition validator.
"""
from .validation_framework import (
    CheckResult,
    Validator,
    RequiredValidator,
    RangeValidator,
    PatternValidator,
    ChoicesValidator,
    TypeValidator,
    validate_field,
)

__all__ = [
    'CheckResult',
    'Validator',
    'RequiredValidator',
    'RangeValidator',
    'PatternValidator',
    'ChoicesValidator',
    'TypeValidator',
    'validate_field',
]
