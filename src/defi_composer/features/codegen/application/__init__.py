"""
Application layer for code generation feature.
"""
from defi_composer.features.codegen.application.code_generator import (
    CodeGenerator,
    generate_code,
    module_name_for,
)
from defi_composer.features.codegen.application.move_formatter import MoveFormatter
from defi_composer.features.codegen.application.move_templates import KIND_TEMPLATES, PrimitiveParameters

__all__ = [
    'CodeGenerator',
    'generate_code',
    'module_name_for',
    'MoveFormatter',
    'KIND_TEMPLATES',
    'PrimitiveParameters',
]
