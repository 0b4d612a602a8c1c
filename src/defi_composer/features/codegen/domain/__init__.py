"""
Domain layer for code generation feature.
"""
from defi_composer.features.codegen.domain.module_ir import (
    FieldIR,
    FunctionIR,
    ModuleIR,
    ParamIR,
    StatementIR,
    StructIR,
)

__all__ = [
    'FieldIR',
    'FunctionIR',
    'ModuleIR',
    'ParamIR',
    'StatementIR',
    'StructIR',
]
