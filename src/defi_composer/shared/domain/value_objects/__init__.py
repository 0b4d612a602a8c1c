"""
Shared value objects.
"""
from defi_composer.shared.domain.value_objects.position import Position
from defi_composer.shared.domain.value_objects.resource_type import (
    ResourceType,
    are_compatible,
    get_resource_type,
)
from defi_composer.shared.domain.value_objects.parameter_value import (
    ParameterType,
    ParameterValue,
    NumberValue,
    TextValue,
    BooleanValue,
    EnumValue,
    AssetValue,
    coerce_parameter_value,
)

__all__ = [
    'Position',
    'ResourceType',
    'are_compatible',
    'get_resource_type',
    'ParameterType',
    'ParameterValue',
    'NumberValue',
    'TextValue',
    'BooleanValue',
    'EnumValue',
    'AssetValue',
    'coerce_parameter_value',
]
