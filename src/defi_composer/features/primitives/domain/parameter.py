"""
Parameter definitions

Schema of a primitive parameter as declared by its kind's template.
"""
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union

from defi_composer.shared.domain.value_objects.parameter_value import (
    ParameterType,
    ParameterValue,
    coerce_parameter_value,
)


@dataclass(frozen=True)
class ParameterConstraints:
    """Optional bounds on a parameter value."""
    minimum: Optional[Union[int, float]] = None
    maximum: Optional[Union[int, float]] = None
    allowed_values: Tuple[str, ...] = ()
    required: bool = False


@dataclass(frozen=True)
class ParameterDefinition:
    """
    Parameter schema entry.

    Attributes:
        id: Parameter identifier ("interestRate")
        name: Display name
        type: Declared ParameterType
        default: Default raw value copied into new primitives
        description: Help text
        constraints: Optional bounds
        unit: Unit of the value used by code generation ("%", "days")
    """
    id: str
    name: str
    type: ParameterType
    default: Any
    description: str = ""
    constraints: ParameterConstraints = field(default_factory=ParameterConstraints)
    unit: str = ""

    def coerce(self, raw: Any) -> ParameterValue:
        """Convert a raw value to this parameter's value variant."""
        return coerce_parameter_value(
            self.type,
            self.id,
            raw,
            allowed_values=self.constraints.allowed_values or None,
        )

    def default_value(self) -> ParameterValue:
        return self.coerce(self.default)

    @property
    def required(self) -> bool:
        return self.constraints.required
