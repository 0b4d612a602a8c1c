"""
Primitive entity

One DeFi building block placed in a composition (lending pool, AMM pool,
staking pool, vault).

Primitives are immutable snapshots: every change produces a new
Primitive through the with_* helpers, which is what lets the
composition store hand out consistent copy-on-write snapshots.
"""
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Tuple

from defi_composer.shared.domain.value_objects.parameter_value import ParameterValue
from defi_composer.shared.domain.value_objects.position import Position
from defi_composer.features.primitives.domain.port import Port
from defi_composer.features.primitives.domain.primitive_template import PrimitiveKind


@dataclass(frozen=True)
class Primitive:
    """
    A primitive has:
    - Identity (id) and kind
    - Position on the canvas (display only)
    - Label and description copied from its template
    - Parameter values keyed by parameter id, in template order
    - Ordered input and output ports, fixed at creation
    """
    id: str
    kind: PrimitiveKind
    position: Position = field(default_factory=Position)
    label: str = ""
    description: str = ""
    parameters: Mapping[str, ParameterValue] = field(default_factory=dict)
    inputs: Tuple[Port, ...] = ()
    outputs: Tuple[Port, ...] = ()

    def __post_init__(self):
        if not self.id:
            raise ValueError("Primitive id cannot be empty")
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def ports(self) -> Iterator[Port]:
        """All ports, inputs first."""
        yield from self.inputs
        yield from self.outputs

    def port_ids(self) -> Tuple[str, ...]:
        return tuple(port.id for port in self.ports())

    def get_output(self, label: str) -> Optional[Port]:
        """Find an output port by its display label"""
        return next((p for p in self.outputs if p.label == label), None)

    def get_input(self, label: str) -> Optional[Port]:
        """Find an input port by its display label"""
        return next((p for p in self.inputs if p.label == label), None)

    def parameter(self, parameter_id: str) -> Optional[ParameterValue]:
        return self.parameters.get(parameter_id)

    def value_of(self, parameter_id: str, default: Any = None) -> Any:
        """Raw value of a parameter, or `default` when it is unset."""
        value = self.parameters.get(parameter_id)
        if value is None or value.is_empty():
            return default
        return value.value

    def with_position(self, position: Position) -> 'Primitive':
        return replace(self, position=position)

    def with_parameter(self, value: ParameterValue) -> 'Primitive':
        parameters = dict(self.parameters)
        parameters[value.parameter_id] = value
        return replace(self, parameters=parameters)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "position": self.position.to_dict(),
            "label": self.label,
            "description": self.description,
            "parameters": {pid: value.to_dict() for pid, value in self.parameters.items()},
            "inputs": [port.to_dict() for port in self.inputs],
            "outputs": [port.to_dict() for port in self.outputs],
        }

    def __str__(self) -> str:
        return f"{self.label} ({self.kind.value}, id={self.id})"
