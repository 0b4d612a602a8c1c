"""
Port entity

Typed connection point on a primitive. Ports are allocated once, when the
primitive is instantiated, and never change for the primitive's lifetime.
"""
from dataclasses import dataclass

from defi_composer.shared.domain.value_objects.resource_type import ResourceType
from defi_composer.features.primitives.domain.port_direction import PortDirection


@dataclass(frozen=True)
class Port:
    """
    A port has:
    - id: Unique identifier across the composition
    - primitive_id: Owning primitive
    - direction: INPUT or OUTPUT
    - resource_type: Tag of what flows through it ("asset", "stakeReceipt")
    - label: Display label ("Deposit", "Loan")
    """
    id: str
    primitive_id: str
    direction: PortDirection
    resource_type: ResourceType
    label: str = ""

    def __post_init__(self):
        if not self.id:
            raise ValueError("Port id cannot be empty")
        if not self.primitive_id:
            raise ValueError("Port primitive_id cannot be empty")

    def is_input(self) -> bool:
        return self.direction == PortDirection.INPUT

    def is_output(self) -> bool:
        return self.direction == PortDirection.OUTPUT

    def can_connect_to(self, other: 'Port') -> bool:
        """
        Domain rule: an output may feed an input of a compatible resource type.
        """
        if self.is_output() and other.is_input():
            return self.resource_type.is_compatible_with(other.resource_type)
        return False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "primitive_id": self.primitive_id,
            "direction": self.direction.value,
            "resource_type": self.resource_type.name,
            "label": self.label,
        }

    def __str__(self) -> str:
        return f"Port(label='{self.label}', type='{self.resource_type.name}', direction='{self.direction.value}')"
