"""
Primitive kind and template

A template is the fixed, ordered schema of a primitive kind: its
parameters, its input and output ports and the catalog metadata shown by
the primitive library.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from defi_composer.shared.domain.value_objects.resource_type import ResourceType
from defi_composer.features.primitives.domain.parameter import ParameterDefinition


class PrimitiveKind(Enum):
    """Closed set of DeFi building blocks."""
    LENDING_POOL = "lendingPool"
    AMM_POOL = "ammPool"
    STAKING = "staking"
    VAULT = "vault"

    @classmethod
    def from_string(cls, value: str) -> Optional['PrimitiveKind']:
        """Case-insensitive lookup by kind id; None if unknown."""
        value_lower = value.lower()
        for kind in cls:
            if kind.value.lower() == value_lower:
                return kind
        return None


@dataclass(frozen=True)
class PortSchema:
    """Port entry of a template."""
    resource_type: ResourceType
    label: str


@dataclass(frozen=True)
class PrimitiveTemplate:
    """Schema for a primitive kind"""
    kind: PrimitiveKind
    name: str  # Display name, becomes the primitive's label
    description: str = ""
    category: str = ""  # UI grouping only
    parameters: Tuple[ParameterDefinition, ...] = ()
    inputs: Tuple[PortSchema, ...] = ()
    outputs: Tuple[PortSchema, ...] = ()
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def get_parameter(self, parameter_id: str) -> Optional[ParameterDefinition]:
        for parameter in self.parameters:
            if parameter.id == parameter_id:
                return parameter
        return None

    def parameter_ids(self) -> Tuple[str, ...]:
        return tuple(p.id for p in self.parameters)

    def matches(self, query: str) -> bool:
        """Case-insensitive match on name, kind id, description or tags."""
        query_lower = query.lower()
        return (
            query_lower in self.name.lower()
            or query_lower in self.kind.value.lower()
            or query_lower in self.description.lower()
            or any(query_lower in tag.lower() for tag in self.tags)
        )
