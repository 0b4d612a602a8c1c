"""
Connection entity

Directed edge from one primitive's output port to another primitive's
input port. The resource type is copied from the source port when the
connection is created and is not re-evaluated afterwards.
"""
from dataclasses import dataclass, field
import uuid

from defi_composer.shared.domain.value_objects.resource_type import ResourceType


@dataclass(frozen=True)
class Connection:
    """
    Connection entity - links an output port to an input port.

    Invariants (held when created by the connection resolver):
    - Source and target ports belong to different primitives
    - No two connections share the same (source, target) pair
    - Resource types were compatible at creation time
    """
    source_port_id: str
    target_port_id: str
    resource_type: ResourceType
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        if not self.source_port_id:
            raise ValueError("Source port ID cannot be empty")
        if not self.target_port_id:
            raise ValueError("Target port ID cannot be empty")

    @property
    def endpoints(self):
        """(source port id, target port id) pair used for duplicate detection"""
        return (self.source_port_id, self.target_port_id)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source_port_id": self.source_port_id,
            "target_port_id": self.target_port_id,
            "resource_type": self.resource_type.name,
        }

    def __str__(self) -> str:
        return f"{self.source_port_id} -> {self.target_port_id} [{self.resource_type}]"

    def __repr__(self) -> str:
        return f"Connection(id={self.id}, {self})"
