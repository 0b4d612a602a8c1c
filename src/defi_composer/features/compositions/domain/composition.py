"""
Composition entity

The full graph being edited: primitives in insertion order plus the
connections between their ports.

A Composition is an immutable snapshot. The with_*/without_* helpers
return a new snapshot and never touch the receiver, so a reader holding
a snapshot never observes a partially applied change. Each snapshot owns
read-only copies of its primitive and connection mappings.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from functools import cached_property
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple
import uuid

from defi_composer.features.connections.domain.connection import Connection
from defi_composer.features.primitives.domain.port import Port
from defi_composer.features.primitives.domain.primitive import Primitive

DEFAULT_NAME = "Untitled Composition"
DEFAULT_DESCRIPTION = "A DeFi composition"


@dataclass(frozen=True)
class Composition:
    """
    Composition entity.

    Invariant: every connection's endpoints reference ports of primitives
    in this composition (removal of a primitive cascades to its
    connections).
    """
    id: str
    name: str
    description: str = ""
    primitives: Mapping[str, Primitive] = field(default_factory=dict)
    connections: Mapping[str, Connection] = field(default_factory=dict)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        object.__setattr__(self, "primitives", MappingProxyType(dict(self.primitives)))
        object.__setattr__(self, "connections", MappingProxyType(dict(self.connections)))

    @cached_property
    def port_index(self) -> Mapping[str, Tuple[Primitive, Port]]:
        """Port id -> (owning primitive, port), derived once per snapshot."""
        index = {}
        for primitive in self.primitives.values():
            for port in primitive.ports():
                index[port.id] = (primitive, port)
        return MappingProxyType(index)

    def find_output(self, port_id: str) -> Optional[Tuple[Primitive, Port]]:
        entry = self.port_index.get(port_id)
        if entry and entry[1].is_output():
            return entry
        return None

    def find_input(self, port_id: str) -> Optional[Tuple[Primitive, Port]]:
        entry = self.port_index.get(port_id)
        if entry and entry[1].is_input():
            return entry
        return None

    def get_primitive(self, primitive_id: str) -> Optional[Primitive]:
        return self.primitives.get(primitive_id)

    def has_connection(self, source_port_id: str, target_port_id: str) -> bool:
        return any(c.endpoints == (source_port_id, target_port_id) for c in self.connections.values())

    def connections_touching(self, primitive_id: str) -> List[Connection]:
        """Connections whose source or target port belongs to the primitive."""
        primitive = self.primitives.get(primitive_id)
        if primitive is None:
            return []
        port_ids = set(primitive.port_ids())
        return [
            c for c in self.connections.values()
            if c.source_port_id in port_ids or c.target_port_id in port_ids
        ]

    def with_primitive(self, primitive: Primitive) -> 'Composition':
        """Insert or replace a primitive, keeping insertion order for replacements."""
        primitives = dict(self.primitives)
        primitives[primitive.id] = primitive
        return replace(self, primitives=primitives, updated_at=datetime.now())

    def without_primitive(self, primitive_id: str) -> 'Composition':
        """Remove a primitive and every connection touching its ports."""
        if primitive_id not in self.primitives:
            return self
        dropped = {c.id for c in self.connections_touching(primitive_id)}
        primitives = {pid: p for pid, p in self.primitives.items() if pid != primitive_id}
        connections = {cid: c for cid, c in self.connections.items() if cid not in dropped}
        return replace(self, primitives=primitives, connections=connections, updated_at=datetime.now())

    def with_connection(self, connection: Connection) -> 'Composition':
        connections = dict(self.connections)
        connections[connection.id] = connection
        return replace(self, connections=connections, updated_at=datetime.now())

    def without_connection(self, connection_id: str) -> 'Composition':
        if connection_id not in self.connections:
            return self
        connections = {cid: c for cid, c in self.connections.items() if cid != connection_id}
        return replace(self, connections=connections, updated_at=datetime.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "primitives": {pid: p.to_dict() for pid, p in self.primitives.items()},
            "connections": {cid: c.to_dict() for cid, c in self.connections.items()},
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    def __str__(self) -> str:
        return (
            f"Composition('{self.name}', {len(self.primitives)} primitives, "
            f"{len(self.connections)} connections)"
        )


def create_composition(name: Optional[str] = None, description: Optional[str] = None) -> Composition:
    """Create an empty composition; None falls back to the default name and description."""
    name = DEFAULT_NAME if name is None else name
    description = DEFAULT_DESCRIPTION if description is None else description
    if not name.strip():
        raise ValueError("Composition name cannot be empty")
    now = datetime.now()
    return Composition(
        id=str(uuid.uuid4()),
        name=name.strip(),
        description=description,
        created_at=now,
        updated_at=now,
    )
