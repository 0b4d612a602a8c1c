"""
Domain Events

Events published by the composition store after each mutation.
Used by view layers to refresh without polling.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional


@dataclass
class DomainEvent:
    """Base class for all domain events"""
    name: ClassVar[str] = "DomainEvent"
    composition_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)


# Primitive Events
@dataclass
class PrimitiveAdded(DomainEvent):
    name: ClassVar[str] = "PrimitiveAdded"


@dataclass
class PrimitiveUpdated(DomainEvent):
    """
    Data fields:
        - id: Primitive ID
        - fields: Names of the changed fields
    """
    name: ClassVar[str] = "PrimitiveUpdated"


@dataclass
class PrimitiveRemoved(DomainEvent):
    """
    Data fields:
        - id: Primitive ID
        - connection_ids: Connections removed with it
    """
    name: ClassVar[str] = "PrimitiveRemoved"


# Connection Events
@dataclass
class ConnectionCreated(DomainEvent):
    name: ClassVar[str] = "ConnectionCreated"


@dataclass
class ConnectionRejected(DomainEvent):
    """
    Data fields:
        - source_port_id, target_port_id
        - reason: ConnectionFailure value
        - message: Human-readable diagnostic
    """
    name: ClassVar[str] = "ConnectionRejected"


@dataclass
class ConnectionRemoved(DomainEvent):
    name: ClassVar[str] = "ConnectionRemoved"
