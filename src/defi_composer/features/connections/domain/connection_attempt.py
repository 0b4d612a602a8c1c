"""
Connection attempt

Outcome of asking the resolver to connect two ports. A rejected attempt
is an expected user action, so it is returned as data and never raised.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from defi_composer.features.connections.domain.connection import Connection


class ConnectionFailure(Enum):
    """Reason a connection was refused, in resolution order."""
    PORT_NOT_FOUND = "PortNotFound"
    SELF_CONNECTION = "SelfConnection"
    DUPLICATE_CONNECTION = "DuplicateConnection"
    INCOMPATIBLE_TYPES = "IncompatibleTypes"


@dataclass(frozen=True)
class ConnectionAttempt:
    source_port_id: str
    target_port_id: str
    connection: Optional[Connection] = None
    failure: Optional[ConnectionFailure] = None
    message: str = ""

    @property
    def succeeded(self) -> bool:
        return self.connection is not None

    @classmethod
    def accepted(cls, connection: Connection) -> 'ConnectionAttempt':
        return cls(
            source_port_id=connection.source_port_id,
            target_port_id=connection.target_port_id,
            connection=connection,
            message="Connection created",
        )

    @classmethod
    def rejected(
        cls,
        source_port_id: str,
        target_port_id: str,
        failure: ConnectionFailure,
        message: str,
    ) -> 'ConnectionAttempt':
        return cls(
            source_port_id=source_port_id,
            target_port_id=target_port_id,
            failure=failure,
            message=message,
        )
