"""
Connection Resolver

Decides whether two ports may be connected and builds the connection
record when they may. Refusals are reported as a ConnectionAttempt with
a failure reason; dragging a wire onto the wrong port is routine.
"""
from defi_composer.features.compositions.domain.composition import Composition
from defi_composer.features.connections.domain import Connection, ConnectionAttempt, ConnectionFailure
from defi_composer.utils.message import Log


class ConnectionResolver:
    """
    Resolves connection requests against a composition snapshot.

    Resolution order:
    1. Source must be an output port and target an input port
    2. Ports must belong to different primitives
    3. The (source, target) pair must not already be connected
    4. Resource types must be compatible (heuristic, see ResourceType)

    The resolver does not modify the composition; the caller inserts the
    returned connection.
    """

    def resolve(self, composition: Composition, source_port_id: str, target_port_id: str) -> ConnectionAttempt:
        """
        Resolve a connection request.

        Args:
            composition: Snapshot to resolve against
            source_port_id: Output port id
            target_port_id: Input port id

        Returns:
            ConnectionAttempt holding either the new Connection or the failure reason
        """
        source = composition.find_output(source_port_id)
        target = composition.find_input(target_port_id)

        if source is None or target is None:
            missing = []
            if source is None:
                missing.append(f"source output '{source_port_id}'")
            if target is None:
                missing.append(f"target input '{target_port_id}'")
            return self._reject(
                source_port_id, target_port_id,
                ConnectionFailure.PORT_NOT_FOUND,
                f"Port not found: {', '.join(missing)}",
            )

        source_primitive, source_port = source
        target_primitive, target_port = target

        if source_primitive.id == target_primitive.id:
            return self._reject(
                source_port_id, target_port_id,
                ConnectionFailure.SELF_CONNECTION,
                f"Cannot connect primitive '{source_primitive.label}' to itself",
            )

        if composition.has_connection(source_port_id, target_port_id):
            return self._reject(
                source_port_id, target_port_id,
                ConnectionFailure.DUPLICATE_CONNECTION,
                f"Connection already exists between '{source_port.label}' and '{target_port.label}'",
            )

        if not source_port.can_connect_to(target_port):
            return self._reject(
                source_port_id, target_port_id,
                ConnectionFailure.INCOMPATIBLE_TYPES,
                f"Incompatible resource types: '{source_port.resource_type}' (output) cannot connect "
                f"to '{target_port.resource_type}' (input)",
            )

        connection = Connection(
            source_port_id=source_port_id,
            target_port_id=target_port_id,
            resource_type=source_port.resource_type,
        )
        Log.info(
            f"ConnectionResolver: Connected {source_primitive.label}.{source_port.label} -> "
            f"{target_primitive.label}.{target_port.label} [{connection.resource_type}]"
        )
        return ConnectionAttempt.accepted(connection)

    def _reject(
        self,
        source_port_id: str,
        target_port_id: str,
        failure: ConnectionFailure,
        message: str,
    ) -> ConnectionAttempt:
        Log.warning(f"ConnectionResolver: Connection failed ({failure.value}): {message}")
        return ConnectionAttempt.rejected(source_port_id, target_port_id, failure, message)
