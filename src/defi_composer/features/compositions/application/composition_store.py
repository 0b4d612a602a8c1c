"""
Composition Store

Owns the current composition and applies every mutation to it.

Each mutation builds a new Composition snapshot and swaps it in as a
whole (copy-on-write), so a reader never sees a half-applied change.
The store assumes a single writer; a multi-writer host must serialize
calls per composition.
"""
from dataclasses import replace
from typing import Any, Dict, Mapping, Optional

from defi_composer.application.events import (
    EventBus,
    PrimitiveAdded,
    PrimitiveUpdated,
    PrimitiveRemoved,
    ConnectionCreated,
    ConnectionRejected,
    ConnectionRemoved,
)
from defi_composer.features.compositions.domain.composition import Composition, create_composition
from defi_composer.features.connections.application.connection_resolver import ConnectionResolver
from defi_composer.features.connections.domain import Connection, ConnectionAttempt
from defi_composer.features.primitives.application.primitive_registry import (
    KindRef,
    PrimitiveRegistry,
    get_primitive_registry,
)
from defi_composer.features.primitives.domain import Primitive
from defi_composer.shared.domain.errors import ImmutableFieldError, PrimitiveNotFoundError
from defi_composer.shared.domain.value_objects.parameter_value import ParameterValue, coerce_parameter_value
from defi_composer.shared.domain.value_objects.position import Position
from defi_composer.utils.message import Log

IMMUTABLE_FIELDS = ("id", "kind", "inputs", "outputs")
UPDATABLE_FIELDS = ("label", "description", "position", "parameters")


def _require_id(value: Any, what: str) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{what} must be a string, got {type(value).__name__}")


class CompositionStore:
    """
    Store for a single composition.

    Attributes:
        composition: Current snapshot (read-only; replaced on every mutation)
        last_connection_attempt: Outcome of the most recent add_connection call
    """

    def __init__(
        self,
        composition: Optional[Composition] = None,
        registry: Optional[PrimitiveRegistry] = None,
        resolver: Optional[ConnectionResolver] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self._composition = composition or create_composition()
        self._registry = registry or get_primitive_registry()
        self._resolver = resolver or ConnectionResolver()
        self._event_bus = event_bus
        self.last_connection_attempt: Optional[ConnectionAttempt] = None
        Log.debug(f"CompositionStore: Initialized with {self._composition}")

    @property
    def composition(self) -> Composition:
        return self._composition

    @property
    def registry(self) -> PrimitiveRegistry:
        return self._registry

    def _commit(self, composition: Composition) -> None:
        self._composition = composition

    def _publish(self, event) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)

    def _get_existing(self, primitive_id: Any) -> Primitive:
        _require_id(primitive_id, "Primitive id")
        primitive = self._composition.get_primitive(primitive_id)
        if primitive is None:
            raise PrimitiveNotFoundError(primitive_id, f"composition '{self._composition.name}'")
        return primitive

    def _coerce_parameter(self, primitive: Primitive, parameter_id: str, value: Any) -> ParameterValue:
        """Convert a raw value using the declared type from the primitive's template."""
        definition = self._registry.template_for(primitive.kind).get_parameter(parameter_id)
        if definition is None:
            Log.debug(
                f"CompositionStore: Parameter '{parameter_id}' is not declared by "
                f"{primitive.kind.value}, inferring its type"
            )
            return coerce_parameter_value(None, parameter_id, value)
        return definition.coerce(value)

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def add_primitive(self, kind: KindRef, position: Any = None) -> Primitive:
        """
        Add a new primitive of the given kind.

        Raises:
            UnknownKindError: If the kind is not registered
        """
        primitive = self._registry.instantiate(kind, position)
        self._commit(self._composition.with_primitive(primitive))

        self._publish(PrimitiveAdded(
            composition_id=self._composition.id,
            data={"id": primitive.id, "kind": primitive.kind.value, "label": primitive.label},
        ))
        Log.info(f"CompositionStore: Added primitive {primitive} at {primitive.position}")
        return primitive

    def update_primitive(self, primitive_id: str, **fields: Any) -> Primitive:
        """
        Replace selected fields of a primitive.

        Accepted fields: label, description, position, parameters. Parameters
        is a mapping of parameter id -> raw value merged into the current values.

        Raises:
            PrimitiveNotFoundError: If the primitive does not exist
            ImmutableFieldError: If id, kind, inputs or outputs are passed
            ValueError: If an unknown field is passed
        """
        primitive = self._get_existing(primitive_id)

        for name in fields:
            if name in IMMUTABLE_FIELDS:
                raise ImmutableFieldError(name)
            if name not in UPDATABLE_FIELDS:
                raise ValueError(f"Unknown primitive field: '{name}'")

        updated = primitive
        if "label" in fields:
            label = fields["label"]
            if not isinstance(label, str) or not label.strip():
                raise ValueError("Primitive label cannot be empty")
            updated = replace(updated, label=label.strip())
        if "description" in fields:
            updated = replace(updated, description=str(fields["description"] or ""))
        if "position" in fields:
            updated = updated.with_position(Position.of(fields["position"]))
        if "parameters" in fields:
            parameters: Mapping[str, Any] = fields["parameters"] or {}
            for parameter_id, raw in parameters.items():
                updated = updated.with_parameter(self._coerce_parameter(updated, parameter_id, raw))

        self._commit(self._composition.with_primitive(updated))
        self._publish(PrimitiveUpdated(
            composition_id=self._composition.id,
            data={"id": primitive_id, "fields": sorted(fields)},
        ))
        Log.debug(f"CompositionStore: Updated {sorted(fields)} on {updated}")
        return updated

    def update_primitive_position(self, primitive_id: str, position: Any) -> None:
        """
        Raises:
            PrimitiveNotFoundError: If the primitive does not exist
        """
        primitive = self._get_existing(primitive_id)
        self._commit(self._composition.with_primitive(primitive.with_position(Position.of(position))))
        self._publish(PrimitiveUpdated(
            composition_id=self._composition.id,
            data={"id": primitive_id, "fields": ["position"]},
        ))

    def update_primitive_parameter(self, primitive_id: str, parameter_id: str, value: Any) -> None:
        """
        Set one parameter value, converting it to the parameter's declared type.

        Empty values are stored as-is and reported later by the validator.

        Raises:
            PrimitiveNotFoundError: If the primitive does not exist
            ParameterValueError: If the value cannot be converted
        """
        primitive = self._get_existing(primitive_id)
        _require_id(parameter_id, "Parameter id")
        parameter_value = self._coerce_parameter(primitive, parameter_id, value)

        self._commit(self._composition.with_primitive(primitive.with_parameter(parameter_value)))
        self._publish(PrimitiveUpdated(
            composition_id=self._composition.id,
            data={"id": primitive_id, "fields": ["parameters"], "parameter_id": parameter_id},
        ))
        Log.debug(f"CompositionStore: Set {primitive.label}.{parameter_id} = {parameter_value.value!r}")

    def remove_primitive(self, primitive_id: str) -> None:
        """
        Remove a primitive and every connection touching its ports.

        Removing an absent primitive is a no-op.
        """
        _require_id(primitive_id, "Primitive id")
        primitive = self._composition.get_primitive(primitive_id)
        if primitive is None:
            Log.debug(f"CompositionStore: Primitive '{primitive_id}' already absent, nothing to remove")
            return

        dropped = [c.id for c in self._composition.connections_touching(primitive_id)]
        self._commit(self._composition.without_primitive(primitive_id))

        self._publish(PrimitiveRemoved(
            composition_id=self._composition.id,
            data={"id": primitive_id, "connection_ids": dropped},
        ))
        Log.info(f"CompositionStore: Removed primitive {primitive} and {len(dropped)} connection(s)")

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------

    def add_connection(self, source_port_id: str, target_port_id: str) -> Optional[Connection]:
        """
        Connect an output port to an input port.

        Returns:
            The new Connection, or None when the resolver refused it. The
            refusal reason is kept in last_connection_attempt.
        """
        attempt = self._resolver.resolve(self._composition, source_port_id, target_port_id)
        self.last_connection_attempt = attempt

        if not attempt.succeeded:
            self._publish(ConnectionRejected(
                composition_id=self._composition.id,
                data={
                    "source_port_id": source_port_id,
                    "target_port_id": target_port_id,
                    "reason": attempt.failure.value,
                    "message": attempt.message,
                },
            ))
            return None

        connection = attempt.connection
        self._commit(self._composition.with_connection(connection))
        self._publish(ConnectionCreated(
            composition_id=self._composition.id,
            data=connection.to_dict(),
        ))
        return connection

    def remove_connection(self, connection_id: str) -> None:
        """Remove a connection; no-op if it is absent."""
        _require_id(connection_id, "Connection id")
        if connection_id not in self._composition.connections:
            Log.debug(f"CompositionStore: Connection '{connection_id}' already absent, nothing to remove")
            return

        self._commit(self._composition.without_connection(connection_id))
        self._publish(ConnectionRemoved(
            composition_id=self._composition.id,
            data={"id": connection_id},
        ))
        Log.info(f"CompositionStore: Removed connection {connection_id}")

    def snapshot(self) -> Dict[str, Any]:
        """Plain-dict view of the current composition."""
        return self._composition.to_dict()
