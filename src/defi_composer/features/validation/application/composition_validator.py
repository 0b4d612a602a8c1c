"""
Composition Validator

Structural and semantic checks over a composition snapshot. Pure: the
snapshot is only read.

Note: the resource type check here is strict equality, stricter than the
heuristic the connection resolver applies at creation time. A connection
the resolver accepted ("asset" -> "collateral") is reported here as an
error. Both behaviours are kept as they are.
"""
from typing import Optional, Set

from defi_composer.features.compositions.domain.composition import Composition
from defi_composer.features.connections.domain import Connection
from defi_composer.features.primitives.application.primitive_registry import (
    PrimitiveRegistry,
    get_primitive_registry,
)
from defi_composer.features.primitives.domain import Primitive
from defi_composer.features.validation.domain import IssueLocation, IssueSeverity, ValidationResult
from defi_composer.shared.application.validation import RangeValidator, RequiredValidator, validate_field
from defi_composer.shared.domain.value_objects.parameter_value import ParameterType
from defi_composer.utils.message import Log


class CompositionValidator:
    """
    Validates compositions.

    Issue order: per-primitive parameter issues, per-connection issues,
    then orphaned-primitive warnings.
    """

    def __init__(self, registry: Optional[PrimitiveRegistry] = None):
        self._registry = registry or get_primitive_registry()
        self._required = RequiredValidator(message="is required but not set")

    def validate(self, composition: Composition) -> ValidationResult:
        """
        Validate a composition snapshot.

        Returns:
            ValidationResult, valid iff no issue is an error
        """
        result = ValidationResult()

        for primitive in composition.primitives.values():
            self._check_parameters(primitive, result)

        for connection in composition.connections.values():
            self._check_connection(connection, composition, result)

        touched_ports: Set[str] = set()
        for connection in composition.connections.values():
            touched_ports.add(connection.source_port_id)
            touched_ports.add(connection.target_port_id)

        for primitive in composition.primitives.values():
            if not touched_ports.intersection(primitive.port_ids()):
                result.add(
                    IssueSeverity.WARNING,
                    f'Primitive "{primitive.label}" is not connected to any other primitive',
                    IssueLocation(primitive_id=primitive.id),
                )

        Log.info(f"CompositionValidator: '{composition.name}' is {result.summary()}")
        return result

    def _check_parameters(self, primitive: Primitive, result: ValidationResult) -> None:
        template = self._registry.get(primitive.kind)

        for parameter_id, value in primitive.parameters.items():
            location = IssueLocation(primitive_id=primitive.id, parameter_id=parameter_id)

            check = validate_field(parameter_id, value.value, self._required)
            if not check.valid:
                result.add(IssueSeverity.ERROR, f'Parameter "{parameter_id}" is required but not set', location)
                continue

            definition = template.get_parameter(parameter_id) if template else None
            if definition is None:
                if template is not None:
                    result.add(
                        IssueSeverity.INFO,
                        f'Parameter "{parameter_id}" is not used by {template.name}',
                        location,
                    )
                continue

            constraints = definition.constraints
            if definition.type is ParameterType.NUMBER and (
                constraints.minimum is not None or constraints.maximum is not None
            ):
                check = validate_field(
                    parameter_id,
                    value.value,
                    RangeValidator(min_value=constraints.minimum, max_value=constraints.maximum),
                )
                for message in check.errors:
                    result.add(IssueSeverity.WARNING, f'Parameter {message} on "{primitive.label}"', location)

    def _check_connection(self, connection: Connection, composition: Composition, result: ValidationResult) -> None:
        location = IssueLocation(connection_id=connection.id)
        source = composition.find_output(connection.source_port_id)
        target = composition.find_input(connection.target_port_id)

        if source is None:
            result.add(IssueSeverity.ERROR, "Connection source port not found", location)
        if target is None:
            result.add(IssueSeverity.ERROR, "Connection target port not found", location)
        if source is None or target is None:
            return

        source_primitive, source_port = source
        target_primitive, target_port = target

        if not source_port.resource_type.matches_exactly(target_port.resource_type):
            result.add(
                IssueSeverity.ERROR,
                f'Resource type mismatch: "{source_port.resource_type}" cannot connect to '
                f'"{target_port.resource_type}"',
                location,
            )

        if source_primitive.id == target_primitive.id:
            result.add(
                IssueSeverity.WARNING,
                f'Self-connection detected on primitive "{source_primitive.label}"',
                location,
            )


def validate_composition(composition: Composition, registry: Optional[PrimitiveRegistry] = None) -> ValidationResult:
    """Validate a composition with a one-off validator."""
    return CompositionValidator(registry).validate(composition)
