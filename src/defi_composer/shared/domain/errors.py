"""
Composer errors

Faults raised to the caller when a collaborator breaks a precondition.
Routine user actions (a rejected connection, an invalid parameter left
empty) are reported as data instead, see ConnectionAttempt and
ValidationResult.
"""
from typing import Iterable


class CompositionError(Exception):
    """Base exception for composition engine faults."""
    pass


class UnknownKindError(CompositionError):
    """Raised when a primitive kind is not registered."""

    def __init__(self, kind: str, available: Iterable[str] = ()):
        self.kind = kind
        self.available = list(available)
        message = f"Unknown primitive kind: '{kind}'"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class PrimitiveNotFoundError(CompositionError):
    """Raised when a primitive id is not part of the composition."""

    def __init__(self, primitive_id: str, context: str = ""):
        self.primitive_id = primitive_id
        self.context = context
        message = f"Primitive with id '{primitive_id}' not found"
        if context:
            message += f" ({context})"
        super().__init__(message)


class ImmutableFieldError(CompositionError):
    """Raised when an update touches a field fixed at creation time."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Primitive field '{field_name}' cannot be changed after creation")


class ParameterValueError(CompositionError, ValueError):
    """Raised when a raw value cannot be converted to a parameter's declared type."""

    def __init__(self, parameter_id: str, message: str):
        self.parameter_id = parameter_id
        super().__init__(f"{parameter_id}: {message}")
