"""
Field checks

Small validators shared by the settings layer (one check list per
settings field) and by the composition validator (parameter bounds and
required values).

    check = validate_field("indent", 12, [TypeValidator(int), RangeValidator(1, 8)])
    check.errors  # ["indent: must be at most 8"]

A CheckResult describes one field. The report for a whole composition is
defi_composer.features.validation.domain.ValidationResult.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence, Union
import re


@dataclass
class CheckResult:
    """Outcome of checking one field; messages are prefixed with the field name."""
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    field_name: Optional[str] = None

    def add_error(self, message: str) -> None:
        if self.field_name and not message.startswith(self.field_name):
            message = f"{self.field_name}: {message}"
        self.errors.append(message)
        self.valid = False

    def merge(self, other: 'CheckResult') -> None:
        self.valid = self.valid and other.valid
        self.errors.extend(other.errors)


class Validator(ABC):
    """A single rule. None always passes; RequiredValidator is the only rule that rejects it."""

    @abstractmethod
    def check(self, value: Any, result: CheckResult) -> None:
        """Record every failure for a non-None value on result."""

    def validate(self, value: Any, field_name: str = "") -> CheckResult:
        result = CheckResult(field_name=field_name)
        if value is not None or isinstance(self, RequiredValidator):
            self.check(value, result)
        return result


class RequiredValidator(Validator):
    """Rejects None, blank strings and empty collections. Zero and False pass."""

    def __init__(self, message: str = "is required"):
        self.message = message

    def check(self, value: Any, result: CheckResult) -> None:
        if value is None:
            result.add_error(self.message)
        elif isinstance(value, str) and not value.strip():
            result.add_error(self.message)
        elif isinstance(value, (list, tuple, dict, set)) and not value:
            result.add_error(self.message)


class RangeValidator(Validator):
    """Inclusive numeric bounds; either bound may be omitted."""

    def __init__(
        self,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        message: Optional[str] = None,
    ):
        self.min_value = min_value
        self.max_value = max_value
        self.message = message

    def check(self, value: Any, result: CheckResult) -> None:
        # bool is an int subclass, but True is not a percentage
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            result.add_error(f"must be a number, got {type(value).__name__}")
            return
        if self.min_value is not None and value < self.min_value:
            result.add_error(self.message or f"must be at least {self.min_value}")
        if self.max_value is not None and value > self.max_value:
            result.add_error(self.message or f"must be at most {self.max_value}")


class PatternValidator(Validator):
    """String must match the regex from its start."""

    def __init__(self, pattern: str, message: Optional[str] = None):
        self.compiled = re.compile(pattern)
        self.message = message or f"does not match pattern: {pattern}"

    def check(self, value: Any, result: CheckResult) -> None:
        if not isinstance(value, str):
            result.add_error(f"must be a string, got {type(value).__name__}")
        elif not self.compiled.match(value):
            result.add_error(self.message)


class ChoicesValidator(Validator):
    """Value must be one of a fixed set, e.g. the known log level names."""

    def __init__(self, choices: Iterable[Any], message: Optional[str] = None):
        self.choices = frozenset(choices)
        self.message = message

    def check(self, value: Any, result: CheckResult) -> None:
        if value not in self.choices:
            listed = ", ".join(repr(c) for c in sorted(str(c) for c in self.choices))
            result.add_error(self.message or f"must be one of: {listed}")


class TypeValidator(Validator):
    def __init__(self, expected_type: Union[type, tuple], message: Optional[str] = None):
        self.expected_type = expected_type
        self.message = message

    def check(self, value: Any, result: CheckResult) -> None:
        if isinstance(value, self.expected_type):
            return
        types = self.expected_type if isinstance(self.expected_type, tuple) else (self.expected_type,)
        names = " or ".join(t.__name__ for t in types)
        result.add_error(self.message or f"must be {names}, got {type(value).__name__}")


def validate_field(
    field_name: str,
    value: Any,
    validators: Union[Validator, Sequence[Validator]],
) -> CheckResult:
    """Run one or more validators against a value, collecting every failure."""
    if isinstance(validators, Validator):
        validators = [validators]
    result = CheckResult(field_name=field_name)
    for validator in validators:
        result.merge(validator.validate(value, field_name))
    return result
