"""
Parameter value objects

Closed tagged union of parameter values, one variant per declared
parameter type. Raw values coming from a form are converted at the
update boundary by coerce_parameter_value(); an empty raw value is kept
as an empty variant so the composition validator can report it.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional, Sequence, Union

from defi_composer.shared.domain.errors import ParameterValueError


class ParameterType(Enum):
    """Declared type of a primitive parameter."""
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ASSET = "asset"

    @classmethod
    def from_string(cls, value: str) -> 'ParameterType':
        try:
            return cls(value.lower())
        except ValueError:
            raise ValueError(f"Invalid parameter type: {value}")


@dataclass(frozen=True)
class ParameterValue:
    """Base variant. `value` is None when the parameter is unset."""
    parameter_type: ClassVar[Optional[ParameterType]] = None
    parameter_id: str
    value: Any = None

    def is_empty(self) -> bool:
        if self.value is None:
            return True
        return isinstance(self.value, str) and not self.value.strip()

    def to_dict(self) -> dict:
        return {
            "parameter_id": self.parameter_id,
            "type": self.parameter_type.value if self.parameter_type else None,
            "value": self.value,
        }

    def __str__(self) -> str:
        return "" if self.value is None else str(self.value)


@dataclass(frozen=True)
class NumberValue(ParameterValue):
    parameter_type: ClassVar[Optional[ParameterType]] = ParameterType.NUMBER
    value: Optional[Union[int, float]] = None


@dataclass(frozen=True)
class TextValue(ParameterValue):
    parameter_type: ClassVar[Optional[ParameterType]] = ParameterType.STRING
    value: Optional[str] = None


@dataclass(frozen=True)
class BooleanValue(ParameterValue):
    parameter_type: ClassVar[Optional[ParameterType]] = ParameterType.BOOLEAN
    value: Optional[bool] = None

    def __str__(self) -> str:
        if self.value is None:
            return ""
        return "true" if self.value else "false"


@dataclass(frozen=True)
class EnumValue(ParameterValue):
    parameter_type: ClassVar[Optional[ParameterType]] = ParameterType.ENUM
    value: Optional[str] = None


@dataclass(frozen=True)
class AssetValue(ParameterValue):
    """Asset symbol such as "USDC" or "APT"."""
    parameter_type: ClassVar[Optional[ParameterType]] = ParameterType.ASSET
    value: Optional[str] = None


VARIANTS = {
    ParameterType.NUMBER: NumberValue,
    ParameterType.STRING: TextValue,
    ParameterType.BOOLEAN: BooleanValue,
    ParameterType.ENUM: EnumValue,
    ParameterType.ASSET: AssetValue,
}


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def _to_number(parameter_id: str, raw: Any) -> Union[int, float]:
    if isinstance(raw, bool):
        raise ParameterValueError(parameter_id, "must be a number, got bool")
    if isinstance(raw, (int, float)):
        number = raw
    elif isinstance(raw, str):
        text = raw.strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise ParameterValueError(parameter_id, f"must be a number, got '{raw}'")
    else:
        raise ParameterValueError(parameter_id, f"must be a number, got {type(raw).__name__}")

    if isinstance(number, float) and not math.isfinite(number):
        raise ParameterValueError(parameter_id, "must be a finite number")
    return number


def _to_boolean(parameter_id: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int) and raw in (0, 1):
        return bool(raw)
    if isinstance(raw, str) and raw.strip().lower() in ("true", "false"):
        return raw.strip().lower() == "true"
    raise ParameterValueError(parameter_id, f"must be a boolean, got '{raw}'")


def _infer_variant(raw: Any):
    if isinstance(raw, bool):
        return BooleanValue
    if isinstance(raw, (int, float)):
        return NumberValue
    return TextValue


def coerce_parameter_value(
    parameter_type: Optional[ParameterType],
    parameter_id: str,
    raw: Any,
    allowed_values: Optional[Sequence[str]] = None,
) -> ParameterValue:
    """
    Convert a raw value into the variant for `parameter_type`.

    Args:
        parameter_type: Declared type, or None for a parameter the kind does
            not declare (the variant is inferred from the Python type)
        parameter_id: Parameter identifier, carried on the value
        raw: Value as received from the caller
        allowed_values: Allowed tags for enum parameters

    Returns:
        ParameterValue variant; empty raw values produce an empty variant

    Raises:
        ParameterValueError: If the raw value cannot be converted
    """
    if isinstance(raw, ParameterValue):
        raw = raw.value

    if parameter_type is None:
        variant = _infer_variant(raw)
        if _is_blank(raw):
            return variant(parameter_id=parameter_id, value=None)
        if variant is TextValue and not isinstance(raw, str):
            raise ParameterValueError(parameter_id, f"unsupported value type {type(raw).__name__}")
        return variant(parameter_id=parameter_id, value=raw)

    variant = VARIANTS[parameter_type]
    if _is_blank(raw):
        return variant(parameter_id=parameter_id, value=None)

    if parameter_type is ParameterType.NUMBER:
        return NumberValue(parameter_id=parameter_id, value=_to_number(parameter_id, raw))

    if parameter_type is ParameterType.BOOLEAN:
        return BooleanValue(parameter_id=parameter_id, value=_to_boolean(parameter_id, raw))

    if not isinstance(raw, str):
        raise ParameterValueError(parameter_id, f"must be a string, got {type(raw).__name__}")

    if parameter_type is ParameterType.ENUM:
        tag = raw.strip()
        if allowed_values and tag not in allowed_values:
            choices = ", ".join(repr(c) for c in allowed_values)
            raise ParameterValueError(parameter_id, f"must be one of: {choices}")
        return EnumValue(parameter_id=parameter_id, value=tag)

    if parameter_type is ParameterType.ASSET:
        return AssetValue(parameter_id=parameter_id, value=raw.strip().upper())

    return TextValue(parameter_id=parameter_id, value=raw)
