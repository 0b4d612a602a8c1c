"""
Base Settings

Dataclass-based settings schema shared by every settings object.

Features:
- Field validation through validators stored in field metadata
- Backwards-compatible loading (missing keys use defaults, unknown keys
  are ignored with a warning)

Usage:
    @dataclass
    class MySettings(BaseSettings):
        indent: int = validated_field(4, RangeValidator(min_value=1, max_value=8))

    settings = MySettings.from_dict({"indent": 2})
    result = settings.validate()
"""
from dataclasses import dataclass, asdict, field, fields
from typing import Any, Dict, List, Union

from defi_composer.shared.application.validation import CheckResult, Validator, validate_field
from defi_composer.utils.message import Log


def validated_field(default: Any = None, validators: Union[Validator, List[Validator], None] = None, **kwargs):
    """
    Create a dataclass field carrying validators in its metadata.

    Mutable defaults should be passed through default_factory instead.
    """
    metadata = kwargs.pop('metadata', {})
    if validators is not None:
        metadata['validators'] = validators
    if 'default_factory' in kwargs:
        return field(metadata=metadata, **kwargs)
    return field(default=default, metadata=metadata, **kwargs)


@dataclass
class BaseSettings:
    """
    Base class for settings dataclasses.
    """

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseSettings':
        """
        Create settings from dictionary.

        Missing keys keep their defaults; unknown keys are logged and dropped.
        """
        valid_keys = {f.name for f in fields(cls)}
        unknown = sorted(k for k in data if k not in valid_keys)
        if unknown:
            Log.warning(f"{cls.__name__}: Ignoring unknown settings keys: {unknown}")

        return cls(**{k: v for k, v in data.items() if k in valid_keys})

    def validate(self) -> CheckResult:
        """
        Validate every field that declares validators in its metadata.

        Returns:
            CheckResult, valid if all checks pass
        """
        result = CheckResult()
        for f in fields(self):
            validators = f.metadata.get('validators') if f.metadata else None
            if validators is None:
                continue
            result.merge(validate_field(f.name, getattr(self, f.name), validators))
        return result

    def is_valid(self) -> bool:
        return self.validate().valid
