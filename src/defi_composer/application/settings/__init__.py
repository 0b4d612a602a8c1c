"""
Settings module.

Dataclass settings with validators in field metadata.
"""
from defi_composer.application.settings.base_settings import BaseSettings, validated_field
from defi_composer.application.settings.engine_settings import (
    DEFAULT_FRAMEWORK_IMPORTS,
    EngineSettings,
    GeneratorSettings,
)

__all__ = [
    'BaseSettings',
    'validated_field',
    'DEFAULT_FRAMEWORK_IMPORTS',
    'EngineSettings',
    'GeneratorSettings',
]
