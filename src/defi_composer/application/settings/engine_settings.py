"""
Engine Settings

Configuration for the composition engine and the Move code generator.
Loaded from a plain dict or from DEFI_COMPOSER_* environment variables.
"""
from dataclasses import dataclass, field
import os
from typing import Any, Dict, Mapping, Optional, Tuple

from defi_composer.application.settings.base_settings import BaseSettings, validated_field
from defi_composer.shared.application.validation import (
    CheckResult,
    ChoicesValidator,
    PatternValidator,
    RangeValidator,
    TypeValidator,
)
from defi_composer.utils.message import LEVEL_MAP, Log, init_logger

ENV_PREFIX = "DEFI_COMPOSER_"

DEFAULT_FRAMEWORK_IMPORTS: Tuple[str, ...] = (
    "std::signer",
    "aptos_framework::coin",
    "aptos_framework::account",
)

_TRUE_STRINGS = ("1", "true", "yes", "on")
_FALSE_STRINGS = ("0", "false", "no", "off", "")


def _parse_bool(name: str, text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    raise ValueError(f"{name} must be a boolean, got '{text}'")


def _parse_int(name: str, text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{text}'")


@dataclass
class GeneratorSettings(BaseSettings):
    """
    Move generator options.

    Attributes:
        module_address: Named address or hex address; None emits `module name {`
        indent: Spaces per indentation level
        framework_imports: `use` paths emitted at the top of the module, in order
        include_header_comment: Emit the leading "Generated Move code" comment
    """
    module_address: Optional[str] = validated_field(
        None,
        PatternValidator(
            r"^(0x[0-9a-fA-F]+|[A-Za-z_][A-Za-z0-9_]*)$",
            message="must be a hex address or a named address",
        ),
    )
    indent: int = validated_field(4, [TypeValidator(int), RangeValidator(min_value=1, max_value=8)])
    framework_imports: Tuple[str, ...] = validated_field(
        default_factory=lambda: DEFAULT_FRAMEWORK_IMPORTS,
        validators=TypeValidator(tuple),
    )
    include_header_comment: bool = validated_field(True, TypeValidator(bool))

    def __post_init__(self):
        imports = self.framework_imports
        if isinstance(imports, str):
            imports = imports.split(",")
        if isinstance(imports, list):
            self.framework_imports = tuple(p.strip() for p in imports if p.strip())


@dataclass
class EngineSettings(BaseSettings):
    """
    Engine-wide settings.

    Attributes:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        file_logging: Also write a timestamped log file
        log_folder: Folder for log files (None: ./logs)
        generator: Code generator options
    """
    log_level: str = validated_field("INFO", ChoicesValidator(list(LEVEL_MAP)))
    file_logging: bool = validated_field(False, TypeValidator(bool))
    log_folder: Optional[str] = None
    generator: GeneratorSettings = field(default_factory=GeneratorSettings)

    def __post_init__(self):
        if isinstance(self.log_level, str):
            self.log_level = self.log_level.upper()
        if isinstance(self.generator, Mapping):
            self.generator = GeneratorSettings.from_dict(dict(self.generator))

    def validate(self) -> CheckResult:
        result = super().validate()
        result.merge(self.generator.validate())
        return result

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'EngineSettings':
        """
        Build settings from DEFI_COMPOSER_* variables.

        Recognised: LOG_LEVEL, FILE_LOGGING, LOG_FOLDER, MODULE_ADDRESS,
        INDENT, FRAMEWORK_IMPORTS (comma separated), INCLUDE_HEADER_COMMENT.

        Raises:
            ValueError: If a boolean or integer variable cannot be parsed
        """
        environ = os.environ if environ is None else environ

        def env(name: str) -> Optional[str]:
            return environ.get(f"{ENV_PREFIX}{name}")

        data: Dict[str, Any] = {}
        generator: Dict[str, Any] = {}

        if env("LOG_LEVEL") is not None:
            data["log_level"] = env("LOG_LEVEL")
        if env("FILE_LOGGING") is not None:
            data["file_logging"] = _parse_bool("FILE_LOGGING", env("FILE_LOGGING"))
        if env("LOG_FOLDER"):
            data["log_folder"] = env("LOG_FOLDER")

        if env("MODULE_ADDRESS"):
            generator["module_address"] = env("MODULE_ADDRESS")
        if env("INDENT") is not None:
            generator["indent"] = _parse_int("INDENT", env("INDENT"))
        if env("FRAMEWORK_IMPORTS") is not None:
            generator["framework_imports"] = env("FRAMEWORK_IMPORTS")
        if env("INCLUDE_HEADER_COMMENT") is not None:
            generator["include_header_comment"] = _parse_bool(
                "INCLUDE_HEADER_COMMENT", env("INCLUDE_HEADER_COMMENT")
            )

        if generator:
            data["generator"] = generator
        return cls.from_dict(data)

    def apply_logging(self) -> None:
        """Configure the Log facade from these settings."""
        if self.file_logging:
            Log.set_logger(init_logger(
                name="DefiComposerFileLogger",
                log_folder=self.log_folder,
                file_logging=True,
                level=LEVEL_MAP.get(self.log_level, LEVEL_MAP["INFO"]),
            ))
        Log.set_level(self.log_level)
        Log.debug(f"EngineSettings: Applied log level {self.log_level}, file logging {self.file_logging}")
