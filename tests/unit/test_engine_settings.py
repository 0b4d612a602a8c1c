"""
Tests for engine and generator settings.

Tests defaults, dict and environment loading, and validation.
"""
import logging

import pytest

from defi_composer.application.settings import DEFAULT_FRAMEWORK_IMPORTS, EngineSettings, GeneratorSettings
from defi_composer.utils.message import Log


# =============================================================================
# Defaults and Dict Loading
# =============================================================================

class TestDefaults:
    """Tests for default values."""

    def test_engine_defaults(self):
        """Test library-friendly defaults."""
        settings = EngineSettings()
        assert settings.log_level == "INFO"
        assert settings.file_logging is False
        assert settings.log_folder is None
        assert settings.generator == GeneratorSettings()

    def test_generator_defaults(self):
        """Test Move defaults."""
        settings = GeneratorSettings()
        assert settings.module_address is None
        assert settings.indent == 4
        assert settings.framework_imports == DEFAULT_FRAMEWORK_IMPORTS
        assert settings.include_header_comment is True

    def test_defaults_are_valid(self):
        """Test defaults pass validation."""
        assert EngineSettings().validate().valid


class TestFromDict:
    """Tests for from_dict()."""

    def test_nested_generator(self):
        """Test the generator section is built from a mapping."""
        settings = EngineSettings.from_dict({
            "log_level": "debug",
            "generator": {"indent": 2, "framework_imports": ["std::signer", " aptos_framework::coin "]},
        })
        assert settings.log_level == "DEBUG"
        assert settings.generator.indent == 2
        assert settings.generator.framework_imports == ("std::signer", "aptos_framework::coin")

    def test_unknown_keys_ignored(self):
        """Test unknown keys are dropped."""
        settings = EngineSettings.from_dict({"log_level": "WARNING", "theme": "dark"})
        assert settings.log_level == "WARNING"
        assert not hasattr(settings, "theme")


# =============================================================================
# Environment Loading
# =============================================================================

class TestFromEnv:
    """Tests for from_env()."""

    def test_reads_prefixed_variables(self):
        """Test DEFI_COMPOSER_* variables are applied."""
        settings = EngineSettings.from_env({
            "DEFI_COMPOSER_LOG_LEVEL": "error",
            "DEFI_COMPOSER_FILE_LOGGING": "yes",
            "DEFI_COMPOSER_LOG_FOLDER": "/tmp/defi-logs",
            "DEFI_COMPOSER_MODULE_ADDRESS": "0xCAFE",
            "DEFI_COMPOSER_INDENT": "2",
            "DEFI_COMPOSER_FRAMEWORK_IMPORTS": "std::signer,aptos_framework::coin",
            "DEFI_COMPOSER_INCLUDE_HEADER_COMMENT": "false",
            "UNRELATED": "1",
        })
        assert settings.log_level == "ERROR"
        assert settings.file_logging is True
        assert settings.log_folder == "/tmp/defi-logs"
        assert settings.generator.module_address == "0xCAFE"
        assert settings.generator.indent == 2
        assert settings.generator.framework_imports == ("std::signer", "aptos_framework::coin")
        assert settings.generator.include_header_comment is False

    def test_empty_environment(self):
        """Test no variables gives defaults."""
        assert EngineSettings.from_env({}) == EngineSettings()

    @pytest.mark.parametrize("name,value", [
        ("DEFI_COMPOSER_INDENT", "wide"),
        ("DEFI_COMPOSER_FILE_LOGGING", "maybe"),
    ])
    def test_unparseable_values(self, name, value):
        """Test bad booleans and integers raise ValueError."""
        with pytest.raises(ValueError):
            EngineSettings.from_env({name: value})


# =============================================================================
# Validation
# =============================================================================

class TestValidation:
    """Tests for validate()."""

    def test_bad_log_level(self):
        """Test log level must be a known level."""
        result = EngineSettings(log_level="LOUD").validate()
        assert not result.valid
        assert result.errors[0].startswith("log_level:")

    def test_indent_range(self):
        """Test indent is bounded."""
        result = EngineSettings(generator=GeneratorSettings(indent=12)).validate()
        assert any(e.startswith("indent:") for e in result.errors)

    def test_module_address_pattern(self):
        """Test module address must be an identifier or hex."""
        assert GeneratorSettings(module_address="0x1").validate().valid
        assert GeneratorSettings(module_address="defi_lab").validate().valid
        assert not GeneratorSettings(module_address="not valid").validate().valid


# =============================================================================
# Logging Application
# =============================================================================

class TestApplyLogging:
    """Tests for apply_logging()."""

    def test_sets_level(self):
        """Test the Log facade picks up the configured level."""
        EngineSettings(log_level="WARNING").apply_logging()
        assert Log.get_logger().level == logging.WARNING

    def test_file_logging(self, tmp_path):
        """Test file logging writes into the configured folder."""
        original = Log.get_logger()
        try:
            EngineSettings(log_level="INFO", file_logging=True, log_folder=str(tmp_path)).apply_logging()
            Log.info("hello file")
            for handler in Log.get_logger().handlers:
                handler.flush()
            assert any(p.name.startswith("defi_composer_") for p in tmp_path.iterdir())
        finally:
            Log.set_logger(original)
