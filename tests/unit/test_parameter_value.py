"""
Tests for parameter value variants and their conversion at the update boundary.
"""
import math

import pytest

from defi_composer.shared.domain.errors import ParameterValueError
from defi_composer.shared.domain.value_objects.parameter_value import (
    AssetValue,
    BooleanValue,
    EnumValue,
    NumberValue,
    ParameterType,
    TextValue,
    coerce_parameter_value,
)


STRATEGIES = ("conservative", "moderate", "aggressive")


# =============================================================================
# Empty Values
# =============================================================================

class TestEmptyValues:
    """Tests for blank input handling."""

    @pytest.mark.parametrize("raw", [None, "", "   "])
    @pytest.mark.parametrize("parameter_type", list(ParameterType))
    def test_blank_kept_as_empty_variant(self, parameter_type, raw):
        """Test blank input is stored, not rejected."""
        value = coerce_parameter_value(parameter_type, "p", raw, allowed_values=STRATEGIES)
        assert value.value is None
        assert value.is_empty()
        assert value.parameter_type is parameter_type

    def test_empty_string_variant_is_empty(self):
        """Test whitespace-only text counts as empty."""
        assert TextValue("name", "  ").is_empty()
        assert not TextValue("name", "x").is_empty()


# =============================================================================
# Numbers
# =============================================================================

class TestNumberCoercion:
    """Tests for number parameters."""

    def test_int_and_float_pass_through(self):
        """Test native numbers are kept."""
        assert coerce_parameter_value(ParameterType.NUMBER, "rate", 5).value == 5
        assert coerce_parameter_value(ParameterType.NUMBER, "fee", 0.3).value == 0.3

    def test_numeric_strings(self):
        """Test form strings are converted."""
        assert coerce_parameter_value(ParameterType.NUMBER, "rate", "7").value == 7
        assert coerce_parameter_value(ParameterType.NUMBER, "fee", " 0.25 ").value == 0.25

    def test_returns_number_variant(self):
        """Test variant type."""
        assert isinstance(coerce_parameter_value(ParameterType.NUMBER, "rate", 1), NumberValue)

    @pytest.mark.parametrize("raw", [True, "abc", [1], math.inf, "nan"])
    def test_rejects_non_numbers(self, raw):
        """Test bool, garbage and non-finite values raise."""
        with pytest.raises(ParameterValueError):
            coerce_parameter_value(ParameterType.NUMBER, "rate", raw)

    def test_error_is_value_error(self):
        """Test ParameterValueError is catchable as ValueError."""
        with pytest.raises(ValueError, match="rate"):
            coerce_parameter_value(ParameterType.NUMBER, "rate", "x")


# =============================================================================
# Booleans, Enums, Assets, Text
# =============================================================================

class TestOtherCoercions:
    """Tests for the remaining variants."""

    @pytest.mark.parametrize("raw,expected", [
        (True, True), (False, False), (1, True), (0, False), ("true", True), ("False", False),
    ])
    def test_boolean(self, raw, expected):
        """Test accepted boolean spellings."""
        value = coerce_parameter_value(ParameterType.BOOLEAN, "flag", raw)
        assert isinstance(value, BooleanValue)
        assert value.value is expected

    def test_boolean_rejects_other_ints(self):
        """Test 2 is not a boolean."""
        with pytest.raises(ParameterValueError):
            coerce_parameter_value(ParameterType.BOOLEAN, "flag", 2)

    def test_boolean_str(self):
        """Test lowercase rendering."""
        assert str(BooleanValue("flag", True)) == "true"

    def test_enum_allowed(self):
        """Test allowed tag is kept."""
        value = coerce_parameter_value(ParameterType.ENUM, "strategy", "aggressive", STRATEGIES)
        assert isinstance(value, EnumValue)
        assert value.value == "aggressive"

    def test_enum_not_allowed(self):
        """Test unknown tag raises with the choices."""
        with pytest.raises(ParameterValueError, match="conservative"):
            coerce_parameter_value(ParameterType.ENUM, "strategy", "yolo", STRATEGIES)

    def test_asset_upper_cased(self):
        """Test asset symbols are normalized."""
        value = coerce_parameter_value(ParameterType.ASSET, "assetType", " usdc ")
        assert isinstance(value, AssetValue)
        assert value.value == "USDC"

    def test_asset_rejects_numbers(self):
        """Test non-string asset raises."""
        with pytest.raises(ParameterValueError):
            coerce_parameter_value(ParameterType.ASSET, "assetType", 42)

    def test_existing_variant_is_unwrapped(self):
        """Test passing a variant re-coerces its raw value."""
        value = coerce_parameter_value(ParameterType.NUMBER, "rate", NumberValue("rate", 3))
        assert value.value == 3


# =============================================================================
# Undeclared Parameters
# =============================================================================

class TestInferredVariant:
    """Tests for parameters without a declared type."""

    def test_infers_number(self):
        """Test int infers NumberValue."""
        assert isinstance(coerce_parameter_value(None, "extra", 3), NumberValue)

    def test_infers_boolean_before_number(self):
        """Test bool is not mistaken for a number."""
        assert isinstance(coerce_parameter_value(None, "extra", True), BooleanValue)

    def test_infers_text(self):
        """Test strings infer TextValue."""
        assert isinstance(coerce_parameter_value(None, "note", "hello"), TextValue)

    def test_rejects_unsupported_types(self):
        """Test containers raise."""
        with pytest.raises(ParameterValueError):
            coerce_parameter_value(None, "extra", {"a": 1})
