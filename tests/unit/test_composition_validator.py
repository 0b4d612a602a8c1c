"""
Tests for the CompositionValidator.

Tests issue severities, locations and ordering.
"""
import pytest

from defi_composer.features.connections.domain import Connection
from defi_composer.features.validation.application import CompositionValidator, validate_composition
from defi_composer.features.validation.domain import IssueSeverity
from defi_composer.shared.domain.value_objects.resource_type import ASSET


@pytest.fixture
def validator():
    return CompositionValidator()


# =============================================================================
# Parameter Checks
# =============================================================================

class TestParameterChecks:
    """Tests for per-primitive parameter issues."""

    def test_defaults_are_valid(self, validator, store):
        """Test a fresh primitive only gets the orphan warning."""
        primitive = store.add_primitive("staking")
        result = validator.validate(store.composition)

        assert result.valid
        assert [i.severity for i in result.issues] == [IssueSeverity.WARNING]
        assert result.issues[0].location.primitive_id == primitive.id

    def test_empty_value_is_error(self, validator, store):
        """Test empty required values are errors located at the parameter."""
        primitive = store.add_primitive("lendingPool")
        store.update_primitive_parameter(primitive.id, "interestRate", None)

        result = validator.validate(store.composition)

        assert not result.valid
        assert len(result.errors) == 1
        location = result.errors[0].location
        assert (location.primitive_id, location.parameter_id) == (primitive.id, "interestRate")

    def test_out_of_range_is_warning(self, validator, store):
        """Test values outside declared bounds warn without blocking."""
        primitive = store.add_primitive("ammPool")
        store.update_primitive_parameter(primitive.id, "feePercent", 25)

        result = validator.validate(store.composition)

        assert result.valid
        range_warnings = [i for i in result.warnings if i.location.parameter_id == "feePercent"]
        assert len(range_warnings) == 1
        assert "at most 10" in range_warnings[0].message

    def test_undeclared_parameter_is_info(self, validator, store):
        """Test extra parameters are reported as info."""
        primitive = store.add_primitive("vault")
        store.update_primitive_parameter(primitive.id, "note", "keep")

        result = validator.validate(store.composition)

        assert result.valid
        assert len(result.infos) == 1
        assert result.infos[0].location.parameter_id == "note"


# =============================================================================
# Connection Checks
# =============================================================================

class TestConnectionChecks:
    """Tests for per-connection issues."""

    def test_strict_type_check(self, validator, store):
        """Test a heuristically accepted connection fails the exact check."""
        vault = store.add_primitive("vault")
        lending = store.add_primitive("lendingPool")
        connection = store.add_connection(vault.get_output("Yield").id, lending.get_input("Collateral").id)
        assert connection is not None

        result = validator.validate(store.composition)

        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].location.connection_id == connection.id
        assert "mismatch" in result.errors[0].message

    def test_exact_match_is_clean(self, validator, store):
        """Test asset -> asset raises no connection issue."""
        first = store.add_primitive("lendingPool")
        second = store.add_primitive("vault")
        store.add_connection(first.get_output("Loan").id, second.get_input("Deposit").id)

        result = validator.validate(store.composition)

        assert result.valid
        assert result.issues == []

    def test_stale_ports_are_errors(self, validator, store):
        """Test connections pointing at unknown ports are reported per endpoint."""
        store.add_primitive("vault")
        stale = Connection("gone-source", "gone-target", ASSET)
        composition = store.composition.with_connection(stale)

        result = validator.validate(composition)

        messages = [i.message for i in result.errors]
        assert messages == ["Connection source port not found", "Connection target port not found"]
        assert all(i.location.connection_id == stale.id for i in result.errors)

    def test_self_loop_is_warning(self, validator, store):
        """Test a same-primitive connection built outside the resolver warns."""
        vault = store.add_primitive("vault")
        loop = Connection(vault.get_output("Yield").id, vault.get_input("Deposit").id, ASSET)

        result = validator.validate(store.composition.with_connection(loop))

        assert result.valid
        assert any("Self-connection" in i.message for i in result.warnings)


# =============================================================================
# Ordering and Helpers
# =============================================================================

class TestResultShape:
    """Tests for issue order and result helpers."""

    def test_issue_order(self, validator, store):
        """Test parameter issues, then connection issues, then orphans."""
        lending = store.add_primitive("lendingPool")
        store.add_primitive("vault")
        store.update_primitive_parameter(lending.id, "assetType", "")
        stale = Connection("a", "b", ASSET)

        result = validator.validate(store.composition.with_connection(stale))

        kinds = [
            "parameter" if i.location.parameter_id else "connection" if i.location.connection_id else "orphan"
            for i in result.issues
        ]
        assert kinds == ["parameter", "connection", "connection", "orphan", "orphan"]

    def test_empty_composition(self, validator, store):
        """Test nothing to report."""
        result = validator.validate(store.composition)
        assert result.valid
        assert bool(result) is True
        assert result.to_dict() == {"valid": True, "issues": []}

    def test_issues_for_primitive(self, store):
        """Test per-primitive filtering and the one-off helper."""
        first = store.add_primitive("vault")
        store.add_primitive("vault")
        result = validate_composition(store.composition)
        assert len(result.issues_for_primitive(first.id)) == 1

    def test_summary(self, validator, store):
        """Test the one-line summary."""
        store.add_primitive("vault")
        assert validator.validate(store.composition).summary() == "valid: 0 error(s), 1 warning(s), 0 info"

    def test_validation_is_pure(self, validator, store):
        """Test the snapshot is not replaced."""
        store.add_primitive("vault")
        snapshot = store.composition
        validator.validate(snapshot)
        assert store.composition is snapshot
