"""
Tests for the CompositionStore.

Tests copy-on-write mutations, cascading removal, parameter coercion
and the events published after each mutation.
"""
import pytest

from defi_composer.application.events import (
    ConnectionCreated,
    ConnectionRejected,
    ConnectionRemoved,
    PrimitiveAdded,
    PrimitiveRemoved,
    PrimitiveUpdated,
)
from defi_composer.features.compositions.application import CompositionStore
from defi_composer.features.compositions.domain import DEFAULT_NAME, create_composition
from defi_composer.features.connections.domain import ConnectionFailure
from defi_composer.shared.domain.errors import (
    ImmutableFieldError,
    ParameterValueError,
    PrimitiveNotFoundError,
    UnknownKindError,
)
from defi_composer.shared.domain.value_objects.parameter_value import NumberValue, TextValue
from defi_composer.shared.domain.value_objects.position import Position


def _record(event_bus, *event_classes):
    events = []
    for event_class in event_classes:
        event_bus.subscribe(event_class, events.append)
    return events


def _connect_lending_to_amm(store):
    lending = store.add_primitive("lendingPool", (0, 0))
    amm = store.add_primitive("ammPool", (100, 100))
    connection = store.add_connection(lending.get_output("Loan").id, amm.get_input("Token A").id)
    return lending, amm, connection


# =============================================================================
# Composition Factory Tests
# =============================================================================

class TestCreateComposition:
    """Tests for create_composition()."""

    def test_defaults(self):
        """Test default name and description."""
        composition = create_composition()
        assert composition.name == DEFAULT_NAME
        assert composition.description == "A DeFi composition"
        assert composition.primitives == {}
        assert composition.connections == {}

    def test_blank_name_rejected(self):
        """Test empty names raise."""
        with pytest.raises(ValueError):
            create_composition("   ")

    def test_store_starts_empty(self, store):
        """Test a new store holds an empty composition."""
        assert store.composition.name == DEFAULT_NAME
        assert store.last_connection_attempt is None


# =============================================================================
# Primitive Mutation Tests
# =============================================================================

class TestPrimitives:
    """Tests for adding, updating and removing primitives."""

    def test_add_primitive(self, store, event_bus):
        """Test primitive is inserted and an event published."""
        events = _record(event_bus, PrimitiveAdded)
        primitive = store.add_primitive("lendingPool", (5, 6))

        assert store.composition.get_primitive(primitive.id) is primitive
        assert primitive.position == Position(5, 6)
        assert events[0].data["kind"] == "lendingPool"

    def test_add_unknown_kind(self, store):
        """Test unknown kinds raise and leave the composition untouched."""
        before = store.composition
        with pytest.raises(UnknownKindError):
            store.add_primitive("oracle")
        assert store.composition is before

    def test_insertion_order_kept(self, store):
        """Test primitives iterate in insertion order."""
        ids = [store.add_primitive(kind).id for kind in ("vault", "staking", "ammPool")]
        assert list(store.composition.primitives) == ids

    def test_copy_on_write(self, store):
        """Test snapshots held by readers never change."""
        snapshot = store.composition
        store.add_primitive("vault")
        assert snapshot.primitives == {}
        assert len(store.composition.primitives) == 1

    def test_snapshots_do_not_share_mappings(self, store):
        """Test each snapshot owns its own connection mapping."""
        _, amm, connection = _connect_lending_to_amm(store)
        old = store.composition
        store.update_primitive_position(amm.id, (250, 250))

        assert old.connections is not store.composition.connections
        assert connection.id in store.composition.connections

    def test_snapshot_mappings_read_only(self, store):
        """Test readers cannot mutate a snapshot behind the store's back."""
        lending, amm, connection = _connect_lending_to_amm(store)
        composition = store.composition

        with pytest.raises(TypeError):
            composition.connections[connection.id] = None
        with pytest.raises(TypeError):
            del composition.primitives[amm.id]
        with pytest.raises(TypeError):
            composition.get_primitive(lending.id).parameters["interestRate"] = None

        assert list(store.composition.primitives) == [lending.id, amm.id]
        assert connection.id in store.composition.connections

    def test_updated_at_touched(self, store):
        """Test mutations move updated_at forward."""
        before = store.composition.updated_at
        store.add_primitive("vault")
        assert store.composition.updated_at >= before

    def test_update_position(self, store, event_bus):
        """Test position update."""
        events = _record(event_bus, PrimitiveUpdated)
        primitive = store.add_primitive("vault")
        store.update_primitive_position(primitive.id, {"x": 42, "y": 7})
        assert store.composition.get_primitive(primitive.id).position == Position(42, 7)
        assert events[0].data["fields"] == ["position"]

    def test_update_parameter_coerces(self, store):
        """Test raw form values become typed values."""
        primitive = store.add_primitive("lendingPool")
        store.update_primitive_parameter(primitive.id, "interestRate", "7.5")
        assert store.composition.get_primitive(primitive.id).parameters["interestRate"] == NumberValue(
            "interestRate", 7.5
        )

    def test_update_parameter_keeps_empty(self, store):
        """Test empty values are stored for the validator to report."""
        primitive = store.add_primitive("lendingPool")
        store.update_primitive_parameter(primitive.id, "assetType", "")
        assert store.composition.get_primitive(primitive.id).parameters["assetType"].is_empty()

    def test_update_parameter_rejects_bad_enum(self, store):
        """Test invalid enum tag raises and nothing changes."""
        primitive = store.add_primitive("vault")
        before = store.composition
        with pytest.raises(ParameterValueError):
            store.update_primitive_parameter(primitive.id, "strategy", "reckless")
        assert store.composition is before

    def test_update_undeclared_parameter(self, store):
        """Test undeclared parameters are stored with an inferred type."""
        primitive = store.add_primitive("vault")
        store.update_primitive_parameter(primitive.id, "note", "hello")
        assert store.composition.get_primitive(primitive.id).parameters["note"] == TextValue("note", "hello")

    def test_update_missing_primitive(self, store):
        """Test unknown ids raise PrimitiveNotFoundError."""
        with pytest.raises(PrimitiveNotFoundError):
            store.update_primitive_position("missing", (0, 0))
        with pytest.raises(PrimitiveNotFoundError):
            store.update_primitive_parameter("missing", "interestRate", 1)

    def test_malformed_id_raises_type_error(self, store):
        """Test non-string ids are a caller bug."""
        with pytest.raises(TypeError):
            store.update_primitive_position(123, (0, 0))
        with pytest.raises(TypeError):
            store.remove_connection(None)

    def test_update_primitive_fields(self, store):
        """Test partial update merges parameters."""
        primitive = store.add_primitive("ammPool")
        updated = store.update_primitive(
            primitive.id,
            label="ETH/USDC",
            parameters={"feePercent": "0.05"},
        )
        assert updated.label == "ETH/USDC"
        assert updated.parameters["feePercent"].value == 0.05
        assert updated.parameters["assetTypeB"].value == "ETH"
        assert store.composition.get_primitive(primitive.id) is updated

    @pytest.mark.parametrize("field_name", ["id", "kind", "inputs", "outputs"])
    def test_update_immutable_field(self, store, field_name):
        """Test fields fixed at creation cannot change."""
        primitive = store.add_primitive("vault")
        with pytest.raises(ImmutableFieldError):
            store.update_primitive(primitive.id, **{field_name: "x"})

    def test_update_unknown_field(self, store):
        """Test unknown fields raise ValueError."""
        primitive = store.add_primitive("vault")
        with pytest.raises(ValueError, match="color"):
            store.update_primitive(primitive.id, color="red")

    def test_update_empty_label(self, store):
        """Test blank labels are refused."""
        primitive = store.add_primitive("vault")
        with pytest.raises(ValueError):
            store.update_primitive(primitive.id, label=" ")


# =============================================================================
# Removal Tests
# =============================================================================

class TestRemoval:
    """Tests for cascading and idempotent removal."""

    def test_remove_cascades_to_connections(self, store, event_bus):
        """Test removing a primitive drops every incident connection."""
        events = _record(event_bus, PrimitiveRemoved)
        lending, amm, connection = _connect_lending_to_amm(store)

        store.remove_primitive(amm.id)

        assert amm.id not in store.composition.primitives
        assert store.composition.connections == {}
        assert events[0].data["connection_ids"] == [connection.id]

    def test_remove_primitive_idempotent(self, store, event_bus):
        """Test second removal is a no-op."""
        events = _record(event_bus, PrimitiveRemoved)
        primitive = store.add_primitive("vault")
        store.remove_primitive(primitive.id)
        snapshot = store.composition

        store.remove_primitive(primitive.id)

        assert store.composition is snapshot
        assert len(events) == 1

    def test_remove_connection(self, store, event_bus):
        """Test connection removal and idempotency."""
        events = _record(event_bus, ConnectionRemoved)
        lending, amm, connection = _connect_lending_to_amm(store)

        store.remove_connection(connection.id)
        store.remove_connection(connection.id)

        assert store.composition.connections == {}
        assert len(store.composition.primitives) == 2
        assert len(events) == 1


# =============================================================================
# Connection Tests
# =============================================================================

class TestConnections:
    """Tests for add_connection through the store."""

    def test_add_connection(self, store, event_bus):
        """Test a compatible connection is inserted."""
        events = _record(event_bus, ConnectionCreated)
        lending, amm, connection = _connect_lending_to_amm(store)

        assert connection is not None
        assert store.composition.connections[connection.id] is connection
        assert store.last_connection_attempt.succeeded
        assert events[0].data["id"] == connection.id

    def test_duplicate_connection(self, store, event_bus):
        """Test the same pair twice yields exactly one connection."""
        events = _record(event_bus, ConnectionRejected)
        lending, amm, _ = _connect_lending_to_amm(store)

        second = store.add_connection(lending.get_output("Loan").id, amm.get_input("Token A").id)

        assert second is None
        assert len(store.composition.connections) == 1
        assert store.last_connection_attempt.failure is ConnectionFailure.DUPLICATE_CONNECTION
        assert events[0].data["reason"] == "DuplicateConnection"

    def test_rejection_leaves_snapshot(self, store):
        """Test refused connections do not replace the composition."""
        vault = store.add_primitive("vault")
        snapshot = store.composition
        assert store.add_connection(vault.get_output("Yield").id, vault.get_input("Deposit").id) is None
        assert store.composition is snapshot

    def test_snapshot_dict(self, store):
        """Test plain-dict view."""
        _connect_lending_to_amm(store)
        snapshot = store.snapshot()
        assert len(snapshot["primitives"]) == 2
        assert len(snapshot["connections"]) == 1
