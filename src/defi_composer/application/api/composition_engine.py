"""
Composition Engine

Unified interface for all composition operations.
Used by the CLI and by any view layer (canvas, forms, code panel).

The engine owns no ambient state: it wraps an explicit CompositionStore,
and every read returns an immutable snapshot.
"""
from typing import Any, Optional

from defi_composer.application.events import EventBus
from defi_composer.application.settings import EngineSettings
from defi_composer.features.codegen.application import CodeGenerator
from defi_composer.features.compositions.application import CompositionStore
from defi_composer.features.compositions.domain import Composition, create_composition
from defi_composer.features.connections.domain import Connection, ConnectionAttempt
from defi_composer.features.primitives.application.primitive_registry import KindRef, PrimitiveRegistry
from defi_composer.features.primitives.domain import Primitive
from defi_composer.features.validation.application import CompositionValidator
from defi_composer.features.validation.domain import ValidationResult
from defi_composer.utils.message import Log


class CompositionEngine:
    """
    Public facade over store, validator and code generator.

    Usage:
        engine = CompositionEngine.create("Leveraged LP")
        lending = engine.add_primitive("lendingPool", (100, 100))
        amm = engine.add_primitive("ammPool", (400, 100))
        engine.add_connection(lending.get_output("Loan").id, amm.get_input("Token A").id)
        if engine.validate_composition().valid:
            source = engine.export_code()
    """

    def __init__(
        self,
        store: CompositionStore,
        settings: Optional[EngineSettings] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.store = store
        self.settings = settings or EngineSettings()
        self.event_bus = event_bus
        self._validator = CompositionValidator(store.registry)
        self._generator = CodeGenerator(self.settings.generator, store.registry)
        Log.debug(f"CompositionEngine: Initialized for {store.composition}")

    @classmethod
    def create(
        cls,
        name: Optional[str] = None,
        description: Optional[str] = None,
        settings: Optional[EngineSettings] = None,
        registry: Optional[PrimitiveRegistry] = None,
        event_bus: Optional[EventBus] = None,
    ) -> 'CompositionEngine':
        """Create an engine around a fresh, empty composition."""
        store = CompositionStore(
            composition=create_composition(name, description),
            registry=registry,
            event_bus=event_bus,
        )
        return cls(store, settings=settings, event_bus=event_bus)

    # ==================== Reads ====================

    def get_composition(self) -> Composition:
        return self.store.composition

    @property
    def last_connection_attempt(self) -> Optional[ConnectionAttempt]:
        """Outcome (and failure reason) of the most recent add_connection call."""
        return self.store.last_connection_attempt

    # ==================== Primitives ====================

    def add_primitive(self, kind: KindRef, position: Any = None) -> Primitive:
        return self.store.add_primitive(kind, position)

    def update_primitive(self, primitive_id: str, **fields: Any) -> Primitive:
        return self.store.update_primitive(primitive_id, **fields)

    def remove_primitive(self, primitive_id: str) -> None:
        self.store.remove_primitive(primitive_id)

    def update_primitive_position(self, primitive_id: str, position: Any) -> None:
        self.store.update_primitive_position(primitive_id, position)

    def update_primitive_parameter(self, primitive_id: str, parameter_id: str, value: Any) -> None:
        self.store.update_primitive_parameter(primitive_id, parameter_id, value)

    # ==================== Connections ====================

    def add_connection(self, source_port_id: str, target_port_id: str) -> Optional[Connection]:
        """
        Returns:
            The new Connection, or None when refused (see last_connection_attempt)
        """
        return self.store.add_connection(source_port_id, target_port_id)

    def remove_connection(self, connection_id: str) -> None:
        self.store.remove_connection(connection_id)

    # ==================== Validation and export ====================

    def validate_composition(self) -> ValidationResult:
        return self._validator.validate(self.store.composition)

    def export_code(self) -> str:
        """
        Generate Move source for the current snapshot.

        Does not require a prior successful validation.
        """
        return self._generator.generate(self.store.composition)
