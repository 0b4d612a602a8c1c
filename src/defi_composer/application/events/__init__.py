"""
Domain events and the event bus.
"""
from defi_composer.application.events.events import (
    DomainEvent,
    PrimitiveAdded,
    PrimitiveUpdated,
    PrimitiveRemoved,
    ConnectionCreated,
    ConnectionRejected,
    ConnectionRemoved,
)
from defi_composer.application.events.event_bus import EventBus

__all__ = [
    'DomainEvent',
    'PrimitiveAdded',
    'PrimitiveUpdated',
    'PrimitiveRemoved',
    'ConnectionCreated',
    'ConnectionRejected',
    'ConnectionRemoved',
    'EventBus',
]
