"""
Event Bus System

Provides publish/subscribe pattern for domain events.
Handlers run synchronously on the publishing thread.
"""
from typing import Callable, Dict, List, Type, Union
from threading import Lock

from defi_composer.application.events.events import DomainEvent
from defi_composer.utils.message import Log

Handler = Callable[[DomainEvent], None]


class EventBus:
    """
    Event bus for publishing and subscribing to domain events.

    Usage:
        bus = EventBus()
        bus.subscribe(PrimitiveAdded, handle_primitive_added)
        bus.publish(PrimitiveAdded(composition_id="...", data={...}))
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}
        self._lock = Lock()
        Log.debug("EventBus: Initialized")

    def _normalize_event_name(self, event_name_or_class: Union[str, Type[DomainEvent]]) -> str:
        """Convert event class or string to normalized string name."""
        if isinstance(event_name_or_class, str):
            return event_name_or_class
        elif hasattr(event_name_or_class, 'name'):
            return event_name_or_class.name
        else:
            return event_name_or_class.__name__

    def subscribe(self, event_name: Union[str, Type[DomainEvent]], handler: Handler) -> None:
        """
        Subscribe to events of a specific type.

        Args:
            event_name: Name of the event type (e.g., "PrimitiveAdded") or event class
            handler: Function to call when event is published
        """
        event_name = self._normalize_event_name(event_name)
        with self._lock:
            handlers = self._subscribers.setdefault(event_name, [])
            if handler not in handlers:
                handlers.append(handler)

    def unsubscribe(self, event_name: Union[str, Type[DomainEvent]], handler: Handler) -> None:
        event_name = self._normalize_event_name(event_name)
        with self._lock:
            handlers = self._subscribers.get(event_name)
            if handlers and handler in handlers:
                handlers.remove(handler)
                if not handlers:
                    del self._subscribers[event_name]

    def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event to all subscribers.

        A failing handler is logged and does not stop the remaining handlers.
        """
        event_name = event.name

        # Copy so handlers may (un)subscribe while being called
        with self._lock:
            handlers = list(self._subscribers.get(event_name, []))

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                Log.error(f"EventBus: Error in handler for '{event_name}': {e}")

    def subscriber_count(self, event_name: Union[str, Type[DomainEvent]]) -> int:
        event_name = self._normalize_event_name(event_name)
        with self._lock:
            return len(self._subscribers.get(event_name, []))
