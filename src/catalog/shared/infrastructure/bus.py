"""In-memory event bus implementation."""

from __future__ import annotations

import threading
from typing import Dict, List, Type

import structlog

from catalog.shared.domain.bus import IEventBus, IEventHandler
from catalog.shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class InMemoryEventBus(IEventBus):
    """Simple in-process event bus.

    Dispatch follows the event's MRO: a handler subscribed to a base
    class (``DomainEvent`` included) also receives its subclasses.
    Handlers run synchronously in the publisher's thread; one that raises
    is logged as ``event.handler_failed`` and the remaining handlers still
    run, so a broken subscriber never fails SKU generation.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[IEventHandler]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        with self._lock:
            handlers = self._handlers.setdefault(event_class, [])
            if handler not in handlers:
                handlers.append(handler)

    def unsubscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        with self._lock:
            handlers = self._handlers.get(event_class, [])
            if handler in handlers:
                handlers.remove(handler)

    def publish(self, event: DomainEvent) -> None:
        with self._lock:
            targets = [
                handler
                for klass in type(event).__mro__
                for handler in self._handlers.get(klass, [])
            ]
        for handler in targets:
            try:
                handler.handle(event)
            except Exception:
                logger.exception(
                    "event.handler_failed",
                    event_name=event.event_name,
                    event_id=str(event.event_id),
                    handler=type(handler).__name__,
                )


# Global bus instance (singleton)

event_bus = InMemoryEventBus()
