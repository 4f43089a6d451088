"""Domain bus interfaces for in-process event handling.

SKU generation reports what happened without knowing who listens:
``SkuService`` publishes ``SkuGenerated`` for every committed code and
``SequenceAllocator`` publishes ``SequenceFallbackUsed`` when it gives up
on random draws and falls back to the clock.
"""

from __future__ import annotations

from typing import Generic, Protocol, Type, TypeVar

from catalog.shared.domain.events import DomainEvent

E = TypeVar("E", bound=DomainEvent, contravariant=True)


class IEventHandler(Protocol, Generic[E]):
    """Subscriber for SKU events, e.g. an audit trail or a fallback alert.

    Errors raised from ``handle`` are logged by the bus and do not reach
    the publisher.
    """

    def handle(self, event: E) -> None: ...


class IEventBus(Protocol):
    """Event bus injected into ``SkuService`` and ``SequenceAllocator``.

    ``publish`` must not raise because of a subscriber: a SKU that was
    generated stays generated whatever its listeners do.
    """

    def publish(self, event: DomainEvent) -> None: ...

    def subscribe(self, event_class: Type[E], handler: IEventHandler[E]) -> None: ...

    def unsubscribe(self, event_class: Type[E], handler: IEventHandler[E]) -> None: ...
