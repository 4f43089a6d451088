"""SKU domain events."""

from __future__ import annotations

from dataclasses import dataclass

from catalog.shared.domain.events import DomainEvent


@dataclass(frozen=True)
class SkuGenerated(DomainEvent):
    """A SKU was assembled and passed the final uniqueness check."""

    sku: str
    regenerations: int = 0


@dataclass(frozen=True)
class SequenceFallbackUsed(DomainEvent):
    """The allocator ran out of random draws and used the clock instead.

    The sequence is no longer guaranteed collision-free for ``prefix``.
    """

    prefix: str
    sequence: str
    attempts: int
