"""Catalog repository interface (Dependency Inversion Principle).

The SKU codec only needs to know whether a candidate code is taken.
Service-layer code depends on this abstraction, never on a concrete
datastore.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ICatalogRepository(ABC):
    """Repository contract consumed by the SKU allocator and service."""

    @abstractmethod
    def exists_by_sku(self, candidate: str) -> bool:
        """Return ``True`` if *candidate* is already assigned.

        The allocator checks the hyphenless body
        (``FSHNCKGLDTIFP1234``); the final check uses the formatted SKU
        (``FSH-NCK-GLD-TIF-P-1234-1``).  Implementations should raise
        ``CatalogUnavailable`` (or let their own errors escape) when they
        cannot answer.
        """
