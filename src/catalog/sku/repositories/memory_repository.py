"""In-memory implementation of the catalog repository.

Satisfies ``ICatalogRepository`` with a lock-guarded set of SKUs.  It is
the reservation backstop for callers without a database and the fixture
used throughout the tests.
"""

from __future__ import annotations

import threading
from typing import Iterable

import structlog

from catalog.sku.constants import SKU_SEPARATOR
from catalog.sku.exceptions import SkuAlreadyReserved
from catalog.sku.repositories.interfaces import ICatalogRepository

logger = structlog.get_logger(__name__)


def _normalise(sku: str) -> str:
    return sku.strip().upper()


def _body_of(sku: str) -> str:
    """Hyphenless SKU without its trailing check digit."""
    return sku.replace(SKU_SEPARATOR, "")[:-1]


class InMemoryCatalogRepository(ICatalogRepository):
    """Concrete catalog repository backed by Python sets."""

    def __init__(self, skus: Iterable[str] = ()) -> None:
        self._lock = threading.Lock()
        self._skus: set[str] = set()
        self._bodies: set[str] = set()
        for sku in skus:
            self.reserve(sku)

    def exists_by_sku(self, candidate: str) -> bool:
        key = _normalise(candidate)
        with self._lock:
            return key in self._skus or key in self._bodies

    def reserve(self, sku: str) -> str:
        """Record *sku* as assigned and return its normalised form.

        Check and insert happen under one lock, so concurrent callers
        cannot both reserve the same code.

        Raises:
            SkuAlreadyReserved: the SKU is already recorded.
        """
        key = _normalise(sku)
        with self._lock:
            if key in self._skus:
                logger.warning("sku.duplicate_reservation", sku=key)
                raise SkuAlreadyReserved(f"SKU '{key}' already registered.")
            self._skus.add(key)
            self._bodies.add(_body_of(key))
        logger.info("sku.reserved", sku=key)
        return key

    def __contains__(self, sku: object) -> bool:
        return isinstance(sku, str) and self.exists_by_sku(sku)

    def __len__(self) -> int:
        with self._lock:
            return len(self._skus)
