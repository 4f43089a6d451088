"""Sequence allocator.

Picks the four-digit ``NNNN`` segment for a SKU prefix by drawing random
candidates and asking the catalog repository whether ``prefix + NNNN``
is already taken.  The allocator only reads; reserving the finished SKU
is the caller's job.
"""

from __future__ import annotations

import secrets
import time
from typing import TYPE_CHECKING, Callable, Optional, Protocol

import structlog

from catalog.config import settings
from catalog.shared.infrastructure.bus import event_bus as default_event_bus
from catalog.sku.constants import SEQUENCE_MAX, SEQUENCE_MIN, SEQUENCE_WIDTH
from catalog.sku.events import SequenceFallbackUsed
from catalog.sku.exceptions import CatalogUnavailable

if TYPE_CHECKING:
    from catalog.shared.domain.bus import IEventBus
    from catalog.sku.repositories.interfaces import ICatalogRepository

logger = structlog.get_logger(__name__)


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


def sku_exists(repository: ICatalogRepository, candidate: str) -> bool:
    """Ask the repository about *candidate*, normalising its failures.

    Raises:
        CatalogUnavailable: the repository raised; the original error is
            chained.
    """
    try:
        return bool(repository.exists_by_sku(candidate))
    except CatalogUnavailable:
        raise
    except Exception as exc:
        raise CatalogUnavailable(
            f"Catalog lookup failed for '{candidate}': {exc}"
        ) from exc


class SequenceAllocator:
    """Allocates collision-checked sequence numbers.

    Receives the repository via constructor injection (DIP); the random
    source, clock and event bus are injectable for tests.
    """

    def __init__(
        self,
        repository: ICatalogRepository,
        max_attempts: Optional[int] = None,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], float] = time.time,
        event_bus: Optional[IEventBus] = None,
    ) -> None:
        self._repo = repository
        self._max_attempts = (
            settings.SKU_SEQUENCE_MAX_ATTEMPTS if max_attempts is None else max_attempts
        )
        self._rng = rng or secrets.SystemRandom()
        self._clock = clock
        self._event_bus = event_bus or default_event_bus

    def allocate(self, prefix: str) -> str:
        """Return a zero-padded four-digit sequence free for *prefix*.

        After ``max_attempts`` taken draws, falls back to the last four
        digits of the current time in milliseconds.  The fallback is
        logged and published as ``SequenceFallbackUsed``; it never raises.

        Raises:
            CatalogUnavailable: the repository could not be queried.
        """
        for _ in range(self._max_attempts):
            candidate = f"{self._rng.randint(SEQUENCE_MIN, SEQUENCE_MAX):0{SEQUENCE_WIDTH}d}"
            if not sku_exists(self._repo, f"{prefix}{candidate}"):
                return candidate

        sequence = self._clock_sequence()
        logger.warning(
            "sku.sequence_fallback",
            prefix=prefix,
            sequence=sequence,
            attempts=self._max_attempts,
        )
        self._event_bus.publish(
            SequenceFallbackUsed(
                prefix=prefix, sequence=sequence, attempts=self._max_attempts
            )
        )
        return sequence

    def _clock_sequence(self) -> str:
        millis = int(self._clock() * 1000)
        return f"{millis % 10 ** SEQUENCE_WIDTH:0{SEQUENCE_WIDTH}d}"
