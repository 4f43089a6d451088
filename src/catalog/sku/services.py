"""SKU service layer (Use Cases).

Generates catalog SKUs from product attributes, delegating uniqueness
look-ups to the injected ``ICatalogRepository``.

Rules enforced here:
- Every generated SKU passes ``validate``.
- Missing or unknown attributes never fail generation (fallback codes).
- The final uniqueness check retries a bounded number of times.
- A failing batch item never aborts the rest of the batch.
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING, Any, Iterable, List, Mapping, Optional, Union

import structlog

from catalog.config import settings
from catalog.shared.infrastructure.bus import event_bus as default_event_bus
from catalog.sku.allocator import SequenceAllocator, sku_exists
from catalog.sku.codec import assemble_sku, encode_segments, parse_sku, validate_sku
from catalog.sku.dtos import (
    BatchItemResultDTO,
    ParsedSkuDTO,
    ProductAttributesDTO,
    ValidationResultDTO,
)
from catalog.sku.events import SkuGenerated
from catalog.sku.exceptions import SkuCollisionError

if TYPE_CHECKING:
    from catalog.shared.domain.bus import IEventBus
    from catalog.sku.repositories.interfaces import ICatalogRepository

logger = structlog.get_logger(__name__)

Attributes = Union[ProductAttributesDTO, Mapping[str, Any]]


class SkuService:
    """Application service for SKU use-cases.

    Receives an ``ICatalogRepository`` via constructor injection (DIP).
    Holds no mutable state, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        repository: ICatalogRepository,
        allocator: Optional[SequenceAllocator] = None,
        max_regenerations: Optional[int] = None,
        event_bus: Optional[IEventBus] = None,
        currency_symbol: Optional[str] = None,
    ) -> None:
        self._repo = repository
        self._event_bus = event_bus or default_event_bus
        self._allocator = allocator or SequenceAllocator(
            repository, event_bus=self._event_bus
        )
        self._max_regenerations = (
            settings.SKU_MAX_REGENERATIONS
            if max_regenerations is None
            else max_regenerations
        )
        self._currency_symbol = currency_symbol

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def generate(self, attributes: Attributes) -> str:
        """Generate a SKU for *attributes*.

        The assembled SKU is checked against the repository once more; on
        a collision the product name gets a random suffix and the SKU is
        rebuilt, up to ``max_regenerations`` times.

        Raises:
            pydantic.ValidationError: the payload is invalid (e.g. a
                negative price).
            CatalogUnavailable: the repository could not be queried.
            SkuCollisionError: every regeneration collided.
        """
        dto = self._coerce(attributes)
        log = logger.bind(product_name=dto.name)

        candidate_attrs = dto
        for attempt in range(self._max_regenerations + 1):
            segments = encode_segments(candidate_attrs)
            sequence = self._allocator.allocate(segments.prefix)
            sku = assemble_sku(segments, sequence)

            if not sku_exists(self._repo, sku):
                log.info("sku.generated", sku=sku, regenerations=attempt)
                self._event_bus.publish(SkuGenerated(sku=sku, regenerations=attempt))
                return sku

            log.warning("sku.final_collision", sku=sku, attempt=attempt)
            candidate_attrs = dto.model_copy(
                update={"name": f"{dto.name} {secrets.token_hex(3)}"}
            )

        raise SkuCollisionError(
            f"Could not generate a unique SKU for '{dto.name}' after "
            f"{self._max_regenerations + 1} attempts."
        )

    def generate_batch(self, items: Iterable[Attributes]) -> List[BatchItemResultDTO]:
        """Generate SKUs one item at a time, capturing per-item failures."""
        results: List[BatchItemResultDTO] = []
        for index, item in enumerate(items):
            try:
                sku = self.generate(item)
            except Exception as exc:
                logger.warning(
                    "sku.batch_item_failed",
                    index=index,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                results.append(
                    BatchItemResultDTO(input=item, sku=None, success=False, error=str(exc))
                )
            else:
                results.append(BatchItemResultDTO(input=item, sku=sku, success=True))

        logger.info(
            "sku.batch_completed",
            total=len(results),
            failed=sum(1 for result in results if not result.success),
        )
        return results

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def validate(self, sku: Any) -> ValidationResultDTO:
        return validate_sku(sku)

    def parse(self, sku: Any) -> Optional[ParsedSkuDTO]:
        return parse_sku(sku, currency_symbol=self._currency_symbol)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _coerce(attributes: Attributes) -> ProductAttributesDTO:
        if isinstance(attributes, ProductAttributesDTO):
            return attributes
        return ProductAttributesDTO.model_validate(attributes)
