"""Unit tests for SkuService.

Covers:
- generate: happy path, empty payload, mappings, final-collision retries.
- Round-trip of table values through parse(generate(...)).
- generate_batch: partial failure semantics and ordering.
- validate / parse delegation.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from catalog.sku.allocator import SequenceAllocator
from catalog.sku.dtos import ProductAttributesDTO
from catalog.sku.events import SkuGenerated
from catalog.sku.exceptions import CatalogUnavailable, SkuCollisionError
from catalog.sku.services import SkuService

pytestmark = pytest.mark.unit

NECKLACE = {
    "name": "18k Gold Necklace",
    "category": "Fashion",
    "subcategory": "Necklaces",
    "brand": "Tiffany & Co.",
    "price": 55000,
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _service(repo, rng, bus, **kwargs) -> SkuService:
    allocator = SequenceAllocator(repo, rng=rng, event_bus=bus)
    return SkuService(repository=repo, allocator=allocator, event_bus=bus, **kwargs)


@pytest.fixture()
def service(repo, rng, bus):
    return _service(repo, rng, bus)


# ===========================================================================
# generate
# ===========================================================================


class TestGenerate:
    def test_success(self, service):
        assert service.generate(NECKLACE) == "FSH-NCK-GLD-TIF-P-1234-1"

    def test_accepts_dto(self, service):
        dto = ProductAttributesDTO(**NECKLACE)
        assert service.generate(dto) == "FSH-NCK-GLD-TIF-P-1234-1"

    def test_empty_payload_uses_fallbacks(self, service):
        sku = service.generate({})

        assert sku.startswith("GEN-GEN-GEN-UNB-A-1234-")
        assert service.validate(sku).valid is True

    def test_generated_sku_is_valid(self, repo, bus):
        service = SkuService(repository=repo, event_bus=bus)
        payloads = [
            NECKLACE,
            {"name": "Sterling Silver Ring", "brand": "Pandora", "price": 7500},
            {"name": "Laptop Sleeve", "category": "Gadgets", "subcategory": "Cases"},
            {"name": "Mystery box", "price": 0},
        ]
        for payload in payloads:
            sku = service.generate(payload)
            assert service.validate(sku).valid is True, sku

    def test_does_not_reserve(self, service, repo):
        service.generate(NECKLACE)
        assert len(repo) == 0

    def test_publishes_event(self, service, recorded_events):
        sku = service.generate(NECKLACE)

        assert len(recorded_events) == 1
        assert isinstance(recorded_events[0], SkuGenerated)
        assert recorded_events[0].sku == sku
        assert recorded_events[0].regenerations == 0

    def test_failing_subscriber_does_not_break_generate(
        self, service, bus, failing_handler, recorded_events
    ):
        bus.subscribe(SkuGenerated, failing_handler)

        assert service.generate(NECKLACE) == "FSH-NCK-GLD-TIF-P-1234-1"
        assert [e.sku for e in recorded_events] == ["FSH-NCK-GLD-TIF-P-1234-1"]

    def test_negative_price_raises(self, service):
        with pytest.raises(ValidationError, match="non-negative"):
            service.generate({"name": "Ring", "price": -5})

    def test_repository_outage_propagates(self, rng, bus):
        repo = MagicMock()
        repo.exists_by_sku.side_effect = TimeoutError("catalog timeout")
        service = _service(repo, rng, bus)

        with pytest.raises(CatalogUnavailable, match="catalog timeout"):
            service.generate(NECKLACE)


class TestFinalCollision:
    def test_regenerates_once(self, mock_repo, rng, bus, recorded_events):
        rng.randint.side_effect = [1234, 5678]
        # allocator lookup, final check (taken), allocator lookup, final check
        mock_repo.exists_by_sku.side_effect = [False, True, False, False]
        service = _service(mock_repo, rng, bus)

        sku = service.generate(NECKLACE)

        assert sku.startswith("FSH-NCK-GLD-TIF-P-5678-")
        assert mock_repo.exists_by_sku.call_count == 4
        assert recorded_events[-1].regenerations == 1

    def test_final_check_uses_formatted_sku(self, mock_repo, rng, bus):
        service = _service(mock_repo, rng, bus)
        service.generate(NECKLACE)

        lookups = [c.args[0] for c in mock_repo.exists_by_sku.call_args_list]
        assert lookups == ["FSHNCKGLDTIFP1234", "FSH-NCK-GLD-TIF-P-1234-1"]

    def test_bounded_regeneration(self, mock_repo, rng, bus):
        mock_repo.exists_by_sku.side_effect = lambda candidate: "-" in candidate
        service = _service(mock_repo, rng, bus, max_regenerations=2)

        with pytest.raises(SkuCollisionError, match="after 3 attempts"):
            service.generate(NECKLACE)
        assert mock_repo.exists_by_sku.call_count == 6

    def test_regeneration_keeps_segments(self, mock_repo, rng, bus):
        rng.randint.side_effect = [1234, 4321]
        mock_repo.exists_by_sku.side_effect = [False, True, False, False]
        service = _service(mock_repo, rng, bus)

        parsed = service.parse(service.generate(NECKLACE))

        assert parsed.material == "Gold"
        assert parsed.sequence == "4321"


# ===========================================================================
# Round trip
# ===========================================================================


class TestRoundTrip:
    @pytest.mark.parametrize(
        "payload, category, subcategory, material",
        [
            (NECKLACE, "Fashion", "Necklaces", "Gold"),
            (
                {"name": "Rose Gold Smartwatch", "category": "Electronics", "subcategory": "Wearables"},
                "Electronics",
                "Wearables",
                "Rose Gold",
            ),
            (
                {"name": "Serum", "category": "Beauty", "subcategory": "Skincare", "tags": ["glass bottle"]},
                "Beauty",
                "Skincare",
                "Glass",
            ),
        ],
    )
    def test_parse_recovers_table_names(self, service, payload, category, subcategory, material):
        parsed = service.parse(service.generate(payload))

        assert parsed.category == category
        assert parsed.subcategory == subcategory
        assert parsed.material == material
        assert parsed.is_valid is True

    def test_price_label_uses_configured_currency(self, repo, rng, bus):
        service = _service(repo, rng, bus, currency_symbol="$")
        parsed = service.parse(service.generate({"price": Decimal("12000")}))

        assert parsed.price_code == "M"
        assert parsed.price_range == "Medium ($10,000-$20,000)"


# ===========================================================================
# generate_batch
# ===========================================================================


class TestGenerateBatch:
    def test_partial_failure(self, rng, bus):
        def exists(candidate):
            if candidate.startswith("ELE"):
                raise ConnectionError("replica lag")
            return False

        repo = MagicMock()
        repo.exists_by_sku.side_effect = exists
        service = _service(repo, rng, bus)
        items = [
            NECKLACE,
            {"name": "Phone", "category": "Electronics"},
            {"name": "Lipstick", "category": "Beauty"},
        ]

        results = service.generate_batch(items)

        assert [r.success for r in results] == [True, False, True]
        assert [r.input for r in results] == items
        assert results[0].sku == "FSH-NCK-GLD-TIF-P-1234-1"
        assert results[1].sku is None
        assert "replica lag" in results[1].error
        assert results[2].sku.startswith("BTY-")

    def test_invalid_payload_is_captured(self, service):
        results = service.generate_batch([{"price": -1}, NECKLACE])

        assert results[0].success is False
        assert "non-negative" in results[0].error
        assert results[1].success is True

    def test_empty_batch(self, service):
        assert service.generate_batch([]) == []

    def test_accepts_generator(self, service):
        results = service.generate_batch(dict(NECKLACE) for _ in range(2))
        assert len(results) == 2


# ===========================================================================
# Queries
# ===========================================================================


class TestQueries:
    def test_validate(self, service):
        assert service.validate("not-a-sku").error == "format"
        assert service.validate("FSH-NCK-GLD-TIF-P-1234-1").valid is True

    def test_parse_invalid(self, service):
        assert service.parse("FSH-NCK-GLD-TIF-P-1234-9") is None
