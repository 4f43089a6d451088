"""Unit tests for SKU DTOs.

Covers:
- ProductAttributesDTO: defaults, coercion, price validation, frozen.
- ValidationResultDTO factories.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from catalog.sku.dtos import BatchItemResultDTO, ProductAttributesDTO, ValidationResultDTO

pytestmark = pytest.mark.unit


class TestProductAttributesDTO:
    def test_all_fields_optional(self):
        dto = ProductAttributesDTO()
        assert dto.name == ""
        assert dto.category is None
        assert dto.subcategory is None
        assert dto.brand is None
        assert dto.tags == ()
        assert dto.price is None

    def test_tags_list_becomes_tuple(self):
        dto = ProductAttributesDTO(tags=["gold", "gift"])
        assert dto.tags == ("gold", "gift")

    def test_none_name_and_tags(self):
        dto = ProductAttributesDTO(name=None, tags=None)
        assert dto.name == ""
        assert dto.tags == ()

    def test_price_coerced_to_decimal(self):
        assert ProductAttributesDTO(price=1500).price == Decimal("1500")

    def test_zero_price_allowed(self):
        assert ProductAttributesDTO(price=0).price == Decimal("0")

    def test_negative_price_raises(self):
        with pytest.raises(ValidationError, match="non-negative"):
            ProductAttributesDTO(price=Decimal("-0.01"))

    def test_extra_fields_ignored(self):
        dto = ProductAttributesDTO.model_validate({"name": "Ring", "stock": 4, "sku": "X"})
        assert dto.name == "Ring"
        assert not hasattr(dto, "stock")

    def test_frozen(self):
        dto = ProductAttributesDTO(name="Ring")
        with pytest.raises(ValidationError):
            dto.name = "Bracelet"


class TestValidationResultDTO:
    def test_ok(self):
        result = ValidationResultDTO.ok()
        assert result.valid is True
        assert result.error is None

    def test_format_error(self):
        result = ValidationResultDTO.format_error()
        assert (result.valid, result.error) == (False, "format")

    def test_checksum_error(self):
        result = ValidationResultDTO.checksum_error()
        assert (result.valid, result.error) == (False, "checksum")
        assert result.message == "invalid check digit"

    def test_unknown_error_kind_rejected(self):
        with pytest.raises(ValidationError):
            ValidationResultDTO(valid=False, error="other")


class TestBatchItemResultDTO:
    def test_failure_entry(self):
        entry = BatchItemResultDTO(input={"name": "Ring"}, success=False, error="boom")
        assert entry.sku is None
        assert entry.input == {"name": "Ring"}
