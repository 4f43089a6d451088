"""Pure SKU codec: segment encoding, assembly, validation and parsing.

Nothing here touches the catalog repository; see ``services`` for
generation with uniqueness checks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from catalog.config import settings
from catalog.sku.checksum import compute_check_digit, is_valid_check_digit
from catalog.sku.constants import (
    CATEGORY_CODES,
    MATERIAL_CODES,
    SKU_PATTERN,
    SKU_SEPARATOR,
    SUBCATEGORY_CODES,
    price_range_label,
)
from catalog.sku.dtos import ParsedSkuDTO, ProductAttributesDTO, ValidationResultDTO
from catalog.sku.encoders import (
    classify_tier,
    encode_brand,
    encode_category,
    encode_material,
    encode_subcategory,
)


@dataclass(frozen=True)
class SkuSegments:
    """The five attribute-derived segments of a SKU."""

    category: str
    subcategory: str
    material: str
    brand: str
    tier: str

    @property
    def prefix(self) -> str:
        """Hyphenless prefix used as the allocator key."""
        return f"{self.category}{self.subcategory}{self.material}{self.brand}{self.tier}"


def encode_segments(attributes: ProductAttributesDTO) -> SkuSegments:
    return SkuSegments(
        category=encode_category(attributes.category),
        subcategory=encode_subcategory(attributes.subcategory),
        material=encode_material(attributes.name, attributes.tags),
        brand=encode_brand(attributes.brand),
        tier=classify_tier(attributes.price),
    )


def assemble_sku(segments: SkuSegments, sequence: str) -> str:
    """Join segments, sequence and check digit into ``CAT-SUB-MAT-BRD-P-NNNN-C``."""
    check_digit = compute_check_digit(f"{segments.prefix}{sequence}")
    return SKU_SEPARATOR.join(
        (
            segments.category,
            segments.subcategory,
            segments.material,
            segments.brand,
            segments.tier,
            sequence,
            str(check_digit),
        )
    )


def validate_sku(sku: Any) -> ValidationResultDTO:
    """Check format first, then the check digit.

    Never raises: non-strings and malformed strings are format errors.
    """
    if not isinstance(sku, str) or not SKU_PATTERN.fullmatch(sku):
        return ValidationResultDTO.format_error()
    *segments, check_digit = sku.split(SKU_SEPARATOR)
    if not is_valid_check_digit("".join(segments), int(check_digit)):
        return ValidationResultDTO.checksum_error()
    return ValidationResultDTO.ok()


def parse_sku(sku: Any, currency_symbol: Optional[str] = None) -> Optional[ParsedSkuDTO]:
    """Decode a SKU into its segments; ``None`` unless it validates."""
    if not validate_sku(sku).valid:
        return None
    if currency_symbol is None:
        currency_symbol = settings.SKU_CURRENCY_SYMBOL

    category, subcategory, material, brand, tier, sequence, check_digit = sku.split(
        SKU_SEPARATOR
    )
    return ParsedSkuDTO(
        category_code=category,
        category=CATEGORY_CODES.name_for(category),
        subcategory_code=subcategory,
        subcategory=SUBCATEGORY_CODES.name_for(subcategory),
        material_code=material,
        material=MATERIAL_CODES.name_for(material),
        brand_code=brand,
        price_code=tier,
        price_range=price_range_label(tier, currency_symbol),
        sequence=sequence,
        check_digit=int(check_digit),
        is_valid=True,
    )
