"""SKU DTOs.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``ProductAttributesDTO``: attribute payload a SKU is generated from.
- ``ValidationResultDTO``: outcome of ``validate``.
- ``ParsedSkuDTO``: decoded SKU segments.
- ``BatchItemResultDTO``: one entry of ``generate_batch``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class ProductAttributesDTO(BaseModel):
    """Immutable attribute payload.

    No field is required; missing values degrade to fallback codes.
    Unknown keys are ignored so a full product payload can be passed in.

    Validates:
    - ``price`` is finite and non-negative.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    category: Optional[str] = None
    subcategory: Optional[str] = None
    brand: Optional[str] = None
    tags: tuple[str, ...] = ()
    price: Optional[Decimal] = None

    @field_validator("name", mode="before")
    @classmethod
    def name_none_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def tags_none_is_empty(cls, v: Any) -> Any:
        return () if v is None else v

    @field_validator("price")
    @classmethod
    def price_must_be_non_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and (not v.is_finite() or v < 0):
            raise ValueError("Price must be a non-negative number.")
        return v


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class ValidationResultDTO(BaseModel):
    """Result of SKU validation.

    ``error`` is ``"format"`` when the string is not a SKU at all and
    ``"checksum"`` when it looks like one but the check digit is wrong.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    error: Optional[Literal["format", "checksum"]] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> ValidationResultDTO:
        return cls(valid=True)

    @classmethod
    def format_error(cls, message: str = "invalid SKU format") -> ValidationResultDTO:
        return cls(valid=False, error="format", message=message)

    @classmethod
    def checksum_error(cls) -> ValidationResultDTO:
        return cls(valid=False, error="checksum", message="invalid check digit")


class ParsedSkuDTO(BaseModel):
    """Decoded SKU.

    Raw codes are always present.  Named fields are ``None`` when the code
    came from a fallback or a truncated name and has no table entry.
    """

    model_config = ConfigDict(frozen=True)

    category_code: str
    category: Optional[str]
    subcategory_code: str
    subcategory: Optional[str]
    material_code: str
    material: Optional[str]
    brand_code: str
    price_code: str
    price_range: str
    sequence: str
    check_digit: int
    is_valid: bool


class BatchItemResultDTO(BaseModel):
    """Outcome of generating one SKU inside a batch."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    input: Any
    sku: Optional[str] = None
    success: bool
    error: Optional[str] = None
