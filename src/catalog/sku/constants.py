"""SKU code tables and format constants.

Layout: ``CAT-SUB-MAT-BRD-P-NNNN-C``

- ``CAT``/``SUB``/``MAT``/``BRD``: three uppercase letters each.
- ``P``: price tier letter (see ``PRICE_TIERS``).
- ``NNNN``: four-digit sequence.
- ``C``: Luhn-style check digit.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

_CODE_PATTERN = re.compile(r"[A-Z]{3}")


@dataclass(frozen=True)
class CodeTable:
    """Immutable bijective ``name <-> code`` table."""

    label: str
    forward: Mapping[str, str]
    reverse: Mapping[str, str]

    @classmethod
    def from_pairs(cls, label: str, pairs: Mapping[str, str]) -> CodeTable:
        reverse: dict[str, str] = {}
        for name, code in pairs.items():
            if not _CODE_PATTERN.fullmatch(code):
                raise ValueError(f"{label}: code {code!r} for {name!r} is not 3 letters.")
            if code in reverse:
                raise ValueError(
                    f"{label}: code {code!r} used by both {reverse[code]!r} and {name!r}."
                )
            reverse[code] = name
        return cls(
            label=label,
            forward=MappingProxyType(dict(pairs)),
            reverse=MappingProxyType(reverse),
        )

    def code_for(self, name: str) -> Optional[str]:
        return self.forward.get(name)

    def name_for(self, code: str) -> Optional[str]:
        return self.reverse.get(code)

    def __contains__(self, name: object) -> bool:
        return name in self.forward

    def __iter__(self) -> Iterator[str]:
        return iter(self.forward)

    def __len__(self) -> int:
        return len(self.forward)


CATEGORY_CODES = CodeTable.from_pairs(
    "category",
    {
        "Fashion": "FSH",
        "Electronics": "ELE",
        "Beauty": "BTY",
        "Home & Garden": "HGD",
        "Sports": "SPT",
        "Books": "BOK",
        "Toys": "TOY",
        "Health": "HTH",
        "Food": "FOD",
        "Automotive": "AUT",
        "Baby & Kids": "BKD",
        "Pet Supplies": "PET",
    },
)

SUBCATEGORY_CODES = CodeTable.from_pairs(
    "subcategory",
    {
        # Fashion
        "Necklaces": "NCK",
        "Earrings": "EAR",
        "Bracelets": "BRC",
        "Rings": "RNG",
        "Bangles": "BNG",
        "Anklets": "ANK",
        "Brooches": "BRO",
        "Pendants": "PND",
        "Chains": "CHN",
        "Sets": "SET",
        "Watches": "WTC",
        "Sunglasses": "SUN",
        "Bags": "BAG",
        "Shoes": "SHO",
        "Dresses": "DRS",
        "Tops": "TOP",
        "Bottoms": "BTM",
        "Outerwear": "OUT",
        "Accessories": "ACC",
        "Traditional": "TRD",
        # Electronics
        "Smartphones": "SMT",
        "Laptops": "LPT",
        "Tablets": "TAB",
        "Cameras": "CAM",
        "Audio": "AUD",
        "Gaming": "GAM",
        "Smart Home": "SMH",
        "Wearables": "WER",
        # Beauty
        "Skincare": "SKN",
        "Makeup": "MKP",
        "Haircare": "HRC",
        "Fragrance": "FRG",
        "Tools": "TLS",
    },
)

MATERIAL_CODES = CodeTable.from_pairs(
    "material",
    {
        "Gold": "GLD",
        "Silver": "SLV",
        "Platinum": "PLT",
        "Diamond": "DMD",
        "Pearl": "PRL",
        "Ruby": "RBY",
        "Emerald": "EMR",
        "Sapphire": "SPH",
        "Stainless Steel": "SST",
        "Titanium": "TTN",
        "Copper": "CPR",
        "Brass": "BRS",
        "Rose Gold": "RGD",
        "White Gold": "WGD",
        "Yellow Gold": "YGD",
        "Sterling Silver": "SSL",
        "Gemstone": "GEM",
        "Crystal": "CRY",
        "Alloy": "ALY",
        "Leather": "LTH",
        "Fabric": "FBR",
        "Plastic": "PLS",
        "Wood": "WOD",
        "Ceramic": "CER",
        "Glass": "GLS",
    },
)

# Compound names must precede the single words they contain.
MATERIAL_PRIORITY: tuple[str, ...] = (
    "Sterling Silver",
    "Rose Gold",
    "White Gold",
    "Yellow Gold",
    "Stainless Steel",
    "Diamond",
    "Platinum",
    "Gold",
    "Silver",
    "Pearl",
    "Ruby",
    "Emerald",
    "Sapphire",
    "Titanium",
    "Gemstone",
    "Crystal",
    "Copper",
    "Brass",
    "Alloy",
    "Leather",
    "Fabric",
    "Plastic",
    "Wood",
    "Ceramic",
    "Glass",
)

# Words that contain a material keyword without meaning that material.
MATERIAL_EXCLUSIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "Glass": ("sunglass", "spyglass"),
    }
)

FALLBACK_CODE = "GEN"
UNKNOWN_BRAND_CODE = "UNB"
FILLER = "X"

# ---------------------------------------------------------------------------
# Price tiers (inclusive lower bounds, highest first)
# ---------------------------------------------------------------------------

PRICE_TIERS: tuple[tuple[int, str], ...] = (
    (50_000, "P"),
    (20_000, "H"),
    (10_000, "M"),
    (5_000, "L"),
    (0, "B"),
)

UNSPECIFIED_TIER = "A"

TIER_ALPHABET = frozenset(code for _, code in PRICE_TIERS) | {UNSPECIFIED_TIER}

_TIER_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "P": "Premium ({c}50,000+)",
        "H": "High ({c}20,000-{c}50,000)",
        "M": "Medium ({c}10,000-{c}20,000)",
        "L": "Low ({c}5,000-{c}10,000)",
        "B": "Budget (<{c}5,000)",
        "A": "Unspecified",
    }
)


def price_range_label(tier: str, currency_symbol: str = "") -> Optional[str]:
    """Human-readable price range for a tier letter, ``None`` if unknown."""
    template = _TIER_LABELS.get(tier)
    if template is None:
        return None
    return template.format(c=currency_symbol)


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

SEQUENCE_MIN = 1000
SEQUENCE_MAX = 9999
SEQUENCE_WIDTH = 4

SKU_SEPARATOR = "-"
SKU_LENGTH = 24

SKU_PATTERN = re.compile(
    r"[A-Z]{3}-[A-Z]{3}-[A-Z]{3}-[A-Z]{3}"
    rf"-[{''.join(sorted(TIER_ALPHABET))}]-[0-9]{{4}}-[0-9]"
)
