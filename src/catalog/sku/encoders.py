"""Field encoders and price tier classifier.

Every encoder is total: any input, including ``None`` and ``""``,
produces a well-formed three-letter code.
"""

from __future__ import annotations

import re
import unicodedata
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Union

from catalog.sku.constants import (
    CATEGORY_CODES,
    FALLBACK_CODE,
    FILLER,
    MATERIAL_CODES,
    MATERIAL_EXCLUSIONS,
    MATERIAL_PRIORITY,
    PRICE_TIERS,
    SUBCATEGORY_CODES,
    UNKNOWN_BRAND_CODE,
    UNSPECIFIED_TIER,
    CodeTable,
)

_NON_LETTERS = re.compile(r"[^A-Za-z]")

_BRAND_NOISE = re.compile(r"\b(?:inc|ltd|llc|corp|company|co|and)\b\.?|&", re.IGNORECASE)


def _fold_ascii(text: str) -> str:
    """Drop accents and any non-ASCII characters ("Élan" -> "Elan")."""
    normalized = unicodedata.normalize("NFKD", text)
    return normalized.encode("ascii", "ignore").decode("ascii")


def _letters(text: str) -> str:
    return _NON_LETTERS.sub("", _fold_ascii(text))


def _pad(code: str) -> str:
    return code.upper().ljust(3, FILLER)


_MATERIAL_KEYWORDS: tuple[tuple[str, str], ...] = tuple(
    (name, name.lower()) for name in MATERIAL_PRIORITY
)


# ---------------------------------------------------------------------------
# Table-backed encoders
# ---------------------------------------------------------------------------


def _encode_from_table(table: CodeTable, name: Optional[str]) -> str:
    if not name or not name.strip():
        return FALLBACK_CODE
    code = table.code_for(name.strip())
    if code is not None:
        return code
    letters = _letters(name)
    if not letters:
        return FALLBACK_CODE
    return _pad(letters[:3])


def encode_category(name: Optional[str]) -> str:
    """Category code: table entry, else the first three letters, else ``GEN``."""
    return _encode_from_table(CATEGORY_CODES, name)


def encode_subcategory(name: Optional[str]) -> str:
    """Subcategory code: table entry, else the first three letters, else ``GEN``."""
    return _encode_from_table(SUBCATEGORY_CODES, name)


def encode_material(name: Optional[str], tags: Iterable[str] = ()) -> str:
    """Detect the material mentioned in the product name or tags.

    Keywords are tried in ``MATERIAL_PRIORITY`` order and the first hit
    wins, so "Sterling Silver Ring" is ``SSL`` rather than ``SLV``.
    Keywords match anywhere in the text ("Golden" is gold); words listed
    in ``MATERIAL_EXCLUSIONS`` are blanked out first.
    """
    text = " ".join([name or "", *(tag for tag in tags if tag)]).lower()
    search_text = " ".join(text.split())
    for material, keyword in _MATERIAL_KEYWORDS:
        candidate = search_text
        for fragment in MATERIAL_EXCLUSIONS.get(material, ()):
            candidate = candidate.replace(fragment, " ")
        if keyword in candidate:
            return MATERIAL_CODES.forward[material]
    return FALLBACK_CODE


def encode_brand(name: Optional[str]) -> str:
    """Brand code derived from the brand name itself.

    Corporate noise ("Inc", "Co.", "&", ...) is removed first.  Short
    names are padded, multi-word names give their initials and single
    words their first three letters::

        "Tiffany & Co."        -> "TIF"
        "Louis Vuitton"        -> "LVX"
        "H&M"                  -> "HMX"
    """
    if not name:
        return UNKNOWN_BRAND_CODE
    cleaned = _BRAND_NOISE.sub(" ", _fold_ascii(name))
    words = [word for word in (_letters(part) for part in cleaned.split()) if word]
    compact = "".join(words)
    if not compact:
        return UNKNOWN_BRAND_CODE
    if len(compact) <= 3:
        return _pad(compact)
    if len(words) >= 2:
        return _pad("".join(word[0] for word in words[:3]))
    return compact[:3].upper()


# ---------------------------------------------------------------------------
# Price tier
# ---------------------------------------------------------------------------


def classify_tier(price: Union[int, float, Decimal, None]) -> str:
    """Map a price to its tier letter; ``None`` means unspecified (``A``).

    Raises:
        ValueError: the price is negative or not a finite number.
    """
    if price is None:
        return UNSPECIFIED_TIER
    try:
        value = Decimal(str(price))
    except InvalidOperation:
        raise ValueError(f"Price {price!r} is not a number.") from None
    if not value.is_finite() or value < 0:
        raise ValueError(f"Price {price!r} must be a non-negative number.")
    return next(tier for threshold, tier in PRICE_TIERS if value >= threshold)
