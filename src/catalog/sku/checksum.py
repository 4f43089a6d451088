"""Luhn-style check digit over an alphanumeric SKU body.

Digits keep their value and ``A``-``Z`` map to 1-26.  Starting from the
rightmost character, every other value is doubled (9 is subtracted when
the result exceeds 9) and the check digit brings the total to a multiple
of ten.  On a purely numeric body this is the standard Luhn digit.
"""

from __future__ import annotations

_LETTER_OFFSET = ord("A") - 1


def char_value(char: str) -> int:
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "A" <= char <= "Z":
        return ord(char) - _LETTER_OFFSET
    raise ValueError(f"Character {char!r} cannot appear in a SKU body.")


def compute_check_digit(body: str) -> int:
    """Return the check digit (0-9) for a hyphenless SKU body.

    Raises:
        ValueError: ``body`` contains anything other than ``0-9``/``A-Z``.
    """
    total = 0
    for index, value in enumerate(char_value(c) for c in reversed(body)):
        if index % 2 == 0:
            value *= 2
            if value > 9:
                value -= 9
        total += value
    return (10 - total % 10) % 10


def is_valid_check_digit(body: str, check_digit: int) -> bool:
    return compute_check_digit(body) == check_digit
