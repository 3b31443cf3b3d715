"""Australian Business Number checks."""

import re

ABN_WEIGHTS = (10, 1, 3, 5, 7, 9, 11, 13, 15, 17, 19)

_NON_DIGIT = re.compile(r"\D")


def sanitize_abn(value: str | None) -> str | None:
    """Strip everything but digits; None when nothing is left."""
    if not value:
        return None
    digits = _NON_DIGIT.sub("", value)
    return digits or None


def is_valid_abn(value: str | None) -> bool:
    """Check an ABN against the ATO weighted modulus-89 checksum.

    Spaces and other separators are ignored, so "51 824 753 556" and
    "51824753556" are equivalent.
    """
    digits = sanitize_abn(value)
    if not digits or len(digits) != 11:
        return False

    numbers = [int(d) for d in digits]
    numbers[0] -= 1
    checksum = sum(n * w for n, w in zip(numbers, ABN_WEIGHTS))
    return checksum % 89 == 0


def format_abn(value: str | None) -> str | None:
    """Group a valid-length ABN as "NN NNN NNN NNN" for display."""
    digits = sanitize_abn(value)
    if not digits or len(digits) != 11:
        return value
    return f"{digits[:2]} {digits[2:5]} {digits[5:8]} {digits[8:]}"
