"""
Parsing of human-readable base counts such as ``5000``, ``10Mb`` or ``1Gb``.
"""

import re

_QUANTITY_PATTERN = re.compile(r"([0-9]+)(mb|gb)?", re.IGNORECASE)

MULTIPLIERS = {
    None: 1,
    "mb": 1_000_000,
    "gb": 1_000_000_000,
}


class InvalidFormat(ValueError):
    """Raised when a base count string cannot be parsed."""


def parse_base_count(text: str) -> int:
    """
    Parse a target base count.

    Accepts a plain decimal integer, or an integer immediately followed by
    ``Mb`` or ``Gb`` (case-insensitive).
    """
    match = _QUANTITY_PATTERN.fullmatch(text)
    if match is None:
        raise InvalidFormat(f"Invalid base count: {text!r}")

    digits, suffix = match.groups()
    return int(digits) * MULTIPLIERS[suffix.lower() if suffix else None]
