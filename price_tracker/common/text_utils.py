"""
Text Utilities

Helper functions for normalizing text scraped from product pages.
"""

import math
import re
from typing import Optional

# Leading decimal number, read the way a browser's parseFloat reads it
_DECIMAL_PREFIX = re.compile(r'\d+(?:\.\d*)?|\.\d+')
_INTEGER_PREFIX = re.compile(r'\s*([+-]?\d+)')


def clean_text(text: str) -> str:
    """Collapse runs of whitespace and strip the ends."""
    if not text:
        return ""
    return re.sub(r'\s+', ' ', text).strip()


def parse_price(text: Optional[str]) -> float:
    """
    Normalize a localized price string into a number.

    Every character except digits, '.' and ',' is dropped, then the first
    comma is read as a decimal separator. Thousands-grouped values such as
    "1,234" therefore come out as 1.234.

    Args:
        text: Raw price text (e.g. "₴199.99", "199,99₴", "1 299 грн")

    Returns:
        Parsed price, or 0.0 when the text holds no number
    """
    if not text:
        return 0.0

    cleaned = re.sub(r'[^\d.,]', '', text)
    with_dot = cleaned.replace(',', '.', 1)

    match = _DECIMAL_PREFIX.match(with_dot)
    if not match:
        return 0.0

    price = float(match.group(0))
    if not math.isfinite(price):
        return 0.0
    return price


def parse_percent(text: Optional[str]) -> Optional[int]:
    """
    Parse a discount badge such as "-25%" into 25.

    Returns:
        The integer percentage, or None when the badge holds no number
    """
    if not text:
        return None

    stripped = re.sub(r'[-%]', '', text.strip())
    match = _INTEGER_PREFIX.match(stripped)
    if not match:
        return None
    return int(match.group(1))


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, matching storefront percent badges."""
    return int(math.floor(value + 0.5))
