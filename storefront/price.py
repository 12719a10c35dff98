"""Price normalization for loosely typed catalog entries."""

import math
import re
from typing import Any, Optional

from .catalog_models import get_field

# Compile regex patterns at module level for better performance
PRICE_NOISE_PATTERN = re.compile(r"[^\d.\-]")
LEADING_FLOAT_PATTERN = re.compile(r"-?(\d+\.?\d*|\.\d+)")
INTEGER_INPUT_PATTERN = re.compile(r"[+-]?\d+")

# Price fields in order of preference when picking the price a customer pays
EFFECTIVE_PRICE_FIELDS = ("discountPrice", "oldPrice")


def normalize_price(raw: Any) -> float:
    """Convert a catalog price field into a non-negative number.

    Numbers are returned unchanged when finite and non-negative. Text has
    currency symbols and thousands separators stripped before the leading
    number is parsed, so "$1,299.00" becomes 1299.0.

    Args:
        raw: Price as stored in the catalog (number, text, or anything else)

    Returns:
        Parsed price, or 0 when the value is missing, invalid or negative
    """
    if isinstance(raw, bool):
        return 0.0

    if isinstance(raw, (int, float)):
        try:
            if math.isfinite(raw) and raw >= 0:
                return raw
        except OverflowError:
            # Integers beyond float range are not usable prices
            return 0.0
        return 0.0

    if isinstance(raw, str):
        cleaned = PRICE_NOISE_PATTERN.sub("", raw)
        match = LEADING_FLOAT_PATTERN.match(cleaned)
        if match:
            value = float(match.group(0))
            if math.isfinite(value) and value >= 0:
                return value

    return 0.0


def effective_price(item: Any) -> float:
    """Return the price used for filtering and display.

    The discounted price wins over the original price; a missing, zero or
    invalid discount falls through to the original price.

    Args:
        item: Catalog item

    Returns:
        Effective price, or 0 when the item has no usable price
    """
    for key in EFFECTIVE_PRICE_FIELDS:
        price = normalize_price(get_field(item, key))
        if price > 0:
            return price
    return 0.0


def parse_price_input(value: Any) -> Optional[int]:
    """Read a whole number from a price input field.

    Leading whitespace and a sign are accepted and anything after the
    digits is ignored, so "15.99" reads as 15.

    Args:
        value: Text typed into a min/max price field (numbers are accepted too)

    Returns:
        Parsed integer, or None if the input does not start with a number
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None

    match = INTEGER_INPUT_PATTERN.match(str(value).strip())
    if match:
        return int(match.group(0))
    return None


def coerce_price_input(value: Any) -> str:
    """Coerce user input for a price field into its stored string form.

    Empty input stays empty (meaning "use the catalog bound"); anything
    else becomes a non-negative integer, with unreadable input stored as 0.

    Examples:
        >>> coerce_price_input("")
        ''
        >>> coerce_price_input("25")
        '25'
        >>> coerce_price_input("-5")
        '0'
        >>> coerce_price_input("abc")
        '0'
    """
    if value is None or value == "":
        return ""

    parsed = parse_price_input(value) or 0
    return str(max(parsed, 0))
