"""Facet extraction for the shop sidebar."""

import math
from typing import Any, Iterable, List, Optional

from .catalog_models import DEFAULT_PRICE_BOUNDS, FacetSet, PriceBounds, get_field
from .price import effective_price
from .string_utils import as_text


def _distinct_values(items: List[Any], key: str) -> List[str]:
    """Collect non-empty text values of a field, keeping first-seen order."""
    seen = set()
    values = []
    for item in items:
        value = as_text(get_field(item, key))
        if value is not None and value not in seen:
            seen.add(value)
            values.append(value)
    return values


def price_bounds(items: Iterable[Any]) -> PriceBounds:
    """Calculate the whole-number price range covering every priced item.

    Items without a usable price are ignored. An unpriced catalog gets the
    default bounds.

    Args:
        items: Catalog items

    Returns:
        PriceBounds with floor of the lowest and ceiling of the highest price
    """
    prices = [price for price in (effective_price(item) for item in items) if price > 0]
    if not prices:
        return DEFAULT_PRICE_BOUNDS
    return PriceBounds(math.floor(min(prices)), math.ceil(max(prices)))


def extract_facets(items: Optional[Iterable[Any]]) -> FacetSet:
    """Derive categories, types and price bounds from a catalog snapshot.

    Args:
        items: Catalog items (None is treated as an empty catalog)

    Returns:
        FacetSet for populating the filter sidebar
    """
    catalog = list(items or [])
    return FacetSet(
        categories=_distinct_values(catalog, "category"),
        types=_distinct_values(catalog, "type"),
        price_bounds=price_bounds(catalog),
    )
