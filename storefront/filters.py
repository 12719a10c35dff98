"""Catalog filtering for the shop page."""

import math
from typing import Any, Iterable, List, Optional

from .catalog_models import CatalogItem, PriceBounds, get_field
from .filter_state import FilterState
from .price import effective_price, parse_price_input
from .string_utils import as_text, contains_ignore_case

# Item fields searched by the free-text search box
SEARCH_FIELDS = ("name", "writer", "category", "type")


def item_rating(item: Any) -> float:
    """Read an item's rating as a number, treating anything unreadable as 0."""
    raw = get_field(item, "ratings")
    if isinstance(raw, bool) or raw is None:
        return 0.0
    try:
        rating = float(raw)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return rating if math.isfinite(rating) else 0.0


def matches_search(item: Any, search_term: str) -> bool:
    """Check if any searchable field contains the search term (case-insensitive)."""
    if not search_term:
        return True
    return any(contains_ignore_case(as_text(get_field(item, key)), search_term) for key in SEARCH_FIELDS)


def matches_category(item: Any, state: FilterState) -> bool:
    if not state.categories:
        return True
    category = as_text(get_field(item, "category"))
    return category is not None and category in state.categories


def matches_type(item: Any, state: FilterState) -> bool:
    if not state.types:
        return True
    item_type = as_text(get_field(item, "type"))
    return item_type is not None and item_type in state.types


def matches_price(item: Any, state: FilterState, bounds: PriceBounds) -> bool:
    """Check if the item's effective price lies within the selected range.

    An empty or unreadable boundary (or one reading as 0) falls back to the
    catalog bound. Unpriced items compare as 0.
    """
    low = parse_price_input(state.min_price) or bounds.min
    high = parse_price_input(state.max_price) or bounds.max
    return low <= effective_price(item) <= high


def matches_rating(item: Any, state: FilterState) -> bool:
    """Check if the item's whole-star rating reaches any selected threshold."""
    if not state.ratings:
        return True
    stars = math.floor(item_rating(item))
    return any(stars >= threshold for threshold in state.ratings)


def matches_filters(item: Any, state: FilterState, bounds: PriceBounds) -> bool:
    """Check a single item against every active criterion."""
    return (
        matches_search(item, state.search_term)
        and matches_category(item, state)
        and matches_type(item, state)
        and matches_price(item, state, bounds)
        and matches_rating(item, state)
    )


def apply_filters(
    items: Optional[Iterable[CatalogItem]], state: FilterState, bounds: PriceBounds
) -> List[CatalogItem]:
    """Filter catalog items by search term, category, type, price and rating.

    Args:
        items: Catalog items (None is treated as an empty catalog)
        state: Current filter state
        bounds: Price bounds of the current catalog

    Returns:
        Matching items in catalog order
    """
    return [item for item in (items or []) if matches_filters(item, state, bounds)]


def visible_items(
    items: Optional[Iterable[CatalogItem]], state: FilterState, bounds: PriceBounds
) -> List[CatalogItem]:
    """Return the items the shop page should display.

    Same as apply_filters(), except that an empty result is replaced by the
    full catalog when nothing narrows it (no search term, no active filter).
    """
    catalog = list(items or [])
    filtered = apply_filters(catalog, state, bounds)
    if not filtered and catalog and not state.has_active_criteria(bounds):
        return catalog
    return filtered
