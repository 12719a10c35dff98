"""Text output formatting for the shop page."""

from typing import Any, List

from .catalog_models import FacetSet, get_field
from .config import config
from .controller import ShopView
from .filter_state import RATING_OPTIONS, FilterState
from .filters import item_rating
from .price import effective_price
from .string_utils import as_text, pluralize

# Minimum separator width for visual consistency
MIN_SEPARATOR_WIDTH = 50

SECTION_TITLES = {
    "price": "Price Range",
    "categories": "Categories",
    "type": "Type",
    "ratings": "Rating",
}


def format_price(price: float) -> str:
    """Format an effective price, showing a dash for unpriced items."""
    if price <= 0:
        return "—"
    return f"{config.currency_symbol}{price:.2f}"


def format_stars(threshold: int) -> str:
    return "★" * threshold + "☆" * (5 - threshold)


def _section_header(state: FilterState, section: str) -> str:
    marker = "▾" if state.is_expanded(section) else "▸"
    return f"{marker} {SECTION_TITLES[section]}"


def _checkbox(checked: bool, label: str) -> str:
    return f"    [{'x' if checked else ' '}] {label}"


def format_sidebar(facets: FacetSet, state: FilterState, active_count: int) -> List[str]:
    """Format the filter sidebar, honouring collapsed sections.

    Args:
        facets: Facets of the current catalog
        state: Current filter state
        active_count: Number of active filters

    Returns:
        Sidebar lines
    """
    bounds = facets.price_bounds
    lines = [f"Filters ({active_count} active)"]

    lines.append(_section_header(state, "price"))
    if state.is_expanded("price"):
        lines.append(f"    Min: {state.min_price or '-'}   Max: {state.max_price or '-'}")
        lines.append(f"    Range: {config.currency_symbol}{bounds.min} - {config.currency_symbol}{bounds.max}")

    if facets.categories:
        lines.append(_section_header(state, "categories"))
        if state.is_expanded("categories"):
            lines.extend(_checkbox(category in state.categories, category) for category in facets.categories)

    if facets.types:
        lines.append(_section_header(state, "type"))
        if state.is_expanded("type"):
            lines.extend(_checkbox(item_type in state.types, item_type) for item_type in facets.types)

    lines.append(_section_header(state, "ratings"))
    if state.is_expanded("ratings"):
        lines.extend(
            _checkbox(rating in state.ratings, f"{format_stars(rating)} & up") for rating in RATING_OPTIONS
        )

    return lines


def format_item_line(item: Any) -> str:
    """Format a single catalog item for text output."""
    name = as_text(get_field(item, "name")) or "Untitled"
    writer = as_text(get_field(item, "writer"))
    item_type = as_text(get_field(item, "type"))

    line = name
    if writer:
        line = f"{line} by {writer}"
    if item_type:
        line = f"{line} ({item_type})"
    return f"{line}  {format_price(effective_price(item))}  ★ {item_rating(item):.1f}"


def format_results(view: ShopView) -> List[str]:
    """Format the main content area: banners, chips and result list."""
    state = view.state

    if view.loading:
        return ["Loading books..."]

    if view.error:
        return [f"⚠️  {view.error}", "Retry to load the catalog again."]

    lines = []
    if view.show_search_info:
        count = len(view.items)
        lines.append(f'Showing {count} {pluralize(count, "result", "results")} for "{state.search_term}"')

    if view.active_filter_count > 0:
        lines.append("Active Filters: " + " · ".join(chip.label for chip in view.chips))

    if not view.items:
        if state.search_term:
            lines.append("No books found")
            lines.append(
                f"We couldn't find any books matching \"{state.search_term}\". "
                "Try adjusting your search or filters."
            )
        else:
            lines.append("No books available")
            lines.append("There are currently no books available in this category.")
        return lines

    title = f'Search Results for "{state.search_term}"' if state.search_term else "All"
    lines.append(f"{title} ({len(view.items)} of {view.catalog_size})")
    lines.extend(f"  {format_item_line(item)}" for item in view.items)
    return lines


def print_shop_text(view: ShopView) -> None:
    """Print the shop page in text format optimized for terminal."""
    sidebar = format_sidebar(view.facets, view.state, view.active_filter_count)
    results = format_results(view)

    max_line_len = max(len(line) for line in sidebar + results)
    separator_width = max(max_line_len, MIN_SEPARATOR_WIDTH)

    print("\n📚 Shop")
    print("=" * separator_width)
    for line in sidebar:
        print(line)
    print("-" * separator_width)
    for line in results:
        print(line)
    print("=" * separator_width)
