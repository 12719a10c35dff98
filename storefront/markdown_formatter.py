"""Markdown output formatting for the shop page."""

from typing import Any

from .catalog_models import get_field
from .controller import ShopView
from .filters import item_rating
from .price import effective_price
from .string_utils import as_text, pluralize
from .text_formatter import format_price


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|")


def format_item_row(item: Any) -> str:
    """Format a single catalog item as a markdown table row."""
    name = _escape_cell(as_text(get_field(item, "name")) or "Untitled")
    writer = _escape_cell(as_text(get_field(item, "writer")) or "-")
    item_type = _escape_cell(as_text(get_field(item, "type")) or "book")
    price = format_price(effective_price(item))
    return f"| **{name}** | {writer} | {item_type} | {price} | {item_rating(item):.1f} |"


def print_shop_markdown(view: ShopView) -> None:
    """Print the shop page in markdown format."""
    state = view.state
    print("\n# 📚 Shop\n")

    if view.loading:
        print("_Loading books..._\n")
        return

    if view.error:
        print(f"> ⚠️ **{view.error}**. Retry to load the catalog again.\n")
        return

    if view.show_search_info:
        count = len(view.items)
        print(f'Showing **{count}** {pluralize(count, "result", "results")} for "{state.search_term}"\n')

    if view.active_filter_count > 0:
        print(f"**Active Filters ({view.active_filter_count}):** " + " · ".join(f"`{chip.label}`" for chip in view.chips))
        print()

    if not view.items:
        if state.search_term:
            print("## No books found\n")
            print(
                f"We couldn't find any books matching \"{state.search_term}\". "
                "Try adjusting your search or filters.\n"
            )
        else:
            print("## No books available\n")
            print("There are currently no books available in this category.\n")
        return

    title = f'Search Results for "{state.search_term}"' if state.search_term else "All"
    print(f"## {title}\n")
    print("| Book | Writer | Type | Price | Rating |")
    print("|------|--------|------|-------|--------|")
    for item in view.items:
        print(format_item_row(item))

    print("\n---\n")
