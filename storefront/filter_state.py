"""Filter state for the shop page.

FilterState is immutable: every update returns a new instance, so a caller
holding an older state never sees it change underneath it.
"""

from dataclasses import dataclass, replace
from typing import Any, FrozenSet, List

from .catalog_models import PriceBounds
from .config import config
from .price import coerce_price_input

# Filters holding a set of selected values
SET_FIELDS = ("categories", "types", "ratings")

# Filters holding an editable price boundary
PRICE_FIELDS = ("min_price", "max_price")

# Rating thresholds offered in the sidebar, highest first
RATING_OPTIONS = (4, 3, 2, 1)


@dataclass(frozen=True)
class FilterChip:
    """One removable active-filter badge."""

    field: str
    value: Any
    label: str


@dataclass(frozen=True)
class FilterState:
    """Search term, selected filters and sidebar expansion flags."""

    search_term: str = ""
    categories: FrozenSet[str] = frozenset()
    types: FrozenSet[str] = frozenset()
    ratings: FrozenSet[int] = frozenset()
    min_price: str = ""
    max_price: str = ""
    # Collapsed sidebar sections among "categories", "price", "ratings", "type"
    collapsed_sections: FrozenSet[str] = frozenset()

    @classmethod
    def from_bounds(cls, bounds: PriceBounds) -> "FilterState":
        """Create a default state with price fields seeded from the catalog bounds."""
        return cls(min_price=str(bounds.min), max_price=str(bounds.max))

    def toggle_membership(self, field_name: str, value: Any) -> "FilterState":
        """Select value if it is not selected yet, deselect it otherwise.

        Args:
            field_name: One of "categories", "types" or "ratings"
            value: Category, type, or integer rating threshold

        Returns:
            New FilterState with the selection toggled

        Raises:
            ValueError: If field_name is not a set-valued filter, or a rating
                is not one of RATING_OPTIONS
        """
        if field_name not in SET_FIELDS:
            raise ValueError(f"Unknown filter field '{field_name}'")

        if field_name == "ratings":
            value = int(value)
            if value not in RATING_OPTIONS:
                raise ValueError(f"Unsupported rating threshold {value}")

        current = getattr(self, field_name)
        updated = current - {value} if value in current else current | {value}
        return replace(self, **{field_name: updated})

    def set_scalar(self, field_name: str, value: Any) -> "FilterState":
        """Store user input for a price boundary.

        Raises:
            ValueError: If field_name is not "min_price" or "max_price"
        """
        if field_name not in PRICE_FIELDS:
            raise ValueError(f"Unknown price field '{field_name}'")
        return replace(self, **{field_name: coerce_price_input(value)})

    def set_search_term(self, term: Any) -> "FilterState":
        return replace(self, search_term="" if term is None else str(term))

    def toggle_section_expanded(self, section: str) -> "FilterState":
        """Flip the visibility of one sidebar section."""
        if section in self.collapsed_sections:
            return replace(self, collapsed_sections=self.collapsed_sections - {section})
        return replace(self, collapsed_sections=self.collapsed_sections | {section})

    def is_expanded(self, section: str) -> bool:
        return section not in self.collapsed_sections

    def reset_to_defaults(self, bounds: PriceBounds) -> "FilterState":
        """Clear every filter and the search term; keep sidebar expansion flags."""
        return replace(
            self,
            search_term="",
            categories=frozenset(),
            types=frozenset(),
            ratings=frozenset(),
            min_price=str(bounds.min),
            max_price=str(bounds.max),
        )

    def with_price_bounds(self, bounds: PriceBounds) -> "FilterState":
        """Re-seed the price fields after a new catalog snapshot arrives."""
        return replace(self, min_price=str(bounds.min), max_price=str(bounds.max))

    def active_filter_count(self, bounds: PriceBounds) -> int:
        """Count filters deviating from their defaults.

        Each price boundary that differs from its catalog bound counts on
        its own, matching the chips from active_filter_chips().
        """
        count = len(self.categories) + len(self.types) + len(self.ratings)
        if self.min_price != "" and self.min_price != str(bounds.min):
            count += 1
        if self.max_price != "" and self.max_price != str(bounds.max):
            count += 1
        return count

    def has_active_criteria(self, bounds: PriceBounds) -> bool:
        """Check if a search term or any filter is narrowing the catalog."""
        return bool(self.search_term) or self.active_filter_count(bounds) > 0

    def remove_chip(self, chip: FilterChip, bounds: PriceBounds) -> "FilterState":
        """Undo the filter behind an active-filter chip."""
        if chip.field in SET_FIELDS:
            current = getattr(self, chip.field)
            if chip.value not in current:
                return self
            return self.toggle_membership(chip.field, chip.value)
        if chip.field == "min_price":
            return replace(self, min_price=str(bounds.min))
        if chip.field == "max_price":
            return replace(self, max_price=str(bounds.max))
        raise ValueError(f"Unknown filter field '{chip.field}'")


def active_filter_chips(state: FilterState, bounds: PriceBounds) -> List[FilterChip]:
    """Build one chip per counted active filter.

    Args:
        state: Current filter state
        bounds: Price bounds of the current catalog

    Returns:
        Chips for categories, types, ratings and deviating price boundaries,
        in that order
    """
    currency = config.currency_symbol
    chips = [FilterChip("categories", value, f"Category: {value}") for value in sorted(state.categories)]
    chips.extend(FilterChip("types", value, f"Type: {value}") for value in sorted(state.types))
    chips.extend(FilterChip("ratings", value, f"Rating: {value}+") for value in sorted(state.ratings, reverse=True))

    if state.min_price != "" and state.min_price != str(bounds.min):
        chips.append(FilterChip("min_price", state.min_price, f"Min price: {currency}{state.min_price}"))
    if state.max_price != "" and state.max_price != str(bounds.max):
        chips.append(FilterChip("max_price", state.max_price, f"Max price: {currency}{state.max_price}"))

    return chips
