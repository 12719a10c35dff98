"""Shop page controller.

ShopController owns the last catalog snapshot, the facets derived from it
and the filter state. Filtered results are a derived view recomputed on
request; nothing is cached between calls.
"""

import sys
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from .catalog_models import CatalogItem, CatalogSnapshot, FacetSet, PriceBounds
from .config import config
from .facets import extract_facets
from .filter_state import FilterChip, FilterState, active_filter_chips
from .filters import visible_items
from .url_sync import build_shop_location, read_search_term


@dataclass
class ShopView:
    """Everything the presentation layer needs to draw the shop page."""

    items: List[CatalogItem] = field(default_factory=list)
    facets: FacetSet = field(default_factory=FacetSet)
    state: FilterState = field(default_factory=FilterState)
    chips: List[FilterChip] = field(default_factory=list)
    active_filter_count: int = 0
    loading: bool = False
    error: Optional[str] = None
    catalog_size: int = 0

    @property
    def show_search_info(self) -> bool:
        """Check if the "Showing N results for ..." banner applies."""
        return bool(self.state.search_term) and bool(self.items)


class ShopController:
    """Keeps catalog, facets, filter state and location consistent."""

    def __init__(
        self,
        fetch_catalog: Optional[Callable[[], CatalogSnapshot]] = None,
        navigate: Optional[Callable[[str], None]] = None,
        route: Optional[str] = None,
    ):
        """Initialize controller.

        Args:
            fetch_catalog: Callable returning a fresh CatalogSnapshot
            navigate: Callable receiving every new location (optional)
            route: Shop route (uses config default if None)
        """
        self.fetch_catalog = fetch_catalog
        self.navigate = navigate
        self.route = route or config.shop_route
        self.location = self.route
        self.snapshot = CatalogSnapshot()
        self.facets = FacetSet()
        self.state = FilterState.from_bounds(self.facets.price_bounds)
        self.closed = False

    @property
    def bounds(self) -> PriceBounds:
        return self.facets.price_bounds

    def close(self) -> None:
        """Stop accepting catalog snapshots (the page was left)."""
        self.closed = True

    # Catalog lifecycle

    def load(self) -> None:
        """Request the catalog from the configured source."""
        if self.fetch_catalog is None:
            raise ValueError("No catalog source configured")
        self.receive_snapshot(CatalogSnapshot(loading=True, items=self.snapshot.items))
        self.receive_snapshot(self.fetch_catalog())

    def retry(self) -> None:
        """Re-issue the catalog request after a failure."""
        self.load()

    def receive_snapshot(self, snapshot: CatalogSnapshot) -> None:
        """Replace the catalog and re-derive facets and price defaults.

        Snapshots arriving after close() are dropped.
        """
        if self.closed:
            print("Ignoring catalog snapshot received after close", file=sys.stderr)
            return

        self.snapshot = snapshot
        if snapshot.loading or snapshot.error is not None:
            return

        self.facets = extract_facets(snapshot.items)
        self.state = self.state.with_price_bounds(self.facets.price_bounds)

    # Location and search

    def _go_to(self, location: str) -> None:
        self.location = location
        if self.navigate is not None:
            self.navigate(location)

    def on_location_change(self, location: str) -> None:
        """Adopt the search term carried by a new location."""
        self.location = location
        self.state = self.state.set_search_term(read_search_term(location))

    def submit_search(self, term: str) -> None:
        """Navigate to the shop with a search term and apply it."""
        self._go_to(build_shop_location(term, self.route))
        self.state = self.state.set_search_term(term)

    def clear_search(self) -> None:
        self.state = self.state.set_search_term("")
        self._go_to(self.route)

    def clear_all(self) -> None:
        """Reset every filter and the search term, and drop the query string."""
        self.state = self.state.reset_to_defaults(self.bounds)
        self._go_to(self.route)

    # Filter updates

    def toggle_filter(self, field_name: str, value: Any) -> None:
        self.state = self.state.toggle_membership(field_name, value)

    def set_price(self, field_name: str, value: Any) -> None:
        self.state = self.state.set_scalar(field_name, value)

    def toggle_section(self, section: str) -> None:
        self.state = self.state.toggle_section_expanded(section)

    def remove_chip(self, chip: FilterChip) -> None:
        self.state = self.state.remove_chip(chip, self.bounds)

    # Derived views

    def get_filtered_result(self) -> List[CatalogItem]:
        return visible_items(self.snapshot.items, self.state, self.bounds)

    def active_filter_count(self) -> int:
        return self.state.active_filter_count(self.bounds)

    def active_filter_chips(self) -> List[FilterChip]:
        return active_filter_chips(self.state, self.bounds)

    def view(self) -> ShopView:
        """Snapshot of everything the shop page renders."""
        return ShopView(
            items=self.get_filtered_result(),
            facets=self.facets,
            state=self.state,
            chips=self.active_filter_chips(),
            active_filter_count=self.active_filter_count(),
            loading=self.snapshot.loading,
            error=self.snapshot.error,
            catalog_size=len(self.snapshot.items or []),
        )
