"""Data models for the shop catalog and its derived facets."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .config import config

# Catalog entries are loosely typed records supplied by the catalog API
CatalogItem = Dict[str, Any]


@dataclass(frozen=True)
class PriceBounds:
    """Whole-number price range observed in a catalog snapshot."""

    min: int
    max: int


DEFAULT_PRICE_BOUNDS = PriceBounds(config.default_min_price, config.default_max_price)


@dataclass
class FacetSet:
    """Distinct filter options derived from a catalog snapshot.

    Categories and types keep the order in which they first appear in the
    catalog so the sidebar lists them the way the store lists its books.
    """

    categories: List[str] = field(default_factory=list)
    types: List[str] = field(default_factory=list)
    price_bounds: PriceBounds = DEFAULT_PRICE_BOUNDS


@dataclass
class CatalogSnapshot:
    """One response from the catalog source."""

    loading: bool = False
    error: Optional[str] = None
    items: List[CatalogItem] = field(default_factory=list)

    @property
    def is_ready(self) -> bool:
        """Check if the snapshot holds a usable catalog."""
        return not self.loading and self.error is None


def get_field(item: Any, key: str) -> Any:
    """Read a field from a catalog item, tolerating non-mapping entries."""
    if isinstance(item, Mapping):
        return item.get(key)
    return None
