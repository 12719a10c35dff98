"""Shop route and search query parameter handling."""

from typing import Optional
from urllib.parse import parse_qs, urlencode, urlparse

from .config import config

SEARCH_PARAM = "search"


def read_search_term(location: Optional[str]) -> str:
    """Extract the search term from a shop location.

    Accepts a path with query string, a full URL, or a bare query string.

    Args:
        location: Location to read (e.g., "/shop?search=myth")

    Returns:
        Value of the search parameter, or "" if absent

    Examples:
        >>> read_search_term('/shop?search=myth')
        'myth'
        >>> read_search_term('https://books.example.com/shop?search=Dune%20Messiah')
        'Dune Messiah'
        >>> read_search_term('/shop')
        ''
    """
    if not location:
        return ""

    query = urlparse(location).query
    if not query and "?" not in location and "=" in location:
        query = location

    values = parse_qs(query, keep_blank_values=True).get(SEARCH_PARAM)
    return values[0] if values else ""


def build_shop_location(search_term: str = "", route: Optional[str] = None) -> str:
    """Build the shop location for a search term.

    Examples:
        >>> build_shop_location()
        '/shop'
        >>> build_shop_location('norse myth')
        '/shop?search=norse+myth'
    """
    route = route or config.shop_route
    if not search_term:
        return route
    return f"{route}?{urlencode({SEARCH_PARAM: search_term})}"
