"""CLI entry point for the bookstore shop page."""

import argparse
import sys
from typing import List, Optional

from storefront.catalog_models import CatalogSnapshot
from storefront.catalog_source import CatalogClient, load_catalog_file
from storefront.config import config
from storefront.controller import ShopController
from storefront.markdown_formatter import print_shop_markdown
from storefront.text_formatter import print_shop_text


def split_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated argument into trimmed, non-empty parts."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Browse and filter the bookstore catalog")
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--catalog",
        type=str,
        help=f"Load the catalog from a YAML/JSON file (default: {config.catalog_file})",
    )
    source.add_argument(
        "--api-url",
        type=str,
        help="Fetch the catalog from the bookstore API (e.g., 'http://localhost:4000/api/v1')",
    )
    parser.add_argument(
        "--packages",
        action="store_true",
        help="List book packages instead of single books (with --api-url)",
    )
    parser.add_argument(
        "--location",
        type=str,
        help="Shop location to open, e.g. '/shop?search=myth'",
    )
    parser.add_argument("--search", type=str, help="Search term (overrides --location)")
    parser.add_argument("--categories", type=str, help="Filter by categories (comma-separated)")
    parser.add_argument("--types", type=str, help="Filter by types (comma-separated, e.g., 'ebook,audiobook')")
    parser.add_argument("--ratings", type=str, help="Minimum star ratings (comma-separated, e.g., '4,3')")
    parser.add_argument("--min-price", type=str, help="Minimum price")
    parser.add_argument("--max-price", type=str, help="Maximum price")
    parser.add_argument(
        "--collapse",
        type=str,
        help="Collapse sidebar sections (comma-separated: categories,price,ratings,type)",
    )
    parser.add_argument(
        "--markdown",
        action="store_true",
        help="Output in markdown format (default: text format for terminal)",
    )
    args = parser.parse_args(argv)
    if args.packages and not args.api_url:
        parser.error("--packages requires --api-url")
    return args


def fetch_from_api(api_url: str, packages: bool = False) -> CatalogSnapshot:
    """Fetch books or book packages from the API using a short-lived client."""
    with CatalogClient(api_url=api_url) as client:
        if packages:
            return client.fetch_packages()
        return client.fetch_books()


def build_controller(args: argparse.Namespace) -> ShopController:
    """Create a controller wired to the catalog source selected on the command line."""
    if args.api_url:
        return ShopController(fetch_catalog=lambda: fetch_from_api(args.api_url, args.packages))
    catalog_file = args.catalog or config.catalog_file
    return ShopController(fetch_catalog=lambda: load_catalog_file(catalog_file))


def apply_arguments(controller: ShopController, args: argparse.Namespace) -> None:
    """Replay command line filters as shop page interactions."""
    if args.location:
        controller.on_location_change(args.location)
    if args.search is not None:
        controller.submit_search(args.search)

    for category in split_csv(args.categories):
        controller.toggle_filter("categories", category)
    for item_type in split_csv(args.types):
        controller.toggle_filter("types", item_type)
    for rating in split_csv(args.ratings):
        controller.toggle_filter("ratings", rating)

    if args.min_price is not None:
        controller.set_price("min_price", args.min_price)
    if args.max_price is not None:
        controller.set_price("max_price", args.max_price)

    for section in split_csv(args.collapse):
        controller.toggle_section(section)


def main(argv: Optional[List[str]] = None) -> None:
    """Main function to render the shop page."""
    args = parse_args(argv)

    controller = build_controller(args)
    controller.load()

    if controller.snapshot.error:
        print(f"\n{controller.snapshot.error}. Exiting.", file=sys.stderr)
        sys.exit(1)

    try:
        apply_arguments(controller, args)
    except ValueError as e:
        print(f"\nInvalid filter: {e}", file=sys.stderr)
        sys.exit(1)

    view = controller.view()
    if args.markdown:
        print_shop_markdown(view)
    else:
        print_shop_text(view)


if __name__ == "__main__":
    main()
