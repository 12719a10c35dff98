"""Catalog retrieval from the bookstore API or a local YAML/JSON file."""

import random
import sys
import time
from typing import Any, List, Optional

import requests
import yaml

from .catalog_models import CatalogSnapshot
from .config import config

# Transient errors that should trigger retries
RETRYABLE_EXCEPTIONS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    requests.exceptions.ChunkedEncodingError,
)

# Keys the API may wrap the catalog list in
PAYLOAD_KEYS = ("books", "packages", "items", "data")


def extract_items(payload: Any) -> Optional[List[Any]]:
    """Pull the list of catalog items out of an API or file payload.

    Args:
        payload: Decoded JSON/YAML document

    Returns:
        List of items, or None if the payload has no recognizable list
    """
    if isinstance(payload, list):
        return payload

    if isinstance(payload, dict):
        for key in PAYLOAD_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value

    return None


class CatalogClient:
    """HTTP client for the bookstore catalog API with session management."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[int] = None,
        max_retries: Optional[int] = None,
    ):
        """Initialize catalog client with configuration.

        Args:
            api_url: Base URL of the API (uses config default if None)
            timeout: Request timeout in seconds (uses config default if None)
            max_retries: Maximum number of retry attempts (uses config default if None)
        """
        self.api_url = (api_url or config.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else config.request_timeout
        self.max_retries = max_retries if max_retries is not None else config.max_retries
        self.session = requests.Session()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, _exc_type, _exc_val, _exc_tb):
        """Context manager exit - ensures session is closed."""
        self.close()
        return False

    def close(self):
        """Close the HTTP session and release resources."""
        if self.session:
            self.session.close()

    def fetch_books(self) -> CatalogSnapshot:
        """Fetch the book catalog shown on the shop page."""
        return self.fetch_collection(config.books_path)

    def fetch_packages(self) -> CatalogSnapshot:
        """Fetch the book packages shown on the home page."""
        return self.fetch_collection(config.packages_path)

    def _wait_before_retry(self, reason: str, attempt: int, retry_count: int) -> None:
        wait_time = random.uniform(config.retry_delay_min, config.retry_delay_max)
        print(
            f"    {reason}, waiting {wait_time:.1f}s before retry {attempt + 1}/{retry_count}...",
            file=sys.stderr,
        )
        time.sleep(wait_time)

    def fetch_collection(self, path: str, retry_count: Optional[int] = None) -> CatalogSnapshot:
        """Fetch one catalog collection with retry logic.

        Retries on transient errors (connection errors, timeouts, 5xx status).
        Failures never raise; they come back as a snapshot carrying an error
        message for the shop page to show next to its retry button.

        Args:
            path: Collection path relative to the API URL (e.g., "/books")
            retry_count: Number of retries (uses self.max_retries if None)

        Returns:
            CatalogSnapshot with items on success, or with error set
        """
        if retry_count is None:
            retry_count = self.max_retries

        url = f"{self.api_url}{path}"

        for attempt in range(retry_count + 1):
            try:
                response = self.session.get(url, headers={"Accept": "application/json"}, timeout=self.timeout)
                response.raise_for_status()
                payload = response.json()

            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                # Retry on server-side failures only
                if attempt < retry_count and status is not None and status >= 500:
                    self._wait_before_retry(f"Got {status}", attempt, retry_count)
                    continue
                print(f"Error fetching {url}: {e}", file=sys.stderr)
                return CatalogSnapshot(error=f"Could not load catalog (HTTP {status})")

            except RETRYABLE_EXCEPTIONS as e:
                # Retry on transient network errors
                if attempt < retry_count:
                    self._wait_before_retry(type(e).__name__, attempt, retry_count)
                    continue
                print(f"Error fetching {url}: {e}", file=sys.stderr)
                return CatalogSnapshot(error="Could not reach the catalog service")

            except ValueError as e:
                print(f"Invalid JSON from {url}: {e}", file=sys.stderr)
                return CatalogSnapshot(error="Catalog service returned an invalid response")

            except Exception as e:
                # Non-retryable errors
                print(f"Error fetching {url}: {e}", file=sys.stderr)
                return CatalogSnapshot(error=f"Could not load catalog: {e}")

            items = extract_items(payload)
            if items is None:
                print(f"Unexpected catalog payload from {url}", file=sys.stderr)
                return CatalogSnapshot(error="Catalog service returned an invalid response")
            return CatalogSnapshot(items=items)

        return CatalogSnapshot(error="Could not load catalog")  # Unreachable, but required for mypy


def load_catalog_file(path: str) -> CatalogSnapshot:
    """Load a catalog snapshot from a YAML or JSON file.

    The file holds either a list of items or an object with the list under
    "books", "packages", "items" or "data".
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    except FileNotFoundError:
        print(f"Error: File '{path}' not found", file=sys.stderr)
        return CatalogSnapshot(error=f"Catalog file '{path}' not found")
    except yaml.YAMLError as e:
        print(f"Error parsing catalog file: {e}", file=sys.stderr)
        return CatalogSnapshot(error=f"Catalog file '{path}' is not valid YAML or JSON")
    except Exception as e:
        print(f"Unexpected error loading '{path}': {e}", file=sys.stderr)
        return CatalogSnapshot(error=f"Could not read catalog file '{path}'")

    if data is None:
        print(f"Warning: '{path}' is empty", file=sys.stderr)
        return CatalogSnapshot(items=[])

    items = extract_items(data)
    if items is None:
        print(f"Error: '{path}' must contain a list of catalog items", file=sys.stderr)
        return CatalogSnapshot(error=f"Catalog file '{path}' has no list of items")

    return CatalogSnapshot(items=items)
