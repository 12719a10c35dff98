"""Configuration with defaults and environment variable support."""

import os


class Config:
    """Configuration class with default values and environment variable overrides.

    All environment variables use the BOOKSTORE_ prefix.
    Example: BOOKSTORE_API_URL=https://books.example.com/api/v1 python main.py
    """

    def __init__(self) -> None:
        """Initialize configuration from environment variables with defaults."""
        # Catalog API settings
        self.api_url = os.getenv("BOOKSTORE_API_URL", "http://localhost:4000/api/v1")
        self.books_path = os.getenv("BOOKSTORE_BOOKS_PATH", "/books")
        self.packages_path = os.getenv("BOOKSTORE_PACKAGES_PATH", "/packages")

        # HTTP request settings
        self.request_timeout = int(os.getenv("BOOKSTORE_REQUEST_TIMEOUT", "15"))
        self.max_retries = int(os.getenv("BOOKSTORE_MAX_RETRIES", "2"))
        self.retry_delay_min = float(os.getenv("BOOKSTORE_RETRY_DELAY_MIN", "1.0"))
        self.retry_delay_max = float(os.getenv("BOOKSTORE_RETRY_DELAY_MAX", "2.0"))

        # Local catalog file settings
        self.catalog_file = os.getenv("BOOKSTORE_CATALOG_FILE", "catalog.yml")

        # Shop page settings
        self.shop_route = os.getenv("BOOKSTORE_SHOP_ROUTE", "/shop")

        # Price bounds used when the catalog has no usable prices
        self.default_min_price = int(os.getenv("BOOKSTORE_DEFAULT_MIN_PRICE", "0"))
        self.default_max_price = int(os.getenv("BOOKSTORE_DEFAULT_MAX_PRICE", "1000"))

        # Display settings
        self.currency_symbol = os.getenv("BOOKSTORE_CURRENCY_SYMBOL", "$")


# Default configuration instance for convenient importing
config = Config()
