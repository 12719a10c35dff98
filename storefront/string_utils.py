"""String utility functions for catalog text fields and display."""

from typing import Any, Optional


def pluralize(count: int, singular: str, plural: str) -> str:
    """Return singular or plural form based on count.

    Examples:
        >>> pluralize(1, "result", "results")
        'result'
        >>> pluralize(3, "book", "books")
        'books'
    """
    return singular if count == 1 else plural


def as_text(value: Any) -> Optional[str]:
    """Return value if it is a non-empty string, None otherwise.

    Catalog text fields are loosely typed; numbers, lists and other shapes
    count as a missing field.

    Examples:
        >>> as_text("Fiction")
        'Fiction'
        >>> as_text("") is None
        True
        >>> as_text(42) is None
        True
    """
    if isinstance(value, str) and value:
        return value
    return None


def contains_ignore_case(text: Optional[str], needle: str) -> bool:
    """Check if needle occurs in text, ignoring case. Missing text never matches."""
    if text is None:
        return False
    return needle.lower() in text.lower()
