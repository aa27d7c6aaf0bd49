import re
import logging
from typing import Callable, Optional

from bookdesk.book import Book

logger = logging.getLogger(__name__)

# 10 or 13 ASCII digits; hyphens and check characters are not accepted
ISBN_PATTERN = re.compile(r"\d{10}(\d{3})?", re.ASCII)
NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)

TITLE_REQUIRED = "Please enter a title."
AUTHOR_REQUIRED = "Please enter an author."
ISBN_REQUIRED = "Please enter an ISBN."
ISBN_FORMAT = "ISBN must be 10 or 13 digits."
PRICE_FORMAT = "Price must be a number."


class ValidationError(ValueError):
    """A candidate book failed a client-side rule."""


def is_valid_isbn(isbn: Optional[str]) -> bool:
    if not isbn:
        return False
    return ISBN_PATTERN.fullmatch(isbn) is not None


def is_numeric(value: Optional[str]) -> bool:
    """True for a plain decimal literal: optional sign, fraction and exponent.

    Looser numeric spellings such as ``Infinity``, ``NaN`` and hex
    (``0x1A``) are rejected, as are digit separators (``1_000``, ``1,000``).
    """
    if value is None:
        return False
    return NUMBER_PATTERN.fullmatch(value.strip()) is not None


def check_book(book: Book) -> None:
    """Raise ValidationError for the first rule ``book`` breaks.

    Rules run in a fixed order: title, author, isbn presence, isbn format,
    price format. Only the first failure is reported.
    """
    if not (book.title or "").strip():
        raise ValidationError(TITLE_REQUIRED)
    if not (book.author or "").strip():
        raise ValidationError(AUTHOR_REQUIRED)
    if not (book.isbn or "").strip():
        raise ValidationError(ISBN_REQUIRED)
    if not is_valid_isbn(book.isbn):
        raise ValidationError(ISBN_FORMAT)
    if book.price and not is_numeric(book.price):
        raise ValidationError(PRICE_FORMAT)


def validate_book(book: Book, alert: Callable[[str], None]) -> bool:
    """Return True when ``book`` passes every rule, otherwise alert and return False."""
    try:
        check_book(book)
    except ValidationError as e:
        logger.info("Validation failed: %s", e)
        alert(str(e))
        return False
    return True
