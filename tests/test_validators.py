import pytest
from unittest.mock import MagicMock

from bookdesk.book import Book
from bookdesk.utils.validators import (
    AUTHOR_REQUIRED,
    ISBN_FORMAT,
    ISBN_REQUIRED,
    PRICE_FORMAT,
    TITLE_REQUIRED,
    ValidationError,
    check_book,
    is_numeric,
    is_valid_isbn,
    validate_book,
)


def make_book(**overrides):
    fields = {"title": "Clean Code", "author": "Robert Martin", "isbn": "9780132350884", "price": "32000"}
    fields.update(overrides)
    return Book(**fields)


def test_valid_book_passes_without_alert():
    alert = MagicMock()
    assert validate_book(make_book(), alert) is True
    alert.assert_not_called()


@pytest.mark.parametrize("overrides, message", [
    ({"title": ""}, TITLE_REQUIRED),
    ({"title": "   "}, TITLE_REQUIRED),
    ({"author": ""}, AUTHOR_REQUIRED),
    ({"isbn": ""}, ISBN_REQUIRED),
    ({"isbn": "123456789"}, ISBN_FORMAT),
    ({"isbn": "12345678901"}, ISBN_FORMAT),
    ({"isbn": "123456789012"}, ISBN_FORMAT),
    ({"isbn": "12345678901234"}, ISBN_FORMAT),
    ({"isbn": "978-0132350884"}, ISBN_FORMAT),
    ({"price": "ten"}, PRICE_FORMAT),
])
def test_invalid_book_alerts_once(overrides, message):
    alert = MagicMock()
    assert validate_book(make_book(**overrides), alert) is False
    alert.assert_called_once_with(message)


def test_first_failing_rule_wins():
    alert = MagicMock()
    book = Book(title="", author="", isbn="12", price="abc")
    assert validate_book(book, alert) is False
    alert.assert_called_once_with(TITLE_REQUIRED)


@pytest.mark.parametrize("isbn", ["1234567890", "1234567890123"])
def test_ten_and_thirteen_digits_accepted(isbn):
    assert validate_book(make_book(isbn=isbn), MagicMock()) is True


@pytest.mark.parametrize("price", [None, ""])
def test_price_is_optional(price):
    assert validate_book(make_book(price=price), MagicMock()) is True


def test_check_book_raises_validation_error():
    with pytest.raises(ValidationError, match="ISBN must be 10 or 13 digits."):
        check_book(make_book(isbn="12345678901234"))


def test_isbn_requires_ascii_digits():
    assert is_valid_isbn("1234567890")
    assert not is_valid_isbn("١٢٣٤٥٦٧٨٩٠")
    assert not is_valid_isbn("123456789X")
    assert not is_valid_isbn(None)


@pytest.mark.parametrize("value, expected", [
    ("10", True),
    ("-2.5", True),
    (".5", True),
    ("1e3", True),
    ("abc", False),
    ("NaN", False),
    ("1_000", False),
    ("1,000", False),
    ("Infinity", False),
    ("0x1A", False),
])
def test_is_numeric(value, expected):
    assert is_numeric(value) is expected
