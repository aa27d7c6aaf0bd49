from __future__ import annotations

from typing import Any

PLACEHOLDER = "-"


class Book:
    """A single catalog item as the remote book API represents it."""

    def __init__(self, title: str, author: str, isbn: str, price: str | None = None,
                 publish_date: str | None = None, id: Any = None) -> None:
        self.id = id
        self.title = title
        self.author = author
        self.isbn = isbn
        self.price = price
        self.publish_date = publish_date

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} (ISBN: {self.isbn})"

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, title={self.title!r}, isbn={self.isbn!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_payload(self) -> dict:
        """Request body for create/update; the server owns ``id``."""
        return {
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "price": self.price,
            "publishDate": self.publish_date,
        }

    def to_dict(self) -> dict:
        data = {"id": self.id}
        data.update(self.to_payload())
        return data

    def display_cells(self) -> tuple:
        """Title, author, isbn, price and publish date as table text."""
        return (
            _text(self.title),
            _text(self.author),
            _text(self.isbn),
            _text(self.price, PLACEHOLDER),
            _text(self.publish_date, PLACEHOLDER),
        )

    @staticmethod
    def from_dict(data: dict) -> "Book":
        if not isinstance(data, dict):
            raise ValueError(f"Expected a book object, got {type(data).__name__}")
        # Servers may send any of these as JSON numbers
        return Book(
            id=data.get("id"),
            title=_optional_text(data.get("title")) or "",
            author=_optional_text(data.get("author")) or "",
            isbn=_optional_text(data.get("isbn")) or "",
            price=_optional_text(data.get("price")),
            publish_date=_optional_text(data.get("publishDate")),
        )


def _text(value: Any, placeholder: str = "") -> str:
    if value is None or value == "":
        return placeholder
    return str(value)


def _optional_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return str(value)
