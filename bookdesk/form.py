"""Form state and the controller that drives create, edit and delete.

The controller gets everything it talks to injected: the API client, the
table's render callbacks, the message slot and the two blocking prompts
(alert and confirm). Every public operation returns an ``ActionResult``;
service errors are turned into message slot text here and never escape.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from bookdesk.book import Book
from bookdesk.messages import MessageSlot
from bookdesk.services.book_api import BookApiClient, BookServiceError
from bookdesk.table import LOAD_ERROR_ROW
from bookdesk.utils.validators import validate_book

logger = logging.getLogger(__name__)

FORM_FIELDS = ("title", "author", "isbn", "price", "publishDate")

CREATE_LABEL = "Register book"
UPDATE_LABEL = "Update book"

CREATED_MESSAGE = "Book registered."
UPDATED_MESSAGE = "Book updated."
DELETED_MESSAGE = "Book deleted."
LOAD_FAILED_PREFIX = "Failed to load book list: "


@dataclass
class ActionResult:
    ok: bool
    message: str = ""
    book: Optional[Book] = None
    books: List[Book] = field(default_factory=list)


class BookForm:
    """Raw text of the five form fields, keyed by their wire names."""

    def __init__(self) -> None:
        self.values: Dict[str, str] = {}
        self.clear()

    def __getitem__(self, name: str) -> str:
        return self.values[name]

    def __setitem__(self, name: str, value: Optional[str]) -> None:
        if name not in FORM_FIELDS:
            raise KeyError(name)
        self.values[name] = "" if value is None else str(value)

    def update(self, **values: Optional[str]) -> None:
        for name, value in values.items():
            self[name] = value

    def clear(self) -> None:
        self.values = {name: "" for name in FORM_FIELDS}

    def fill(self, book: Book) -> None:
        self.update(
            title=book.title,
            author=book.author,
            isbn=book.isbn,
            price=book.price,
            publishDate=book.publish_date,
        )

    def read(self) -> Book:
        """Trimmed candidate record; empty optional fields become None."""
        values = {name: self.values.get(name, "").strip() for name in FORM_FIELDS}
        return Book(
            title=values["title"],
            author=values["author"],
            isbn=values["isbn"],
            price=values["price"] or None,
            publish_date=values["publishDate"] or None,
        )


class BookFormController:
    def __init__(self, api: BookApiClient, render: Callable[[Sequence[Book]], Any],
                 reporter: MessageSlot, alert: Callable[[str], Any], confirm: Callable[[str], bool],
                 render_error: Optional[Callable[[str], Any]] = None,
                 form: Optional[BookForm] = None) -> None:
        self.api = api
        self.render = render
        self.render_error = render_error
        self.reporter = reporter
        self.alert = alert
        self.confirm = confirm
        self.form = form or BookForm()
        self.editing_id: Any = None
        self.submit_label = CREATE_LABEL
        self.cancel_visible = False

    @property
    def editing(self) -> bool:
        return self.editing_id is not None

    def load_books(self) -> ActionResult:
        logger.info("Loading book list")
        try:
            books = self.api.list_books()
        except BookServiceError as e:
            message = LOAD_FAILED_PREFIX + str(e)
            logger.warning(message)
            self.reporter.error(message)
            if self.render_error:
                self.render_error(LOAD_ERROR_ROW)
            return ActionResult(ok=False, message=message)
        self.render(books)
        return ActionResult(ok=True, books=books)

    def start_edit(self, book_id: Any) -> ActionResult:
        try:
            book = self.api.get_book(book_id)
        except BookServiceError as e:
            self.reporter.error(str(e))
            return ActionResult(ok=False, message=str(e))
        self.form.fill(book)
        self.editing_id = book_id
        self.submit_label = UPDATE_LABEL
        self.cancel_visible = True
        return ActionResult(ok=True, book=book)

    def submit(self) -> ActionResult:
        logger.info("Form submitted")
        candidate = self.form.read()
        if not validate_book(candidate, alert=self.alert):
            return ActionResult(ok=False)

        try:
            if self.editing:
                saved = self.api.update_book(self.editing_id, candidate)
                message = UPDATED_MESSAGE
            else:
                saved = self.api.create_book(candidate)
                message = CREATED_MESSAGE
        except BookServiceError as e:
            # Form keeps the user's input so it can be corrected and resent
            self.reporter.error(str(e))
            return ActionResult(ok=False, message=str(e))

        self.reset()
        self.reporter.success(message)
        self.load_books()
        return ActionResult(ok=True, message=message, book=saved)

    def delete_book(self, book_id: Any, title: str) -> ActionResult:
        if not self.confirm(f"Delete the book '{title}'?"):
            return ActionResult(ok=False)
        try:
            self.api.delete_book(book_id)
        except BookServiceError as e:
            self.reporter.error(str(e))
            return ActionResult(ok=False, message=str(e))
        self.reporter.success(DELETED_MESSAGE)
        self.load_books()
        return ActionResult(ok=True, message=DELETED_MESSAGE)

    def reset(self) -> None:
        self.form.clear()
        self.editing_id = None
        self.submit_label = CREATE_LABEL
        self.cancel_visible = False
        self.reporter.clear()

    def cancel(self) -> None:
        self.reset()
