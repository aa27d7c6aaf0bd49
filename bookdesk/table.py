from __future__ import annotations

import json
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, List, Optional, Sequence

from rich.markup import escape
from rich.table import Table

from bookdesk.book import Book

COLUMNS = ("Title", "Author", "ISBN", "Price", "Published")
LOAD_ERROR_ROW = "Error: could not load data."


@dataclass
class BookRow:
    """One rendered row and the actions bound to its book."""

    book: Book
    cells: tuple
    edit: Callable[[], Any]
    delete: Callable[[], Any]


def _unbound(*_args: Any) -> None:
    raise RuntimeError("Row actions are not wired to a controller")


class BookTable:
    """Projects the fetched book list into rows.

    Each row gets its own ``edit`` and ``delete`` callables with the book's
    identifier bound as an argument, so nothing from the server is ever
    spliced into a command string.
    """

    def __init__(self, on_edit: Optional[Callable[[Any], Any]] = None,
                 on_delete: Optional[Callable[[Any, str], Any]] = None) -> None:
        self.on_edit = on_edit or _unbound
        self.on_delete = on_delete or _unbound
        self.rows: List[BookRow] = []
        self.error: Optional[str] = None

    def bind(self, on_edit: Callable[[Any], Any], on_delete: Callable[[Any, str], Any]) -> None:
        self.on_edit = on_edit
        self.on_delete = on_delete

    def render(self, books: Sequence[Book]) -> None:
        self.rows = []
        self.error = None
        for book in books:
            self.rows.append(BookRow(
                book=book,
                cells=book.display_cells(),
                edit=partial(self._edit, book.id),
                delete=partial(self._delete, book.id, book.title),
            ))

    def render_error(self, text: str = LOAD_ERROR_ROW) -> None:
        self.rows = []
        self.error = text

    def row(self, number: int) -> BookRow:
        """Row by its 1-based position on screen."""
        if number < 1 or number > len(self.rows):
            raise IndexError(f"No row {number}")
        return self.rows[number - 1]

    # Looked up at call time so bind() can happen after render()
    def _edit(self, book_id: Any) -> Any:
        return self.on_edit(book_id)

    def _delete(self, book_id: Any, title: str) -> Any:
        return self.on_delete(book_id, title)

    # ------------------------- Projections ------------------------- #
    def to_rich(self, title: str = "📚 Books") -> Table:
        table = Table(title=title, show_lines=True, header_style="bold cyan")
        table.add_column("#", style="dim", justify="right", no_wrap=True)
        for name in COLUMNS:
            table.add_column(name, style="magenta" if name == "ISBN" else "white", no_wrap=name == "ISBN")
        if self.error:
            table.add_row("", f"[#dc3545]{escape(self.error)}[/]", *[""] * (len(COLUMNS) - 1))
            return table
        for number, row in enumerate(self.rows, 1):
            table.add_row(str(number), *[escape(cell) for cell in row.cells])
        return table

    def to_plain_lines(self) -> List[str]:
        if self.error:
            return [self.error]
        return [f"{number}. " + " | ".join(row.cells) for number, row in enumerate(self.rows, 1)]

    def to_json(self) -> str:
        payload = [row.book.to_dict() for row in self.rows]
        return json.dumps(payload, ensure_ascii=False)
