import os
import json
from typing import Callable, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm

from config import settings
from bookdesk.form import BookFormController
from bookdesk.messages import MessageKind, MessageSlot, MESSAGE_COLORS
from bookdesk.services.book_api import BookApiClient
from bookdesk.table import BookTable

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "BOOKDESK_OUTPUT"
OUTPUT_MODES = {"plain", "json", "rich"}

console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    mode = os.environ.get(OUTPUT_MODE_ENV, settings.output_mode).lower()
    return mode if mode in OUTPUT_MODES else "plain"


def print_table(table: BookTable) -> None:
    """Print the table in the current output mode.
    - plain: numbered 'title | author | isbn | price | published' lines
    - json: JSON array of the book records, nothing when loading failed
    - rich: Rich table
    """
    mode = get_output_mode()

    if mode == "json":
        # A failed load is reported by print_message alone
        if not table.error:
            print(table.to_json())
    elif mode == "rich":
        console.print(table.to_rich())
    elif not table.rows and not table.error:
        print("No books found.")
    else:
        for line in table.to_plain_lines():
            print(line)


def print_notice(message: str, kind: str = "info") -> None:
    """Print one status line; a JSON object in json mode so stdout stays parseable."""
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps({"message": message, "kind": kind}, ensure_ascii=False))
    elif mode == "rich":
        color = MESSAGE_COLORS.get(kind, "blue")
        console.print(f"[{color}]{escape(message)}[/]")
    else:
        print(message)


def print_message(slot: MessageSlot) -> None:
    if slot.visible:
        print_notice(slot.text, slot.kind.value)


def alert(message: str) -> None:
    """Validation alert shown before any request is sent."""
    if get_output_mode() == "json":
        print_notice(message, MessageKind.ERROR.value)
        return
    console.print(Panel.fit(f"[bold]{escape(message)}[/]", title="Check input", border_style="red"))


def blocking_alert(message: str) -> None:
    alert(message)
    console.input("[dim]Press Enter to continue[/]")


def confirm(question: str) -> bool:
    return Confirm.ask(escape(question), default=False, console=console)


def build_desk(api: BookApiClient, alert: Callable[[str], None] = alert,
               confirm: Callable[[str], bool] = confirm,
               slot: Optional[MessageSlot] = None) -> Tuple[BookFormController, BookTable, MessageSlot]:
    """Wire a table, a message slot and a controller around ``api``."""
    table = BookTable()
    slot = slot or MessageSlot()
    controller = BookFormController(
        api=api,
        render=table.render,
        render_error=table.render_error,
        reporter=slot,
        alert=alert,
        confirm=confirm,
    )
    table.bind(on_edit=controller.start_edit, on_delete=controller.delete_book)
    return controller, table, slot
