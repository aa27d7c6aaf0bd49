import json
import logging
from typing import Optional

from rich.panel import Panel
from rich.prompt import Prompt
from rich.markup import escape
from rich.table import Table
from rich import box
import typer

from config import settings
from bookdesk.form import BookFormController
from bookdesk.messages import MessageKind, MessageSlot
from bookdesk.services.book_api import BookApiClient, BookServiceError
from bookdesk.services.http_client import close_http_client
from bookdesk.table import BookTable
from bookdesk.utils.ui_helpers import (
    blocking_alert,
    build_desk,
    confirm,
    console,
    get_output_mode,
    print_message,
    print_notice,
    print_table,
    set_output_mode,
)

APP_NAME = settings.app_name


def get_api() -> BookApiClient:
    """API client for the configured book service."""
    return BookApiClient(settings.api_base_url)


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _finish(slot: MessageSlot, ok: bool) -> None:
    print_message(slot)
    if not ok:
        raise typer.Exit(code=1)


# --- Typer CLI application ---
app = typer.Typer(help="Book catalog client", invoke_without_command=True)


@app.callback()
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global CLI options (e.g. output mode)."""
    _configure_logging()
    if output:
        set_output_mode(output)
    ctx.call_on_close(close_http_client)
    if ctx.invoked_subcommand is None:
        run_menu()


@app.command("list")
def cli_list():
    """List every book the service returns."""
    controller, table, slot = build_desk(get_api())
    result = controller.load_books()
    print_table(table)
    _finish(slot, result.ok)


@app.command("show")
def cli_show(book_id: str = typer.Argument(..., help="Book identifier")):
    """Show a single book."""
    try:
        book = get_api().get_book(book_id)
    except BookServiceError as e:
        print_notice(f"Error: {e}", MessageKind.ERROR.value)
        raise typer.Exit(code=1)
    if get_output_mode() == "json":
        print(json.dumps(book.to_dict(), ensure_ascii=False))
        return
    title, author, isbn, price, published = book.display_cells()
    print(f"ID: {book.id}")
    print(f"Title: {title}")
    print(f"Author: {author}")
    print(f"ISBN: {isbn}")
    print(f"Price: {price}")
    print(f"Published: {published}")


@app.command("add")
def cli_add(
    title: str = typer.Option("", "--title", "-t", help="Title"),
    author: str = typer.Option("", "--author", "-a", help="Author"),
    isbn: str = typer.Option("", "--isbn", "-i", help="10 or 13 digit ISBN"),
    price: str = typer.Option("", "--price", "-p", help="Price"),
    publish_date: str = typer.Option("", "--publish-date", "-d", help="Publish date (YYYY-MM-DD)"),
):
    """Register a new book."""
    controller, table, slot = build_desk(get_api())
    controller.form.update(title=title, author=author, isbn=isbn, price=price, publishDate=publish_date)
    result = controller.submit()
    _finish(slot, result.ok)


@app.command("update")
def cli_update(
    book_id: str = typer.Argument(..., help="Book identifier"),
    title: str = typer.Option("", "--title", "-t", help="Title"),
    author: str = typer.Option("", "--author", "-a", help="Author"),
    isbn: str = typer.Option("", "--isbn", "-i", help="10 or 13 digit ISBN"),
    price: str = typer.Option("", "--price", "-p", help="Price"),
    publish_date: str = typer.Option("", "--publish-date", "-d", help="Publish date (YYYY-MM-DD)"),
):
    """Replace every field of an existing book."""
    controller, table, slot = build_desk(get_api())
    controller.editing_id = book_id
    controller.form.update(title=title, author=author, isbn=isbn, price=price, publishDate=publish_date)
    result = controller.submit()
    _finish(slot, result.ok)


@app.command("delete")
def cli_delete(
    book_id: str = typer.Argument(..., help="Book identifier"),
    title: Optional[str] = typer.Option(None, "--title", help="Title shown in the confirmation"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Delete a book after confirmation."""
    ask = (lambda question: True) if yes else confirm
    controller, table, slot = build_desk(get_api(), confirm=ask)
    result = controller.delete_book(book_id, title or book_id)
    if not result.ok and not result.message:
        print_notice("Deletion cancelled.")
        return
    _finish(slot, result.ok)


@app.command("menu")
def cli_menu():
    """Start the interactive menu."""
    run_menu()


def render_screen(controller: BookFormController, table: BookTable, slot: MessageSlot) -> None:
    console.print(table.to_rich())
    if slot.visible:
        console.print(f"[{slot.color}]{escape(slot.text)}[/]")
    if controller.editing:
        console.print(f"[yellow]Editing book {escape(str(controller.editing_id))}[/]")

    commands = [
        ("n", f"{controller.submit_label}"),
        ("e N", "Edit row N"),
        ("d N", "Delete row N"),
        ("r", "Reload"),
    ]
    if controller.cancel_visible:
        commands.append(("c", "Cancel edit"))
    commands.append(("q", "Quit"))

    grid = Table.grid(padding=(0, 2))
    grid.add_column(justify="right", style="bold cyan", width=4)
    grid.add_column(justify="left", style="white")
    for key, label in commands:
        grid.add_row(f"[reverse]{key}[/]", label)
    console.print(Panel(grid, title=APP_NAME, border_style="cyan", box=box.HEAVY, padding=(0, 2)))


def fill_form(controller: BookFormController) -> None:
    """Prompt for every field, prefilled with what the form already holds."""
    labels = {
        "title": "Title",
        "author": "Author",
        "isbn": "ISBN",
        "price": "Price",
        "publishDate": "Publish date (YYYY-MM-DD)",
    }
    for name, label in labels.items():
        current = controller.form[name]
        value = Prompt.ask(label, default=current, show_default=bool(current), console=console)
        controller.form[name] = value


def _row_command(table: BookTable, argument: str):
    try:
        return table.row(int(argument))
    except (ValueError, IndexError):
        console.print(f"[yellow]No row '{escape(argument)}'.[/]")
        console.input("[dim]Press Enter to continue[/]")
        return None


def run_menu() -> None:
    """Interactive screen: table, message slot, form and row actions."""
    controller, table, slot = build_desk(get_api(), alert=blocking_alert)
    controller.load_books()

    while True:
        console.clear()
        render_screen(controller, table, slot)
        choice = Prompt.ask("Command", default="r", console=console).strip()
        command, _, argument = choice.partition(" ")
        command = command.lower()
        argument = argument.strip()

        if command == "n":
            fill_form(controller)
            controller.submit()
        elif command == "e":
            row = _row_command(table, argument)
            if row:
                row.edit()
        elif command == "d":
            row = _row_command(table, argument)
            if row:
                row.delete()
        elif command == "c" and controller.cancel_visible:
            controller.cancel()
        elif command == "r":
            controller.load_books()
        elif command == "q":
            console.print("[green]Goodbye![/]")
            break
        else:
            console.print("[yellow]Unknown command. Please try again.[/]")
            console.input("[dim]Press Enter to continue[/]")


if __name__ == "__main__":
    app()
