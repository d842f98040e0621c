"""Interactive command shell for the in-memory book library."""

import logging
from typing import Callable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.books import Book, BookStore
from core.errors import InvalidInput, StoreError

logger = logging.getLogger(__name__)

PROMPT = "library> "

HELP_TEXT = """
Commands:
  list                 - show all books
  add                  - add a new book
  find <term>          - search by title/author/year/isbn
  update <id>          - update a book by id
  remove <id>          - remove a book by id
  clear                - remove all books
  help                 - show this help
  exit                 - quit
"""


def _parse_id(arg: str) -> int | None:
    """Parse a non-zero book id, or return None."""
    try:
        book_id = int(arg)
    except ValueError:
        return None
    return book_id or None


def _parse_year(raw: str) -> int | None:
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidInput("Year must be a whole number.") from None


class LibraryShell:
    """
    Line-oriented command loop over a BookStore.

    Each command runs to completion, including any follow-up prompts, before
    the next command line is read. Input comes from ``read_line`` so the shell
    can be driven by a script in tests.
    """

    def __init__(
        self,
        store: BookStore,
        console: Console | None = None,
        read_line: Callable[[str], str] | None = None,
    ) -> None:
        self.store = store
        self.console = console or Console()
        self._read_line = read_line or self._console_input
        self._commands: dict[str, Callable[[str], None]] = {
            "help": self.cmd_help,
            "list": self.cmd_list,
            "add": self.cmd_add,
            "find": self.cmd_find,
            "update": self.cmd_update,
            "remove": self.cmd_remove,
            "clear": self.cmd_clear,
        }

    def _console_input(self, prompt: str) -> str:
        return self.console.input(escape(prompt))

    def _ask(self, prompt: str) -> str:
        return self._read_line(prompt).strip()

    def _say(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False)

    # ------------------------------------------------------------------
    # Session

    def run(self) -> None:
        """Run until 'exit', end of input or Ctrl-C."""
        self._say("Welcome to Library CLI. Manage books in memory.")
        self.cmd_help("")
        try:
            while True:
                line = self._read_line(PROMPT)
                if not self.handle_line(line):
                    break
        except (EOFError, KeyboardInterrupt):
            pass
        self._say("\nGoodbye!")

    def handle_line(self, line: str) -> bool:
        """
        Dispatch one command line.

        Returns:
            False when the session should end, True otherwise.
        """
        parts = line.strip().split()
        if not parts:
            return True

        command = parts[0].lower()
        arg = " ".join(parts[1:])
        if command == "exit":
            return False

        handler = self._commands.get(command)
        if handler is None:
            self._say("Unknown command. Type 'help' to see available commands.")
            return True

        try:
            handler(arg)
        except StoreError as exc:
            self._say(exc.message)
        except EOFError:
            raise
        except Exception as exc:
            logger.exception("Command %r failed", command)
            self._say(f"Error: {exc}")
        return True

    # ------------------------------------------------------------------
    # Rendering

    def print_books(self, books: list[Book]) -> None:
        if not books:
            self._say("No books available.")
            return

        table = Table(header_style="bold cyan")
        table.add_column("id", justify="right", style="magenta", no_wrap=True)
        table.add_column("title")
        table.add_column("author")
        table.add_column("year", justify="right")
        for book in books:
            table.add_row(
                str(book.id),
                escape(book.title),
                escape(book.author),
                str(book.year) if book.year is not None else "",
            )
        self.console.print(table)

    # ------------------------------------------------------------------
    # Commands

    def cmd_help(self, arg: str) -> None:
        self._say(HELP_TEXT)

    def cmd_list(self, arg: str) -> None:
        self.print_books(self.store.list_books())

    def cmd_add(self, arg: str) -> None:
        title = self._ask("Title: ")
        if not title:
            self._say("Title is required. Aborting add.")
            return
        author = self._ask("Author: ")
        year = _parse_year(self._ask("Year (optional): "))
        isbn = self._ask("ISBN (optional): ")

        book = self.store.add_book(title, author=author, year=year, isbn=isbn)
        self._say(f"Added: {book}")

    def cmd_find(self, arg: str) -> None:
        if not arg:
            self._say("Usage: find <term>")
            return
        results = self.store.find_books(arg)
        if not results:
            self._say("No matches.")
            return
        self.print_books(results)

    def cmd_update(self, arg: str) -> None:
        book_id = _parse_id(arg)
        if book_id is None:
            self._say("Usage: update <id>")
            return
        book = self.store.get_book(book_id)
        self._say(f"Updating book: {book}")

        title = self._ask(f"Title [{book.title}]: ")
        author = self._ask(f"Author [{book.author}]: ")
        year = _parse_year(self._ask(f"Year [{book.year if book.year is not None else ''}]: "))
        isbn = self._ask(f"ISBN [{book.isbn or ''}]: ")

        book = self.store.update_book(book_id, title=title, author=author, year=year, isbn=isbn)
        self._say(f"Saved: {book}")

    def cmd_remove(self, arg: str) -> None:
        book_id = _parse_id(arg)
        if book_id is None:
            self._say("Usage: remove <id>")
            return
        removed = self.store.remove_book(book_id)
        self._say(f"Removed: {removed}")

    def cmd_clear(self, arg: str) -> None:
        answer = self._ask("Are you sure you want to clear all books? (yes): ").lower()
        if answer == "yes":
            self.store.clear()
            self._say("Cleared.")
        else:
            self._say("Aborted.")
