"""
Interactive text menu for Library Records.

The shell reads raw lines, turns them into the typed arguments of the
``LibraryManager`` operations and prints the outcome. It makes no decisions
of its own: every rule lives in the manager.
"""

import logging
import sys
from typing import TextIO

from .manager import LibraryManager
from .models import Book, Loan, format_timestamp
from .storage import StorageLocations

logger = logging.getLogger(__name__)

MENU = (
    "\n--- Library Menu ---\n"
    "1. Add book\n"
    "2. Remove book\n"
    "3. Add reader\n"
    "4. Remove reader\n"
    "5. Issue book\n"
    "6. Return book\n"
    "7. Search books\n"
    "8. Reports\n"
    "9. Save & Exit\n"
    "0. Exit without save\n"
    "Choice: "
)


class EndOfInput(Exception):
    """Raised when the input stream is exhausted mid-session."""


def format_book(book: Book, with_status: bool = True) -> str:
    line = f"{book.title} — {book.author} — {book.isbn}"
    if with_status:
        line += " — " + ("Available" if book.is_available else "Loaned")
    return line


def format_loan(loan: Loan) -> str:
    since = format_timestamp(loan.loan_date)
    return f"ISBN: {loan.book_isbn} ReaderId: {loan.reader_id} since {since}"


class LibraryShell:
    """
    Menu loop driving a ``LibraryManager``.

    Choosing 9 saves to ``locations`` before leaving; choosing 0, or reaching
    the end of the input, leaves without saving.
    """

    def __init__(
        self,
        manager: LibraryManager,
        locations: StorageLocations,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ):
        self.manager = manager
        self.locations = locations
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self._commands = {
            "1": self.add_book,
            "2": self.remove_book,
            "3": self.add_reader,
            "4": self.remove_reader,
            "5": self.issue_book,
            "6": self.return_book,
            "7": self.search_books,
            "8": self.reports,
        }

    def run(self) -> bool:
        """
        Process menu choices until the user exits.

        Returns:
            True if the session ended with a save
        """
        while True:
            self._write(MENU)
            try:
                choice = self._read_line()
            except EndOfInput:
                self._say("\nExit without save.")
                return False

            if choice == "9":
                self.manager.save(self.locations)
                self._say("Saved. Exiting.")
                return True
            if choice == "0":
                self._say("Exit without save.")
                return False

            command = self._commands.get(choice)
            if command is None:
                self._say("Unknown command.")
                continue

            try:
                command()
            except EndOfInput:
                self._say("\nExit without save.")
                return False

    # === Menu commands ===

    def add_book(self) -> None:
        book = Book(
            title=self._ask("Title: "),
            author=self._ask("Author: "),
            isbn=self._ask("ISBN: "),
        )
        self._say("Book added." if self.manager.add_book(book) else "Book exists.")

    def remove_book(self) -> None:
        isbn = self._ask("ISBN to remove: ")
        if self.manager.remove_book(isbn):
            self._say("Removed.")
        else:
            self._say("Remove failed (not found or loaned).")

    def add_reader(self) -> None:
        name = self._ask("Name: ")
        email = self._ask("Email: ")
        reader = self.manager.register_reader(name, email)
        self._say(f"Reader added with Id={reader.id}")

    def remove_reader(self) -> None:
        reader_id = self._ask_reader_id("Reader id to remove: ")
        if reader_id is None:
            return
        self._say("Removed." if self.manager.remove_reader(reader_id) else "Not found.")

    def issue_book(self) -> None:
        reader_id = self._ask_reader_id("ReaderId: ")
        if reader_id is None:
            return
        isbn = self._ask("ISBN: ")
        self._say("Issued." if self.manager.issue_loan(isbn, reader_id) else "Issue failed.")

    def return_book(self) -> None:
        reader_id = self._ask_reader_id("ReaderId: ")
        if reader_id is None:
            return
        isbn = self._ask("ISBN: ")
        self._say("Returned." if self.manager.return_book(isbn, reader_id) else "Return failed.")

    def search_books(self) -> None:
        term = self._ask("Search term: ")
        for book in self.manager.search_books(term):
            self._say(format_book(book))

    def reports(self) -> None:
        self._say("Available books:")
        for book in self.manager.available_books():
            self._say(format_book(book, with_status=False))
        self._say("Active loans:")
        for loan in self.manager.active_loans():
            self._say(format_loan(loan))

    # === Input / output helpers ===

    def _ask_reader_id(self, prompt: str) -> int | None:
        raw = self._ask(prompt)
        try:
            return int(raw)
        except ValueError:
            logger.debug("Rejected reader id input %r", raw)
            self._say("Invalid reader id.")
            return None

    def _ask(self, prompt: str) -> str:
        self._write(prompt)
        return self._read_line()

    def _read_line(self) -> str:
        line = self.stdin.readline()
        if not line:
            raise EndOfInput
        return line.rstrip("\r\n").strip()

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _say(self, text: str) -> None:
        self._write(text + "\n")
