"""
Library manager for Library Records.

The manager owns the three collections (books, readers, loans) and is the
only code that mutates them. Every operation is synchronous and returns a
plain success flag: on failure nothing has changed.

Integrity rules enforced here:

1. **Availability**: a book is unavailable exactly while an active loan
   references its ISBN. Every path that creates, closes or deletes an active
   loan goes through ``_sync_availability`` so the flag cannot drift.
2. **Unique identifiers**: no two books share an ISBN, no two readers an id.
3. **Reader removal cascade**: removing a reader deletes that reader's
   active loans. Returned loans are history and are kept.
4. **Book removal**: a book that is out on loan cannot be removed.

Callers only ever receive copies of the stored records.
"""

import logging
from collections import Counter
from collections.abc import Callable
from datetime import datetime

from .config import LibraryConfig
from .models import Book, Loan, Reader, utc_now
from .models.base import normalize_timestamp
from .storage import (
    DEFAULT_INDENT,
    StorageError,
    StorageLocations,
    read_documents,
    write_documents,
)

logger = logging.getLogger(__name__)


class LibraryManager:
    """
    In-memory owner of the catalog, the reader list and the loan history.

    Collections keep insertion order and no operation reorders them.
    Lookups by identifier are linear scans over those lists.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] | None = None,
        isolate_load_failures: bool = False,
        json_indent: int = DEFAULT_INDENT,
    ):
        """
        Initialize an empty library.

        Args:
            clock: Source of "now" for loan and return dates (UTC)
            isolate_load_failures: Empty only the corrupt collection on load
                instead of all three
            json_indent: Indentation used when saving
        """
        self._books: list[Book] = []
        self._readers: list[Reader] = []
        self._loans: list[Loan] = []
        self._clock = clock or utc_now
        self.isolate_load_failures = isolate_load_failures
        self.json_indent = json_indent

    @classmethod
    def from_config(
        cls, config: LibraryConfig, clock: Callable[[], datetime] | None = None
    ) -> "LibraryManager":
        """Build a manager using the load policy and indent from ``config``."""
        return cls(
            clock=clock,
            isolate_load_failures=config.isolate_load_failures,
            json_indent=config.json_indent,
        )

    # === Collection views ===

    @property
    def books(self) -> list[Book]:
        """Copy of the catalog, in catalog order."""
        return [book.model_copy() for book in self._books]

    @property
    def readers(self) -> list[Reader]:
        return [reader.model_copy() for reader in self._readers]

    @property
    def loans(self) -> list[Loan]:
        """Copy of the full loan history, active and returned."""
        return [loan.model_copy() for loan in self._loans]

    # === Books ===

    def add_book(self, book: Book) -> bool:
        """
        Add a book to the catalog. Fails if its ISBN is already present.

        The stored availability is derived from the loan history; the flag
        on ``book`` is ignored.
        """
        if self._find_book(book.isbn) is not None:
            logger.info("Rejected book %r: ISBN already in catalog", book.isbn)
            return False

        self._books.append(book.model_copy())
        self._sync_availability(book.isbn)
        logger.debug("Added book %r (%s)", book.isbn, book.title)
        return True

    def remove_book(self, isbn: str) -> bool:
        """Remove a book. Fails if it does not exist or is out on loan."""
        book = self._find_book(isbn)
        if book is None:
            logger.info("Cannot remove book %r: not found", isbn)
            return False
        if not book.is_available:
            logger.info("Cannot remove book %r: currently loaned", isbn)
            return False

        self._books = [b for b in self._books if b is not book]
        logger.debug("Removed book %r", isbn)
        return True

    def find_book(self, isbn: str) -> Book | None:
        book = self._find_book(isbn)
        return book.model_copy() if book is not None else None

    def search_books(self, term: str) -> list[Book]:
        """
        Find books whose title or author contains ``term``.

        Matching ignores case. An empty term returns the whole catalog.
        Results keep catalog order.
        """
        if not term:
            return self.books
        return [book.model_copy() for book in self._books if book.matches(term)]

    def available_books(self) -> list[Book]:
        return [book.model_copy() for book in self._books if book.is_available]

    # === Readers ===

    def next_reader_id(self) -> int:
        """Id for the next reader: one more than the largest id in use."""
        return max((reader.id for reader in self._readers), default=0) + 1

    def add_reader(self, reader: Reader) -> bool:
        """Register a reader. Fails if its id is already taken."""
        if self._find_reader(reader.id) is not None:
            logger.info("Rejected reader id %d: already registered", reader.id)
            return False

        self._readers.append(reader.model_copy())
        logger.debug("Added reader %d (%s)", reader.id, reader.name)
        return True

    def register_reader(self, name: str, email: str) -> Reader:
        """Create a reader with the next free id and add it."""
        reader = Reader(id=self.next_reader_id(), name=name, email=email)
        self.add_reader(reader)
        return reader.model_copy()

    def remove_reader(self, reader_id: int) -> bool:
        """
        Remove a reader together with the reader's active loans.

        Returned loans of the reader stay in the history. Books whose active
        loan is deleted become available again.
        """
        reader = self._find_reader(reader_id)
        if reader is None:
            logger.info("Cannot remove reader %d: not found", reader_id)
            return False

        kept: list[Loan] = []
        dropped: list[Loan] = []
        for loan in self._loans:
            (dropped if loan.reader_id == reader_id and loan.is_active else kept).append(loan)

        self._loans = kept
        self._readers = [r for r in self._readers if r is not reader]

        for loan in dropped:
            self._sync_availability(loan.book_isbn)

        logger.debug("Removed reader %d and %d active loan(s)", reader_id, len(dropped))
        return True

    def find_reader(self, reader_id: int) -> Reader | None:
        reader = self._find_reader(reader_id)
        return reader.model_copy() if reader is not None else None

    # === Loans ===

    def issue_loan(self, isbn: str, reader_id: int) -> bool:
        """
        Lend a book to a reader.

        Fails if the book does not exist, is already out, or the reader does
        not exist.
        """
        book = self._find_book(isbn)
        if book is None:
            logger.info("Cannot issue %r: book not found", isbn)
            return False
        if not book.is_available:
            logger.info("Cannot issue %r: book already loaned", isbn)
            return False
        if self._find_reader(reader_id) is None:
            logger.info("Cannot issue %r: reader %d not found", isbn, reader_id)
            return False

        self._loans.append(
            Loan(book_isbn=isbn, reader_id=reader_id, loan_date=self._now(), return_date=None)
        )
        self._sync_availability(isbn)
        logger.debug("Issued %r to reader %d", isbn, reader_id)
        return True

    def return_book(self, isbn: str, reader_id: int) -> bool:
        """Close the active loan of ``isbn`` held by ``reader_id``."""
        loan = next(
            (
                loan
                for loan in self._loans
                if loan.book_isbn == isbn and loan.reader_id == reader_id and loan.is_active
            ),
            None,
        )
        if loan is None:
            logger.info("Cannot return %r: no active loan for reader %d", isbn, reader_id)
            return False

        loan.mark_returned(self._now())
        self._sync_availability(isbn)
        logger.debug("Reader %d returned %r", reader_id, isbn)
        return True

    def active_loans(self) -> list[Loan]:
        return [loan.model_copy() for loan in self._loans if loan.is_active]

    def loans_for_reader(self, reader_id: int) -> list[Loan]:
        """All loans of one reader, active and returned, in issue order."""
        return [loan.model_copy() for loan in self._loans if loan.reader_id == reader_id]

    # === Integrity ===

    def integrity_violations(self) -> list[str]:
        """
        Describe every broken invariant in the current state.

        Returns:
            Human-readable descriptions; empty when the state is consistent
        """
        violations: list[str] = []

        for isbn, count in Counter(book.isbn for book in self._books).items():
            if count > 1:
                violations.append(f"ISBN {isbn!r} appears {count} times in the catalog")
        for reader_id, count in Counter(reader.id for reader in self._readers).items():
            if count > 1:
                violations.append(f"Reader id {reader_id} appears {count} times")

        active = Counter(loan.book_isbn for loan in self._loans if loan.is_active)
        for isbn, count in active.items():
            if count > 1:
                violations.append(f"ISBN {isbn!r} has {count} active loans")
            if self._find_book(isbn) is None:
                violations.append(f"Active loan references missing book {isbn!r}")

        for loan in self._loans:
            if loan.is_active and self._find_reader(loan.reader_id) is None:
                violations.append(
                    f"Active loan of {loan.book_isbn!r} references missing reader {loan.reader_id}"
                )

        for book in self._books:
            loaned = active[book.isbn] > 0
            if book.is_available == loaned:
                state = "available" if book.is_available else "unavailable"
                violations.append(
                    f"Book {book.isbn!r} is {state} but has {active[book.isbn]} active loan(s)"
                )

        return violations

    # === Persistence ===

    def save(self, locations: StorageLocations) -> None:
        """
        Write the three collections to their files.

        Raises:
            OSError: If any file cannot be written
        """
        write_documents(
            locations.books, (b.to_document() for b in self._books), indent=self.json_indent
        )
        write_documents(
            locations.readers, (r.to_document() for r in self._readers), indent=self.json_indent
        )
        write_documents(
            locations.loans, (ln.to_document() for ln in self._loans), indent=self.json_indent
        )
        logger.info(
            "Saved %d books, %d readers, %d loans",
            len(self._books),
            len(self._readers),
            len(self._loans),
        )

    def load(self, locations: StorageLocations) -> None:
        """
        Replace the in-memory state with the contents of the three files.

        Absent files load as empty collections and malformed fields fall
        back to defaults. A file that cannot be decoded at all empties every
        collection, unless ``isolate_load_failures`` is set, in which case
        only that file's collection is left empty.
        """
        self._clear()

        loaded: dict[str, list] = {}
        for name, path, model in (
            ("books", locations.books, Book),
            ("readers", locations.readers, Reader),
            ("loans", locations.loans, Loan),
        ):
            try:
                documents = read_documents(path)
            except StorageError as e:
                if not self.isolate_load_failures:
                    logger.warning("Load failed (%s); starting with an empty library", e)
                    return
                logger.warning("Load failed (%s); starting with no %s", e, name)
                documents = None

            loaded[name] = [model.from_document(doc) for doc in documents or []]

        self._books = loaded["books"]
        self._readers = loaded["readers"]
        self._loans = loaded["loans"]
        logger.info(
            "Loaded %d books, %d readers, %d loans",
            len(self._books),
            len(self._readers),
            len(self._loans),
        )

        for violation in self.integrity_violations():
            logger.warning("Inconsistent data after load: %s", violation)

    # === Internal helpers ===

    def _now(self) -> datetime:
        return normalize_timestamp(self._clock())

    def _clear(self) -> None:
        self._books = []
        self._readers = []
        self._loans = []

    def _find_book(self, isbn: str) -> Book | None:
        return next((book for book in self._books if book.isbn == isbn), None)

    def _find_reader(self, reader_id: int) -> Reader | None:
        return next((reader for reader in self._readers if reader.id == reader_id), None)

    def _sync_availability(self, isbn: str) -> None:
        """Set the book's availability from the loan history."""
        book = self._find_book(isbn)
        if book is None:
            return
        if any(loan.book_isbn == isbn and loan.is_active for loan in self._loans):
            book.mark_as_loaned()
        else:
            book.mark_as_available()
