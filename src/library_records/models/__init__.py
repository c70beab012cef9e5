"""
Library Records Models.

This package contains the Pydantic models for the three persisted entities:

- Book: Catalog entries, keyed by ISBN
- Reader: Registered members, keyed by integer id
- Loan: Lending history linking a book to a reader

Each model converts to and from a plain document (``to_document`` /
``from_document``) used by the storage layer.
"""

from .base import Record, format_timestamp, utc_now
from .book import Book
from .loan import Loan
from .reader import Reader

__all__ = [
    "Book",
    "Loan",
    "Reader",
    "Record",
    "format_timestamp",
    "utc_now",
]
