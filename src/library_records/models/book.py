"""
Book model for Library Records.

A book is one entry in the catalog, identified by its ISBN. The
``is_available`` flag mirrors the loan history: it is False exactly while an
unreturned loan references the ISBN. Only the library manager flips it,
through ``mark_as_loaned`` and ``mark_as_available``.
"""

from pydantic import ConfigDict, Field

from .base import Record


class Book(Record):
    """Represents a book in the library catalog."""

    title: str = Field(
        default="",
        alias="Title",
        description="The title of the book",
        examples=["Dune", "The Left Hand of Darkness"],
    )

    author: str = Field(
        default="",
        alias="Author",
        description="The author of the book, as free text",
        examples=["Frank Herbert", "Ursula K. Le Guin"],
    )

    isbn: str = Field(
        default="",
        alias="ISBN",
        description="Unique identifier of the book within the catalog",
        examples=["9780441172719", "111"],
    )

    is_available: bool = Field(
        default=True,
        alias="IsAvailable",
        description="False while an unreturned loan references this book",
    )

    def mark_as_loaned(self) -> None:
        """Flag the book as out on loan."""
        self.is_available = False

    def mark_as_available(self) -> None:
        """Flag the book as back on the shelf."""
        self.is_available = True

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match against title or author."""
        needle = term.lower()
        return needle in self.title.lower() or needle in self.author.lower()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "Title": "Dune",
                "Author": "Frank Herbert",
                "ISBN": "9780441172719",
                "IsAvailable": True,
            }
        }
    )
