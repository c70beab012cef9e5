"""
Tests for the Book model.

These tests verify that the Book model correctly:
1. Constructs with defaults
2. Converts to and from documents keyed by the PascalCase names
3. Degrades malformed fields to defaults instead of failing
4. Tracks availability and matches search terms
"""

from library_records.models import Book


class TestBookModel:
    """Test suite for the Book model."""

    def test_default_book(self):
        """A bare Book holds empty text and is available."""
        book = Book()

        assert book.title == ""
        assert book.author == ""
        assert book.isbn == ""
        assert book.is_available is True

    def test_create_by_field_name_and_alias(self):
        """Both attribute names and document keys populate the model."""
        by_name = Book(title="Dune", author="Frank Herbert", isbn="111")
        by_alias = Book(Title="Dune", Author="Frank Herbert", ISBN="111")

        assert by_name == by_alias

    def test_to_document(self):
        book = Book(title="Dune", author="Frank Herbert", isbn="111", is_available=False)

        assert book.to_document() == {
            "Title": "Dune",
            "Author": "Frank Herbert",
            "ISBN": "111",
            "IsAvailable": False,
        }

    def test_from_document(self):
        book = Book.from_document(
            {"Title": "Dune", "Author": "Frank Herbert", "ISBN": "111", "IsAvailable": False}
        )

        assert book.title == "Dune"
        assert book.author == "Frank Herbert"
        assert book.isbn == "111"
        assert book.is_available is False

    def test_from_document_missing_fields(self):
        """Missing keys fall back to defaults."""
        book = Book.from_document({"ISBN": "111"})

        assert book.isbn == "111"
        assert book.title == ""
        assert book.author == ""
        assert book.is_available is True

    def test_from_document_wrong_types(self):
        """A wrong-shaped value only resets its own field."""
        book = Book.from_document(
            {"Title": ["not", "text"], "Author": "Frank Herbert", "ISBN": 111, "IsAvailable": {}}
        )

        assert book.title == ""
        assert book.author == "Frank Herbert"
        assert book.isbn == ""
        assert book.is_available is True

    def test_from_document_not_a_mapping(self):
        """Anything that is not a mapping yields an all-default book."""
        for document in [None, 42, "Dune", ["Title", "Dune"]]:
            assert Book.from_document(document) == Book()

    def test_from_document_ignores_unknown_keys(self):
        book = Book.from_document({"ISBN": "111", "Shelf": "B4"})

        assert book.isbn == "111"
        assert "Shelf" not in book.to_document()

    def test_availability_transitions(self):
        book = Book(title="Dune", isbn="111")

        book.mark_as_loaned()
        assert book.is_available is False

        book.mark_as_available()
        assert book.is_available is True

    def test_matches_title_or_author_case_insensitive(self):
        book = Book(title="Dune", author="Frank Herbert", isbn="111")

        assert book.matches("dune")
        assert book.matches("DUN")
        assert book.matches("herb")
        assert not book.matches("asimov")
        assert not book.matches("111")
