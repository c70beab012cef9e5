"""
Loan model for Library Records.

A loan ties one book (by ISBN) to one reader (by id) from the moment it is
issued. The loan is *active* until its return date is set; after that it is
kept as history for reporting. Both references are plain values, not
ownership: the library manager is responsible for keeping them consistent
with the catalog and the reader list.

Dates are timezone-aware UTC datetimes with whole-second precision and are
written to documents as ``YYYY-MM-DDTHH:MM:SSZ``.
"""

from datetime import datetime

from pydantic import ConfigDict, Field, field_serializer, field_validator

from .base import Record, format_timestamp, normalize_timestamp


class Loan(Record):
    """
    Represents one lending of a book to a reader.

    ``return_date`` is ``None`` while the book is out; there is no sentinel
    value for "not returned".
    """

    book_isbn: str = Field(
        default="",
        alias="BookISBN",
        description="ISBN of the lent book",
        examples=["9780441172719"],
    )

    reader_id: int = Field(
        default=0,
        alias="ReaderId",
        description="Id of the borrowing reader",
        ge=0,
        examples=[1],
    )

    loan_date: datetime | None = Field(
        default=None,
        alias="LoanDate",
        description="When the loan was issued",
        examples=["2024-05-01T09:30:00Z"],
    )

    return_date: datetime | None = Field(
        default=None,
        alias="ReturnDate",
        description="When the book came back, or None while the loan is active",
        examples=[None, "2024-05-15T16:05:12Z"],
    )

    @field_validator("loan_date", "return_date")
    @classmethod
    def normalize_dates(cls, v: datetime | None) -> datetime | None:
        """Store dates in UTC at whole-second precision."""
        if v is None:
            return v
        return normalize_timestamp(v)

    @field_serializer("loan_date", "return_date")
    def serialize_dates(self, v: datetime | None) -> str | None:
        return format_timestamp(v)

    @property
    def is_active(self) -> bool:
        """Check if the book is still out on this loan."""
        return self.return_date is None

    def mark_returned(self, when: datetime) -> None:
        """
        Close the loan.

        Raises:
            ValueError: If the loan was already returned
        """
        if not self.is_active:
            raise ValueError(f"Loan of {self.book_isbn!r} was already returned")
        self.return_date = when

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "BookISBN": "9780441172719",
                "ReaderId": 1,
                "LoanDate": "2024-05-01T09:30:00Z",
                "ReturnDate": None,
            }
        }
    )
