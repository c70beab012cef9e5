"""
Shared record behaviour for the Library Records models.

Every entity (Book, Reader, Loan) is stored on disk as a *document*: a plain
mapping from the PascalCase field name to a JSON-compatible value. This
module provides the conversion in both directions plus the canonical
timestamp format used for loan and return dates.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, ValidationError

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def normalize_timestamp(value: datetime) -> datetime:
    """Return ``value`` in UTC, truncated to whole seconds.

    Naive datetimes are taken to already be in UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).replace(microsecond=0)


def utc_now() -> datetime:
    """Current time in the canonical UTC, whole-second form."""
    return normalize_timestamp(datetime.now(UTC))


def format_timestamp(value: datetime | None) -> str | None:
    """Render a timestamp with the fixed ``YYYY-MM-DDTHH:MM:SSZ`` layout."""
    if value is None:
        return None
    return normalize_timestamp(value).strftime(TIMESTAMP_FORMAT)


class Record(BaseModel):
    """
    Base class for persisted library records.

    Subclasses declare their fields with an ``alias`` equal to the document
    key. Construction with no arguments yields a record holding only
    defaults.
    """

    model_config = ConfigDict(
        # Keep the denormalized fields validated when the manager mutates them
        validate_assignment=True,
        # Accept both snake_case attribute names and document keys
        populate_by_name=True,
        validate_default=True,
        extra="ignore",
    )

    def to_document(self) -> dict[str, Any]:
        """Convert the record to a document keyed by field alias.

        Optional fields that are unset are present with a ``None`` value.
        """
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_document(cls, document: Any) -> Self:
        """
        Rebuild a record from a document.

        Missing keys take the field default. A value of the wrong shape is
        dropped and its field falls back to the default as well, so one bad
        field never prevents the rest of the record from loading.

        Args:
            document: Mapping produced by ``to_document`` (or anything else)

        Returns:
            The reconstructed record
        """
        if not isinstance(document, Mapping):
            return cls()

        data = {key: value for key, value in document.items() if isinstance(key, str)}
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            rejected = {error["loc"][0] for error in e.errors() if error["loc"]}

        # Error locations use the alias; drop the attribute-name spelling too
        for name, field in cls.model_fields.items():
            if field.alias in rejected:
                rejected.add(name)

        data = {key: value for key, value in data.items() if key not in rejected}
        try:
            return cls.model_validate(data)
        except ValidationError:
            return cls()
