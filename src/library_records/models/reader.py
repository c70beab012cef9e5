"""
Reader model for Library Records.

Readers are registered library members who can borrow books. Their integer
ids are handed out by the library manager (one more than the largest id in
use), so a freshly constructed Reader carries id 0 until it is registered.
"""

from pydantic import ConfigDict, Field, field_validator

from .base import Record


class Reader(Record):
    """Represents a registered reader."""

    id: int = Field(
        default=0,
        alias="Id",
        description="Unique identifier assigned by the library manager",
        ge=0,
        examples=[1, 2, 42],
    )

    name: str = Field(
        default="",
        alias="Name",
        description="Full name of the reader",
        examples=["Jane Doe"],
    )

    email: str = Field(
        default="",
        alias="Email",
        description="Contact email address",
        examples=["jane.doe@example.com"],
    )

    @field_validator("name", "email")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Drop surrounding whitespace picked up from interactive input."""
        return v.strip()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "Id": 1,
                "Name": "Jane Doe",
                "Email": "jane.doe@example.com",
            }
        }
    )
