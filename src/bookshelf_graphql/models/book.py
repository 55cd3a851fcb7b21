"""
Book models for the Bookshelf GraphQL service.

``Book`` is what the repository hands back and what subscribers receive;
``BookCreate`` validates the input of the ``addBook`` mutation before anything
touches the database.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookCreate(BaseModel):
    """Input for creating a book."""

    title: str = Field(
        ...,
        description="The title of the book",
        min_length=1,
        max_length=500,
        examples=["The Hobbit", "The Great Gatsby"],
    )

    author: str = Field(
        ...,
        description="The author of the book",
        min_length=1,
        max_length=200,
        examples=["J.R.R. Tolkien", "F. Scott Fitzgerald"],
    )

    @field_validator("title", "author")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        """Whitespace-only values count as empty."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class Book(BaseModel):
    """A book record as stored in the catalog."""

    id: int = Field(..., description="Identifier assigned on creation", ge=1)
    title: str
    author: str
    created_at: datetime | None = Field(
        default=None,
        description="Timestamp when the book was added",
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "The Hobbit",
                "author": "J.R.R. Tolkien",
            }
        },
    )
