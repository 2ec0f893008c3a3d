"""
Book-related data models.

This module contains Pydantic models for catalog books and their optional
metadata. Collections that upstream sources sometimes omit (genres, moods,
subjects) are coerced to empty lists so downstream scoring never has to guard
against ``None``.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class BookMetadata(BaseModel):
    """Optional catalog metadata attached to a book."""
    model_config = ConfigDict(populate_by_name=True)

    subjects: List[str] = Field(default_factory=list, description="Subject tags (up to ~20)")
    readinglog_count: Optional[int] = Field(default=None, alias="readinglogCount", description="Reading-log entries on Open Library")
    want_to_read_count: Optional[int] = Field(default=None, alias="wantToReadCount", description="Want-to-read entries")
    ratings_count: Optional[int] = Field(default=None, alias="ratingsCount", description="Number of ratings")
    source: str = Field(default="sample", description="Source (sample, openlibrary, google)")

    @field_validator("subjects", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or []


class Book(BaseModel):
    """A candidate or liked book."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Stable candidate identity")
    title: str = Field(default="", description="Book title")
    author: str = Field(default="", description="Primary author")
    genre: List[str] = Field(default_factory=list, description="Genres, most specific first")
    mood: List[str] = Field(default_factory=list, description="Mood labels")
    description: str = Field(default="", description="Free-text description, may contain HTML")
    rating: float = Field(default=0.0, description="Average rating on a 0-5 scale")
    pages: int = Field(default=0, description="Page count")
    cover: str = Field(default="", description="Cover image URL")
    published_year: Optional[int] = Field(default=None, alias="publishedYear", description="First publication year")
    reading_time: str = Field(default="", alias="readingTime", description="Human reading-time estimate, e.g. '4-6 hours'")
    metadata: Optional[BookMetadata] = Field(default=None, description="Optional catalog metadata")

    @field_validator("genre", "mood", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or []

    @field_validator("description", "title", "author", "cover", "reading_time", mode="before")
    @classmethod
    def _none_to_blank(cls, value):
        return value or ""

    @property
    def subjects(self) -> List[str]:
        """Subject tags, empty when the book carries no metadata."""
        return self.metadata.subjects if self.metadata else []

    @property
    def readinglog_count(self) -> Optional[int]:
        """Reading-log popularity count, if known."""
        return self.metadata.readinglog_count if self.metadata else None

    def to_dict(self) -> dict:
        """Serialize using the camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
