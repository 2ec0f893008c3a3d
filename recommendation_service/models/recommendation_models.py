"""
Recommendation output models.

Reasons, the persisted daily pick and reading-path chains. ``DailyPick`` is the
only record the recommender persists, so its JSON shape is kept flat:
``book``, ``reasons``, ``date``, ``dismissed``, ``saved``.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from .book_models import Book


class ReasonType(str, Enum):
    """Kinds of justification attached to a recommendation."""
    GENRE = "genre"
    MOOD = "mood"
    AUTHOR = "author"
    RATING = "rating"
    COMMUNITY = "community"
    SIMILAR = "similar"


class RecommendationReason(BaseModel):
    """Human-readable justification for a recommended book."""
    type: ReasonType = Field(description="Signal that produced this reason")
    description: str = Field(description="Text shown to the reader")


class DailyPick(BaseModel):
    """The single book picked for a calendar day."""
    book: Book
    reasons: List[RecommendationReason] = Field(default_factory=list)
    date: str = Field(description="Local calendar day, YYYY-MM-DD")
    dismissed: bool = False
    saved: bool = False

    def to_dict(self) -> dict:
        return {
            "book": self.book.to_dict(),
            "reasons": [reason.model_dump(mode="json") for reason in self.reasons],
            "date": self.date,
            "dismissed": self.dismissed,
            "saved": self.saved,
        }


class BookChain(BaseModel):
    """A short reading path: start book followed by similar hops."""
    start_book: Book
    chain: List[Book] = Field(default_factory=list)
    theme: str = ""

    def to_dict(self) -> dict:
        return {
            "start_book": self.start_book.to_dict(),
            "chain": [book.to_dict() for book in self.chain],
            "theme": self.theme,
        }
