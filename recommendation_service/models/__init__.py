"""
Models package for book and recommendation data.

This package contains the Pydantic models shared by the scoring engine,
the persistence layer and the web application.
"""

from .book_models import (
    Book,
    BookMetadata,
)

from .recommendation_models import (
    ReasonType,
    RecommendationReason,
    DailyPick,
    BookChain,
)

__all__ = [
    # Book models
    "Book",
    "BookMetadata",

    # Recommendation models
    "ReasonType",
    "RecommendationReason",
    "DailyPick",
    "BookChain",
]
