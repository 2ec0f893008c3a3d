"""
Feature documents for books and readers.

Weighting is done by repetition: genres appear three times and moods twice in
a book's feature document, so their term frequency is higher than that of
title or description words. The user profile repeats the documents of the most
recently liked books in the same way.
"""

from typing import List, Sequence

from ..models import Book
from .text import strip_html

GENRE_REPEAT = 3
MOOD_REPEAT = 2
MAX_SUBJECTS = 15
MAX_DESCRIPTION_WORDS = 40
MIN_DESCRIPTION_WORD_LENGTH = 4

# (window size, repeat) from the most recent like backwards; the rest count once.
RECENCY_TIERS = ((5, 3), (5, 2))


def _description_words(description: str) -> List[str]:
    words = [word for word in strip_html(description).split() if len(word) >= MIN_DESCRIPTION_WORD_LENGTH]
    return words[:MAX_DESCRIPTION_WORDS]


def build_feature_string(book: Book) -> str:
    """Build the lowercase weighted feature document for a book."""
    genre_text = " ".join(book.genre)
    mood_text = " ".join(book.mood)
    subject_text = " ".join(book.subjects[:MAX_SUBJECTS])
    description_text = " ".join(_description_words(book.description))

    parts = [book.title, book.author]
    parts.extend([genre_text] * GENRE_REPEAT)
    parts.extend([mood_text] * MOOD_REPEAT)
    parts.append(subject_text)
    parts.append(description_text)
    return " ".join(parts).lower()


def build_user_profile(liked_books: Sequence[Book]) -> str:
    """Concatenate liked books' feature documents with recency weighting.

    ``liked_books`` is ordered oldest first; the last five count three times,
    the five before them twice, and everything older once.
    """
    if not liked_books:
        return ""

    remaining = list(liked_books)
    features: List[str] = []
    for window, repeat in RECENCY_TIERS:
        if not remaining:
            break
        recent = remaining[-window:]
        remaining = remaining[:-window]
        for book in recent:
            features.extend([build_feature_string(book)] * repeat)

    for book in remaining:
        features.append(build_feature_string(book))

    return " ".join(features)
