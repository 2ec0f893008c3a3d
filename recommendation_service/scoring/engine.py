"""
Content-based scoring engine for book recommendations.

This module intentionally lives inside recommendation_service/ so it can be
shared by the web application, batch jobs, or any future CLI tooling without
introducing Flask dependencies. Every call is stateless: the vocabulary is
rebuilt from the call's own corpus and discarded afterwards.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import AbstractSet, List, Optional, Sequence

from ..models import Book, ReasonType, RecommendationReason
from .features import build_feature_string, build_user_profile
from .tfidf import build_vocabulary, compute_tfidf, cosine_similarity

logger = logging.getLogger(__name__)

POPULARITY_BOOST_COEFFICIENT = 0.03
QUALITY_BOOST_COEFFICIENT = 0.05
QUALITY_BASELINE = 3.5
QUALITY_MIN_RATING = 4.0
COMMUNITY_REASON_MIN_READERS = 1000
MAX_REASONS = 3


# ---------------------------------------------------------------------------
# Core data structures
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class ScoringOptions:
    """Per-call switches and tunable boost constants."""

    community_boost: bool = True
    exclude_ids: Optional[AbstractSet[str]] = None
    popularity_coefficient: float = POPULARITY_BOOST_COEFFICIENT
    quality_coefficient: float = QUALITY_BOOST_COEFFICIENT
    quality_baseline: float = QUALITY_BASELINE
    quality_min_rating: float = QUALITY_MIN_RATING


@dataclass(slots=True)
class ScoredBook:
    """A candidate with its similarity score and reasons."""

    book: Book
    score: float
    final_score: float
    reasons: List[RecommendationReason] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "book": self.book.to_dict(),
            "score": self.score,
            "final_score": self.final_score,
            "reasons": [reason.model_dump(mode="json") for reason in self.reasons],
        }


# ---------------------------------------------------------------------------
# Boosts
# ---------------------------------------------------------------------------


def apply_boosts(score: float, book: Book, options: ScoringOptions) -> float:
    """Multiply in the popularity boost, then the quality boost."""
    readers = book.readinglog_count
    if options.community_boost and readers:
        score *= 1 + math.log10(readers + 1) * options.popularity_coefficient

    if book.rating >= options.quality_min_rating:
        score *= 1 + (book.rating - options.quality_baseline) * options.quality_coefficient

    return score


# ---------------------------------------------------------------------------
# Reasons
# ---------------------------------------------------------------------------


def _format_rating(rating: float) -> str:
    return f"{rating:g}"


def generate_reasons(book: Book, liked_books: Sequence[Book]) -> List[RecommendationReason]:
    """Explain why ``book`` fits the reader, independent of its score.

    Signals in priority order: genre, author, mood, community, rating. At most
    three are returned; with none, a single ``similar`` reason is returned.
    """
    reasons: List[RecommendationReason] = []

    liked_genres: Counter = Counter(genre for liked in liked_books for genre in liked.genre)
    matched_genres = [genre for genre in book.genre if liked_genres[genre] > 0]
    if matched_genres:
        best_genre = sorted(matched_genres, key=lambda genre: liked_genres[genre], reverse=True)[0]
        reasons.append(RecommendationReason(
            type=ReasonType.GENRE,
            description=f"Matches your favorite genre: {best_genre}",
        ))

    liked_authors = {liked.author for liked in liked_books}
    if book.author in liked_authors:
        reasons.append(RecommendationReason(
            type=ReasonType.AUTHOR,
            description=f"By an author you love: {book.author}",
        ))

    liked_moods = {mood for liked in liked_books for mood in liked.mood}
    matched_moods = [mood for mood in book.mood if mood in liked_moods]
    if matched_moods:
        reasons.append(RecommendationReason(
            type=ReasonType.MOOD,
            description=f"Captures a mood you enjoy: {matched_moods[0]}",
        ))

    readers = book.readinglog_count
    if readers and readers > COMMUNITY_REASON_MIN_READERS:
        thousands = math.floor(readers / 1000 + 0.5)
        reasons.append(RecommendationReason(
            type=ReasonType.COMMUNITY,
            description=f"Popular with {thousands}k readers",
        ))

    if book.rating >= QUALITY_MIN_RATING:
        reasons.append(RecommendationReason(
            type=ReasonType.RATING,
            description=f"Highly rated ({_format_rating(book.rating)}/5)",
        ))

    if not reasons:
        return [RecommendationReason(type=ReasonType.SIMILAR, description="Similar to books you liked")]
    return reasons[:MAX_REASONS]


# ---------------------------------------------------------------------------
# Main scoring pipeline
# ---------------------------------------------------------------------------


def score_books(
    candidates: Sequence[Book],
    liked_books: Sequence[Book],
    options: Optional[ScoringOptions] = None,
) -> List[ScoredBook]:
    """Rank candidates by TF-IDF cosine similarity to the reader's profile.

    Returns an empty list when there are no liked books or no candidates left
    after exclusion. Ties keep their candidate order (``sorted`` is stable).
    """
    options = options or ScoringOptions()

    if not liked_books or not candidates:
        return []

    if options.exclude_ids:
        filtered = [book for book in candidates if book.id not in options.exclude_ids]
    else:
        filtered = list(candidates)
    if not filtered:
        return []

    profile_text = build_user_profile(liked_books)
    candidate_texts = [build_feature_string(book) for book in filtered]
    vocab = build_vocabulary([profile_text, *candidate_texts])
    profile_vector = compute_tfidf(profile_text, vocab)

    scored: List[ScoredBook] = []
    for book, text in zip(filtered, candidate_texts):
        similarity = cosine_similarity(profile_vector, compute_tfidf(text, vocab))
        score = apply_boosts(similarity, book, options)
        scored.append(ScoredBook(
            book=book,
            score=score,
            final_score=score,
            reasons=generate_reasons(book, liked_books),
        ))

    scored.sort(key=lambda item: item.final_score, reverse=True)
    logger.debug(f"Scored {len(scored)} candidates against {len(liked_books)} liked books (vocabulary={len(vocab)} terms)")
    return scored
