"""
Recommendation service: smart, explore, mood and time-based lists.

Smart and explore lists are scored with the TF-IDF engine against the reader's
liked books. Mood and time lists are plain metadata filters over the cached
candidate pool.
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Dict, List, Optional

from config_manager import (
    CatalogConfig,
    RecommendationConfig,
    ScoringConfig,
    get_catalog_config,
    get_recommendation_config,
    get_scoring_config,
)

from .catalog import BookCache, CatalogError, LibraryStore, OpenLibraryClient
from .models import Book
from .reading_time import estimate_hours_from_string
from .scoring import ScoredBook, ScoringOptions, apply_mmr, ensure_genre_diversity, score_books

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoodFilter:
    id: str
    name: str
    description: str
    keywords: tuple


@dataclass(frozen=True)
class TimeSuggestion:
    id: str
    name: str
    description: str
    min_hours: Optional[float] = None
    max_hours: Optional[float] = None


MOOD_FILTERS: Dict[str, MoodFilter] = {f.id: f for f in [
    MoodFilter("uplifting", "Uplifting", "Feel-good and heartwarming reads",
               ("Uplifting", "Heartwarming", "Feel-good", "Cozy", "Beautiful")),
    MoodFilter("romantic", "Romantic", "Love stories and tender moments",
               ("Romantic", "Emotional", "Heartwarming")),
    MoodFilter("suspenseful", "Suspenseful", "Twists, tension and fast plots",
               ("Suspenseful", "Thrilling", "Dark", "Twisty", "Gripping")),
    MoodFilter("epic", "Epic", "Big worlds and long adventures",
               ("Epic", "Magical", "Adventure", "Immersive")),
    MoodFilter("thoughtful", "Thoughtful", "Philosophical and contemplative",
               ("Philosophical", "Thought-provoking", "Contemplative", "Reflective")),
    MoodFilter("funny", "Funny", "Humorous and light reads",
               ("Humorous", "Funny", "Light-hearted")),
    MoodFilter("inspiring", "Inspiring", "Motivating and empowering",
               ("Inspiring", "Motivational", "Empowering", "Practical")),
    MoodFilter("dark", "Dark", "Brooding, heavy and intense",
               ("Dark", "Melancholic", "Powerful")),
]}

TIME_SUGGESTIONS: Dict[str, TimeSuggestion] = {t.id: t for t in [
    TimeSuggestion("quick-bite", "< 2 hrs", "Perfect for a quick session", max_hours=2),
    TimeSuggestion("short-session", "2-4 hrs", "Nice afternoon read", min_hours=2, max_hours=4),
    TimeSuggestion("unwind", "4-6 hrs", "Unwind in the evening", min_hours=4, max_hours=6),
    TimeSuggestion("weekend", "6-8 hrs", "Great for a weekend", min_hours=6, max_hours=8),
    TimeSuggestion("marathon", "> 8 hrs", "Settle in for a long ride", min_hours=8),
]}


class UnknownFilterError(KeyError):
    """Raised for a mood or time filter id that does not exist."""


def build_scoring_options(
    config: ScoringConfig,
    community_boost: bool = True,
    exclude_ids: Optional[AbstractSet[str]] = None,
) -> ScoringOptions:
    """Translate the scoring config into per-call engine options."""
    return ScoringOptions(
        community_boost=community_boost,
        exclude_ids=exclude_ids,
        popularity_coefficient=config.popularity_boost,
        quality_coefficient=config.quality_boost,
        quality_baseline=config.quality_baseline,
        quality_min_rating=config.quality_min_rating,
    )


class RecommendationService:
    """Builds recommendation lists for the reader."""

    def __init__(
        self,
        library_store: LibraryStore,
        book_cache: BookCache,
        catalog_client: Optional[OpenLibraryClient] = None,
        scoring_config: Optional[ScoringConfig] = None,
        recommendation_config: Optional[RecommendationConfig] = None,
        catalog_config: Optional[CatalogConfig] = None,
    ):
        """
        Initialize RecommendationService.

        Args:
            library_store: Source of liked books
            book_cache: Candidate pool
            catalog_client: External catalog used to top up a thin pool; None disables fetching
            scoring_config: Boost and diversity constants
            recommendation_config: List sizes and limits
            catalog_config: Fetch limit and retry settings
        """
        self.library_store = library_store
        self.book_cache = book_cache
        self.catalog_client = catalog_client
        self.scoring_config = scoring_config or get_scoring_config()
        self.recommendation_config = recommendation_config or get_recommendation_config()
        self.catalog_config = catalog_config or get_catalog_config()

    # Smart ----------------------------------------------------------------

    def _fetch_more_candidates(self, liked: List[Book]) -> List[Book]:
        """Top up the pool from the external catalog; failures yield []."""
        if self.catalog_client is None:
            return []

        query_key = "smart:" + ",".join(sorted({genre for book in liked for genre in book.genre}))
        if self.book_cache.is_query_cached(query_key):
            logger.debug(f"Skipping catalog fetch, '{query_key}' was fetched recently")
            return []

        try:
            fetched = self.catalog_client.fetch_more_candidates(liked, limit=self.catalog_config.fetch_limit)
        except CatalogError as e:
            logger.warning(f"Catalog fetch failed, using cached candidates only: {e}")
            return []

        self.book_cache.add_books_to_cache(fetched)
        self.book_cache.mark_query_completed(query_key)
        return fetched

    def get_smart_recommendations(
        self,
        count: Optional[int] = None,
        exclude_ids: Optional[AbstractSet[str]] = None,
    ) -> List[ScoredBook]:
        """
        Personalized recommendations, diversified with MMR.

        Args:
            count: Number of books to return
            exclude_ids: Extra ids to leave out besides the liked books

        Returns:
            Up to ``count`` scored books; empty when nothing is liked yet
        """
        count = self.recommendation_config.smart_count if count is None else count
        liked = self.library_store.get_liked_books()
        if not liked:
            return []

        excluded = {book.id for book in liked} | set(exclude_ids or ())
        candidates = [book for book in self.book_cache.get_cached_books() if book.id not in excluded]

        if len(candidates) < 2 * count:
            logger.info(f"Only {len(candidates)} candidates for {count} recommendations, fetching more")
            seen_ids = {book.id for book in candidates}
            for book in self._fetch_more_candidates(liked):
                if book.id not in seen_ids and book.id not in excluded:
                    seen_ids.add(book.id)
                    candidates.append(book)

        options = build_scoring_options(self.scoring_config, community_boost=True, exclude_ids=excluded)
        scored = score_books(candidates, liked, options)
        return apply_mmr(scored, count, self.scoring_config.mmr_lambda)

    # Explore --------------------------------------------------------------

    def get_diverse_recommendations(self, count: Optional[int] = None) -> List[Book]:
        """Books outside the reader's usual taste that are still well rated."""
        count = self.recommendation_config.diverse_count if count is None else count
        liked = self.library_store.get_liked_books()
        liked_ids = {book.id for book in liked}
        candidates = [book for book in self.book_cache.get_cached_books() if book.id not in liked_ids]

        if not liked:
            return sorted(candidates, key=lambda book: book.rating, reverse=True)[:count]

        scored = score_books(candidates, liked, build_scoring_options(self.scoring_config))
        config = self.scoring_config
        pool = [
            item for item in scored
            if item.score < config.diverse_score_threshold and item.book.rating >= config.diverse_min_rating
        ]
        if len(pool) < count:
            pool = sorted(scored, key=lambda item: item.score)[:count]

        balanced = ensure_genre_diversity(pool, config.diverse_min_genres)
        return [item.book for item in balanced[:count]]

    # Filters --------------------------------------------------------------

    def _top_rated(self, books: List[Book]) -> List[Book]:
        return sorted(books, key=lambda book: book.rating, reverse=True)[:self.recommendation_config.filter_limit]

    def get_books_by_mood(self, mood_id: str) -> List[Book]:
        mood = MOOD_FILTERS.get(mood_id)
        if mood is None:
            raise UnknownFilterError(mood_id)

        keywords = {keyword.lower() for keyword in mood.keywords}
        matches = self.book_cache.query_cache(
            lambda book: any(m.lower() in keywords for m in book.mood)
        )
        return self._top_rated(matches)

    def get_books_by_time(self, time_id: str) -> List[Book]:
        suggestion = TIME_SUGGESTIONS.get(time_id)
        if suggestion is None:
            raise UnknownFilterError(time_id)

        def fits(book: Book) -> bool:
            hours = estimate_hours_from_string(book.reading_time)
            if suggestion.min_hours is not None and hours < suggestion.min_hours:
                return False
            if suggestion.max_hours is not None and hours > suggestion.max_hours:
                return False
            return True

        return self._top_rated(self.book_cache.query_cache(fits))
