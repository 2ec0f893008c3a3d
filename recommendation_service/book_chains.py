"""
Reading paths ("book chains").

A chain starts from one book and walks through the catalog, each hop chosen
among the books most similar to the previous hop rather than to the start.
"""

import logging
import random
from collections import Counter
from typing import List, Optional, Sequence

from config_manager import RecommendationConfig, ScoringConfig, get_recommendation_config, get_scoring_config

from .catalog import BookCache, LibraryStore
from .models import Book, BookChain
from .recommender import build_scoring_options
from .scoring import score_books

logger = logging.getLogger(__name__)

FALLBACK_THEME = "Books"
MIN_CHAIN_HOPS = 2
LIKED_CHAIN_LENGTH = 3


def get_chain_theme(books: Sequence[Book]) -> str:
    """'{top mood} {top genre}', or the top genre alone when no book has a mood."""
    genre_counts = Counter(genre for book in books for genre in book.genre)
    mood_counts = Counter(mood for book in books for mood in book.mood)

    top_genre = genre_counts.most_common(1)[0][0] if genre_counts else FALLBACK_THEME
    if mood_counts:
        return f"{mood_counts.most_common(1)[0][0]} {top_genre}"
    return top_genre


class BookChainWalker:
    """Builds reading paths from the liked books and the cached pool."""

    def __init__(
        self,
        library_store: LibraryStore,
        book_cache: BookCache,
        rng: Optional[random.Random] = None,
        scoring_config: Optional[ScoringConfig] = None,
        recommendation_config: Optional[RecommendationConfig] = None,
    ):
        self.library_store = library_store
        self.book_cache = book_cache
        self.rng = rng or random.Random()
        self.scoring_config = scoring_config or get_scoring_config()
        self.recommendation_config = recommendation_config or get_recommendation_config()

    def find_book(self, book_id: str) -> Optional[Book]:
        """Look a book up among the liked books, then the cached pool."""
        for book in [*self.library_store.get_liked_books(), *self.book_cache.get_cached_books()]:
            if book.id == book_id:
                return book
        return None

    def _build_pool(self, start_book: Book) -> List[Book]:
        """Liked books then cached books, deduped by id, without the start book."""
        seen_ids = {start_book.id}
        pool: List[Book] = []
        for book in [*self.library_store.get_liked_books(), *self.book_cache.get_cached_books()]:
            if book.id not in seen_ids:
                seen_ids.add(book.id)
                pool.append(book)
        return pool

    def generate_book_chain(self, start_book: Book, chain_length: Optional[int] = None) -> Optional[BookChain]:
        """
        Walk up to ``chain_length`` hops from ``start_book``.

        Returns None when the pool is smaller than ``chain_length`` or fewer
        than two hops could be made.
        """
        if chain_length is None:
            chain_length = self.recommendation_config.chain_length

        pool = self._build_pool(start_book)
        if len(pool) < chain_length:
            return None

        chain: List[Book] = []
        used_ids = {start_book.id}
        current = start_book
        top_n = self.recommendation_config.chain_top_n

        for _ in range(chain_length):
            remaining = [book for book in pool if book.id not in used_ids]
            if not remaining:
                break
            options = build_scoring_options(self.scoring_config, exclude_ids=used_ids)
            scored = score_books(remaining, [current], options)
            if not scored:
                break

            picked = scored[self.rng.randrange(min(top_n, len(scored)))].book
            chain.append(picked)
            used_ids.add(picked.id)
            current = picked

        if len(chain) < MIN_CHAIN_HOPS:
            logger.debug(f"Chain from '{start_book.title}' stopped after {len(chain)} hops")
            return None

        return BookChain(start_book=start_book, chain=chain, theme=get_chain_theme([start_book, *chain]))

    def generate_chains_from_liked(self, count: int = 3) -> List[BookChain]:
        """Short chains starting from randomly chosen liked books."""
        liked = self.library_store.get_liked_books()
        if not liked:
            return []

        starters = self.rng.sample(liked, min(count, len(liked)))
        chains: List[BookChain] = []
        for starter in starters:
            chain = self.generate_book_chain(starter, LIKED_CHAIN_LENGTH)
            if chain is not None:
                chains.append(chain)
        return chains
