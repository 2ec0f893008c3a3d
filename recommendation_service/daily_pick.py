"""
Daily pick: one recommended book per calendar day.

The pick is persisted in the library store and reused for the rest of the day
unless the reader dismisses it. Two concurrent first requests may both
generate a pick; the last write wins.
"""

import logging
import random
from datetime import date
from typing import Callable, Optional

from config_manager import RecommendationConfig, ScoringConfig, get_recommendation_config, get_scoring_config

from .catalog import BookCache, LibraryStore
from .models import DailyPick
from .recommender import build_scoring_options
from .scoring import apply_mmr, score_books

logger = logging.getLogger(__name__)


class DailyPickGenerator:
    """Generates and updates the persisted daily pick."""

    def __init__(
        self,
        library_store: LibraryStore,
        book_cache: BookCache,
        rng: Optional[random.Random] = None,
        today: Callable[[], date] = date.today,
        scoring_config: Optional[ScoringConfig] = None,
        recommendation_config: Optional[RecommendationConfig] = None,
    ):
        self.library_store = library_store
        self.book_cache = book_cache
        self.rng = rng or random.Random()
        self._today = today
        self.scoring_config = scoring_config or get_scoring_config()
        self.recommendation_config = recommendation_config or get_recommendation_config()

    def today_string(self) -> str:
        return self._today().strftime("%Y-%m-%d")

    def generate_daily_pick(self) -> Optional[DailyPick]:
        """
        Return today's pick, generating a new one when needed.

        An existing, undismissed pick for today is returned unchanged. Returns
        None when the reader has liked fewer books than required or when no
        candidate can be scored.
        """
        today = self.today_string()
        existing = self.library_store.get_daily_pick()
        if existing and existing.date == today and not existing.dismissed:
            return existing

        config = self.recommendation_config
        liked = self.library_store.get_liked_books()
        if len(liked) < config.daily_pick_min_liked:
            logger.debug(f"Not enough liked books for a daily pick ({len(liked)}/{config.daily_pick_min_liked})")
            return None

        liked_ids = {book.id for book in liked}
        candidates = [book for book in self.book_cache.get_cached_books() if book.id not in liked_ids]
        if not candidates:
            return None

        options = build_scoring_options(self.scoring_config, community_boost=True, exclude_ids=liked_ids)
        scored = score_books(candidates, liked, options)
        shortlist = apply_mmr(scored, config.daily_pick_pool_size, self.scoring_config.mmr_lambda)
        if not shortlist:
            return None

        top_n = min(config.daily_pick_top_n, len(shortlist))
        picked = shortlist[self.rng.randrange(top_n)]

        pick = DailyPick(book=picked.book, reasons=picked.reasons, date=today)
        self.library_store.save_daily_pick(pick)
        logger.info(f"Generated daily pick for {today}: {picked.book.title}")
        return pick

    def dismiss(self) -> Optional[DailyPick]:
        """Mark the stored pick dismissed so the next request regenerates it."""
        pick = self.library_store.get_daily_pick()
        if pick is None:
            return None
        pick.dismissed = True
        self.library_store.save_daily_pick(pick)
        return pick

    def save_to_library(self) -> Optional[DailyPick]:
        pick = self.library_store.get_daily_pick()
        if pick is None:
            return None
        pick.saved = True
        self.library_store.save_daily_pick(pick)
        return pick
