# Recommendation service package for personalized book discovery

from .models import (
    Book,
    BookMetadata,
    ReasonType,
    RecommendationReason,
    DailyPick,
    BookChain,
)
from .scoring import (
    ScoredBook,
    ScoringOptions,
    score_books,
    apply_mmr,
    ensure_genre_diversity,
    build_feature_string,
    build_user_profile,
)
from .catalog import (
    BookCache,
    LibraryStore,
    OpenLibraryClient,
    CatalogError,
)
from .recommender import (
    RecommendationService,
    UnknownFilterError,
    MOOD_FILTERS,
    TIME_SUGGESTIONS,
)
from .daily_pick import DailyPickGenerator
from .book_chains import BookChainWalker, get_chain_theme
from .logging_config import (
    setup_logging,
    stop_logging,
    get_logger,
    ThreadSafeLoggingConfig,
)

__all__ = [
    "Book",
    "BookMetadata",
    "ReasonType",
    "RecommendationReason",
    "DailyPick",
    "BookChain",
    "ScoredBook",
    "ScoringOptions",
    "score_books",
    "apply_mmr",
    "ensure_genre_diversity",
    "build_feature_string",
    "build_user_profile",
    "BookCache",
    "LibraryStore",
    "OpenLibraryClient",
    "CatalogError",
    "RecommendationService",
    "UnknownFilterError",
    "MOOD_FILTERS",
    "TIME_SUGGESTIONS",
    "DailyPickGenerator",
    "BookChainWalker",
    "get_chain_theme",
    "setup_logging",
    "stop_logging",
    "get_logger",
    "ThreadSafeLoggingConfig",
]
