"""
Factory for creating the recommendations module.
"""
import random
from typing import Optional

from config_manager import ConfigManager
from recommendation_service import (
    BookCache,
    BookChainWalker,
    DailyPickGenerator,
    LibraryStore,
    OpenLibraryClient,
    RecommendationService,
)
from .routes import create_recommendation_routes


def create_recommendations_module(
    library_store: LibraryStore,
    book_cache: BookCache,
    config_manager: ConfigManager,
    catalog_client: Optional[OpenLibraryClient] = None,
    rng: Optional[random.Random] = None,
) -> dict:
    """
    Create the recommendations module with all its components.

    Args:
        library_store: Liked books and daily pick storage
        book_cache: Candidate pool
        config_manager: Source of scoring and recommendation settings
        catalog_client: External catalog used to top up the pool
        rng: Random source shared by the daily pick and chain walker

    Returns:
        Dictionary containing:
            - service: RecommendationService instance
            - daily_pick: DailyPickGenerator instance
            - chains: BookChainWalker instance
            - blueprint: Flask blueprint for routes
    """
    scoring_config = config_manager.get_scoring_config()
    recommendation_config = config_manager.get_recommendation_config()
    rng = rng or random.Random()

    service = RecommendationService(
        library_store,
        book_cache,
        catalog_client=catalog_client,
        scoring_config=scoring_config,
        recommendation_config=recommendation_config,
        catalog_config=config_manager.get_catalog_config(),
    )
    daily_pick = DailyPickGenerator(
        library_store,
        book_cache,
        rng=rng,
        scoring_config=scoring_config,
        recommendation_config=recommendation_config,
    )
    chains = BookChainWalker(
        library_store,
        book_cache,
        rng=rng,
        scoring_config=scoring_config,
        recommendation_config=recommendation_config,
    )
    blueprint = create_recommendation_routes(service, daily_pick, chains)

    return {
        "service": service,
        "daily_pick": daily_pick,
        "chains": chains,
        "blueprint": blueprint
    }
