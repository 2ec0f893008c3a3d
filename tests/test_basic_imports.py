"""
Basic import tests to verify the core functionality.
"""


def test_scoring_imports():
    """Test that the scoring primitives can be imported."""
    from recommendation_service.scoring import (
        score_books,
        apply_mmr,
        ensure_genre_diversity,
        build_feature_string,
        build_user_profile,
    )

    assert callable(score_books)
    assert callable(apply_mmr)
    assert callable(ensure_genre_diversity)
    assert callable(build_feature_string)
    assert callable(build_user_profile)


def test_models_can_be_instantiated():
    """Test that models accept the camelCase wire names."""
    from recommendation_service.models import Book, BookMetadata

    book = Book.model_validate({
        "id": "1",
        "title": "Dune",
        "author": "Frank Herbert",
        "genre": None,
        "publishedYear": 1965,
        "readingTime": "12-15 hours",
        "metadata": {"readinglogCount": 42, "subjects": None},
    })
    assert book.genre == []
    assert book.published_year == 1965
    assert book.readinglog_count == 42
    assert book.subjects == []
    assert book.to_dict()["readingTime"] == "12-15 hours"
    assert BookMetadata().source == "sample"


def test_service_imports():
    """Test that services and the app factory can be imported."""
    from recommendation_service import (
        RecommendationService,
        DailyPickGenerator,
        BookChainWalker,
        setup_logging,
        stop_logging,
    )
    from app.main import create_app

    assert callable(create_app)
    assert callable(setup_logging)
    assert callable(stop_logging)
    assert RecommendationService and DailyPickGenerator and BookChainWalker
