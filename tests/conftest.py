import random
from datetime import date

import pytest

from config_manager import ConfigManager
from recommendation_service import BookCache, LibraryStore
from recommendation_service.catalog import load_sample_books
from recommendation_service.models import Book, BookMetadata


def make_book(book_id, title="", author="", genre=None, mood=None, description="",
              rating=3.0, reading_time="", readers=None, subjects=None):
    metadata = None
    if readers is not None or subjects is not None:
        metadata = BookMetadata(readinglog_count=readers, subjects=subjects or [])
    return Book(
        id=book_id,
        title=title,
        author=author,
        genre=genre or [],
        mood=mood or [],
        description=description,
        rating=rating,
        reading_time=reading_time,
        metadata=metadata,
    )


@pytest.fixture
def book_factory():
    return make_book


@pytest.fixture
def sample_books():
    return load_sample_books()


@pytest.fixture
def config_manager(tmp_path, monkeypatch):
    for name in ("POPULARITY_BOOST", "QUALITY_BOOST", "MMR_LAMBDA", "DIVERSE_SCORE_THRESHOLD",
                 "OPENLIBRARY_BASE_URL", "CATALOG_TIMEOUT", "CATALOG_MAX_ATTEMPTS",
                 "MAX_CACHE_SIZE", "APP_HOST", "APP_PORT", "APP_DEBUG", "DATA_DIR"):
        monkeypatch.delenv(name, raising=False)
    return ConfigManager(config_file=str(tmp_path / "recommender_config.json"))


@pytest.fixture
def library_store(tmp_path):
    return LibraryStore(tmp_path / "library.json")


@pytest.fixture
def book_cache(tmp_path, library_store):
    return BookCache(tmp_path / "book_cache.json", get_liked_ids=library_store.get_liked_ids)


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def fixed_today():
    return lambda: date(2026, 10, 18)
