"""
Tests for the daily pick generator.
"""

import random
from datetime import date

import pytest

from recommendation_service import DailyPickGenerator


@pytest.fixture
def liked_three(library_store, sample_books):
    for book in sample_books[:3]:
        library_store.add_liked_book(book)
    return sample_books[:3]


def _generator(library_store, book_cache, config_manager, today, seed=0):
    return DailyPickGenerator(
        library_store,
        book_cache,
        rng=random.Random(seed),
        today=today,
        scoring_config=config_manager.get_scoring_config(),
        recommendation_config=config_manager.get_recommendation_config(),
    )


def test_requires_three_liked_books(library_store, book_cache, config_manager, fixed_today, sample_books):
    library_store.add_liked_book(sample_books[0])
    library_store.add_liked_book(sample_books[1])

    generator = _generator(library_store, book_cache, config_manager, fixed_today)
    assert generator.generate_daily_pick() is None
    assert library_store.get_daily_pick() is None


def test_generates_and_persists_pick(library_store, book_cache, config_manager, fixed_today, liked_three):
    generator = _generator(library_store, book_cache, config_manager, fixed_today)
    pick = generator.generate_daily_pick()

    assert pick is not None
    assert pick.date == "2026-10-18"
    assert not pick.dismissed and not pick.saved
    assert pick.book.id not in {book.id for book in liked_three}
    assert 1 <= len(pick.reasons) <= 3
    assert library_store.get_daily_pick().book.id == pick.book.id


def test_same_day_is_idempotent(library_store, book_cache, config_manager, fixed_today, liked_three):
    first = _generator(library_store, book_cache, config_manager, fixed_today, seed=1).generate_daily_pick()

    for seed in range(2, 8):
        again = _generator(library_store, book_cache, config_manager, fixed_today, seed=seed).generate_daily_pick()
        assert again == first
        assert again.to_dict() == first.to_dict()


def test_regenerates_on_a_new_day(library_store, book_cache, config_manager, fixed_today, liked_three):
    _generator(library_store, book_cache, config_manager, fixed_today).generate_daily_pick()

    tomorrow = _generator(library_store, book_cache, config_manager, lambda: date(2026, 10, 19))
    pick = tomorrow.generate_daily_pick()
    assert pick.date == "2026-10-19"
    assert library_store.get_daily_pick().date == "2026-10-19"


def test_dismissed_pick_is_regenerated(library_store, book_cache, config_manager, fixed_today, liked_three):
    generator = _generator(library_store, book_cache, config_manager, fixed_today)
    generator.generate_daily_pick()

    dismissed = generator.dismiss()
    assert dismissed.dismissed
    assert library_store.get_daily_pick().dismissed

    fresh = generator.generate_daily_pick()
    assert not fresh.dismissed
    assert fresh.date == "2026-10-18"


def test_pick_comes_from_top_three_of_shortlist(library_store, book_cache, config_manager, fixed_today, liked_three):
    picks = set()
    for seed in range(20):
        generator = _generator(library_store, book_cache, config_manager, fixed_today, seed=seed)
        pick = generator.generate_daily_pick()
        picks.add(pick.book.id)
        generator.dismiss()

    assert 1 <= len(picks) <= 3


def test_save_to_library_marks_pick(library_store, book_cache, config_manager, fixed_today, liked_three):
    generator = _generator(library_store, book_cache, config_manager, fixed_today)
    assert generator.save_to_library() is None

    generator.generate_daily_pick()
    saved = generator.save_to_library()
    assert saved.saved
    assert library_store.get_daily_pick().saved
