"""
Tests for the liked-books and daily pick store.
"""

from recommendation_service.models import DailyPick, ReasonType, RecommendationReason
from conftest import make_book


def test_empty_store_defaults(library_store):
    assert library_store.get_liked_books() == []
    assert library_store.get_daily_pick() is None


def test_add_and_remove_liked_books(library_store):
    assert library_store.add_liked_book(make_book("1", title="Dune"))
    assert library_store.add_liked_book(make_book("2", title="Circe"))
    assert not library_store.add_liked_book(make_book("1", title="Dune"))

    assert [book.id for book in library_store.get_liked_books()] == ["1", "2"]
    assert library_store.get_liked_ids() == {"1", "2"}

    assert library_store.remove_liked_book("1")
    assert not library_store.remove_liked_book("1")
    assert library_store.get_liked_ids() == {"2"}


def test_corrupt_file_falls_back_to_defaults(library_store):
    library_store.library_file.write_text("[broken", encoding="utf-8")
    assert library_store.get_liked_books() == []
    assert library_store.add_liked_book(make_book("1"))
    assert library_store.get_liked_ids() == {"1"}


def test_daily_pick_is_persisted_with_flat_shape(library_store):
    pick = DailyPick(
        book=make_book("7", title="Atomic Habits"),
        reasons=[RecommendationReason(type=ReasonType.RATING, description="Highly rated (4.4/5)")],
        date="2026-10-18",
    )
    library_store.save_daily_pick(pick)

    stored = library_store.get_daily_pick()
    assert stored.book.id == "7"
    assert stored.reasons[0].type == ReasonType.RATING
    assert stored.date == "2026-10-18"
    assert not stored.dismissed
    assert not stored.saved


def test_clear(library_store):
    library_store.add_liked_book(make_book("1"))
    library_store.clear()
    assert library_store.get_liked_books() == []


def test_save_liked_books_replaces_list(library_store):
    library_store.add_liked_book(make_book("1"))
    library_store.save_liked_books([make_book("3"), make_book("2")])
    assert [book.id for book in library_store.get_liked_books()] == ["3", "2"]
