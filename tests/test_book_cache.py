"""
Tests for the candidate cache.
"""

import json
from datetime import datetime, timedelta, timezone

from recommendation_service.catalog import BookCache
from conftest import make_book


class TestBookCache:

    def test_seeds_from_sample_catalog(self, book_cache):
        books = book_cache.get_cached_books()

        assert len(books) == 25
        assert all(book.metadata.source == "sample" for book in books)
        assert book_cache.cache_file.exists()

    def test_custom_seed(self, tmp_path):
        cache = BookCache(tmp_path / "cache.json", get_liked_ids=set,
                          seed_books=lambda: [make_book("s1"), make_book("s2")])
        assert [book.id for book in cache.get_cached_books()] == ["s1", "s2"]

    def test_add_books_dedupes_by_id(self, book_cache):
        added = book_cache.add_books_to_cache([make_book("1"), make_book("ol_new"), make_book("ol_new")])

        assert added == 1
        ids = [book.id for book in book_cache.get_cached_books()]
        assert ids.count("ol_new") == 1
        assert len(ids) == 26

    def test_add_nothing(self, book_cache):
        assert book_cache.add_books_to_cache([]) == 0

    def test_eviction_keeps_liked_books_and_newest(self, tmp_path):
        cache = BookCache(tmp_path / "cache.json", get_liked_ids=lambda: {"1"}, max_size=5)
        cache.add_books_to_cache([make_book("ol_new")])

        ids = [book.id for book in cache.get_cached_books()]
        assert ids == ["1", "23", "24", "25", "ol_new"]

    def test_query_cache_filters(self, book_cache):
        matches = book_cache.query_cache(lambda book: "Fantasy" in book.genre)
        assert {book.id for book in matches} == {"6", "10", "15", "23"}

    def test_query_ttl(self, tmp_path):
        clock = {"now": datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)}
        cache = BookCache(tmp_path / "cache.json", get_liked_ids=set, now=lambda: clock["now"])

        assert not cache.is_query_cached("smart:Fantasy")
        cache.mark_query_completed("smart:Fantasy")
        clock["now"] += timedelta(hours=1)
        assert cache.is_query_cached("smart:Fantasy")
        clock["now"] += timedelta(hours=24)
        assert not cache.is_query_cached("smart:Fantasy")

    def test_corrupt_cache_is_reseeded(self, book_cache):
        book_cache.cache_file.write_text("{not json", encoding="utf-8")
        assert len(book_cache.get_cached_books()) == 25

    def test_cache_file_layout(self, book_cache):
        book_cache.add_books_to_cache([make_book("ol_new")])
        data = json.loads(book_cache.cache_file.read_text(encoding="utf-8"))

        assert set(data) == {"books", "metadata"}
        assert data["metadata"]["total_books"] == 26
        assert "publishedYear" in data["books"][0]

    def test_clear(self, book_cache):
        book_cache.get_cached_books()
        book_cache.clear()
        assert not book_cache.cache_file.exists()
