"""
Bounded candidate-pool cache.

The cache is the candidate pool for every scored feature. It is seeded from
the bundled sample catalog the first time it is read and grows as books are
fetched from external catalogs. When it exceeds ``max_size`` it keeps every
liked book plus the most recent additions; the liked ids come from an
injected accessor so the cache has no dependency on the library store.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from pydantic import ValidationError

from ..models import Book, BookMetadata

logger = logging.getLogger(__name__)

SAMPLE_BOOKS_FILE = Path(__file__).resolve().parent.parent / "data" / "sample_books.json"
DEFAULT_MAX_CACHE_SIZE = 500
DEFAULT_QUERY_TTL = timedelta(hours=24)


def load_sample_books(path: Path = SAMPLE_BOOKS_FILE) -> List[Book]:
    """Load the bundled sample catalog."""
    with open(path, 'r', encoding='utf-8') as f:
        raw_books = json.load(f)
    return [Book.model_validate(raw) for raw in raw_books]


class BookCache:
    """JSON-file candidate cache with liked-aware eviction."""

    def __init__(
        self,
        cache_file: Path,
        get_liked_ids: Callable[[], Set[str]],
        max_size: int = DEFAULT_MAX_CACHE_SIZE,
        query_ttl: timedelta = DEFAULT_QUERY_TTL,
        seed_books: Optional[Callable[[], List[Book]]] = None,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.cache_file = Path(cache_file)
        self.get_liked_ids = get_liked_ids
        self.max_size = max_size
        self.query_ttl = query_ttl
        self._seed_books = seed_books or load_sample_books
        self._now = now or (lambda: datetime.now(timezone.utc))
        self._lock = Lock()

    # Raw document ---------------------------------------------------------

    def _load(self) -> Optional[Dict[str, Any]]:
        try:
            if self.cache_file.exists():
                with open(self.cache_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading book cache from {self.cache_file}: {e}")
        return None

    def _save(self, data: Dict[str, Any]) -> None:
        self.cache_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.cache_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def _empty_metadata(self) -> Dict[str, Any]:
        return {"last_updated": "", "queries_completed": {}, "total_books": 0}

    @staticmethod
    def _parse_books(raw_books: Iterable[Dict[str, Any]]) -> List[Book]:
        books: List[Book] = []
        for raw in raw_books:
            try:
                books.append(Book.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed cached book: {e}")
        return books

    def _seed(self) -> List[Book]:
        seeded = self._seed_books()
        for book in seeded:
            if book.metadata is None:
                book.metadata = BookMetadata(source="sample")
            else:
                book.metadata.source = "sample"
        self._save({
            "books": [book.to_dict() for book in seeded],
            "metadata": {
                "last_updated": self._now().isoformat(),
                "queries_completed": {},
                "total_books": len(seeded),
            },
        })
        logger.info(f"Seeded book cache with {len(seeded)} sample books")
        return seeded

    # Public API -----------------------------------------------------------

    def get_cached_books(self) -> List[Book]:
        """Return the candidate pool, seeding it on first use."""
        with self._lock:
            data = self._load()
            if data is None:
                return self._seed()
            books = self._parse_books(data.get("books") or [])
            return books if books else self._seed()

    def add_books_to_cache(self, books: List[Book]) -> int:
        """Merge new books by id and evict down to ``max_size``.

        Returns the number of books actually added.
        """
        if not books:
            return 0

        existing = self.get_cached_books()
        with self._lock:
            existing_ids = {book.id for book in existing}
            new_books: List[Book] = []
            for book in books:
                if book.id not in existing_ids:
                    existing_ids.add(book.id)
                    new_books.append(book)
            if not new_books:
                return 0

            merged = existing + new_books
            if len(merged) > self.max_size:
                merged = self._evict(merged)

            data = self._load() or {}
            metadata = data.get("metadata") or self._empty_metadata()
            metadata["last_updated"] = self._now().isoformat()
            metadata["total_books"] = len(merged)
            self._save({"books": [book.to_dict() for book in merged], "metadata": metadata})

        logger.info(f"Added {len(new_books)} books to cache ({len(merged)} total)")
        return len(new_books)

    def _evict(self, merged: List[Book]) -> List[Book]:
        liked_ids = self.get_liked_ids()
        liked = [book for book in merged if book.id in liked_ids]
        rest = [book for book in merged if book.id not in liked_ids]
        keep = max(self.max_size - len(liked), 0)
        evicted = len(rest) - keep
        if evicted > 0:
            logger.info(f"Evicting {evicted} books from cache (max_size={self.max_size})")
        return liked + (rest[-keep:] if keep else [])

    def query_cache(self, predicate: Callable[[Book], bool]) -> List[Book]:
        return [book for book in self.get_cached_books() if predicate(book)]

    def is_query_cached(self, query: str) -> bool:
        """Whether ``query`` was fetched within the TTL window."""
        data = self._load() or {}
        timestamp = (data.get("metadata") or {}).get("queries_completed", {}).get(query)
        if not timestamp:
            return False
        try:
            completed_at = datetime.fromisoformat(timestamp)
        except ValueError:
            return False
        if completed_at.tzinfo is None:
            completed_at = completed_at.replace(tzinfo=timezone.utc)
        return self._now() - completed_at < self.query_ttl

    def mark_query_completed(self, query: str) -> None:
        with self._lock:
            data = self._load()
            if data is None:
                data = {"books": [], "metadata": self._empty_metadata()}
            metadata = data.setdefault("metadata", self._empty_metadata())
            metadata.setdefault("queries_completed", {})[query] = self._now().isoformat()
            self._save(data)

    def clear(self) -> None:
        with self._lock:
            if self.cache_file.exists():
                self.cache_file.unlink()
