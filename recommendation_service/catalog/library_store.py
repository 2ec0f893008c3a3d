"""
File-backed store for the reader's library.

Holds the liked-books list (oldest like first) and the single persisted
``DailyPick`` record in one JSON document. Reads that hit a missing or corrupt
file fall back to empty defaults.
"""

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional, Set

from pydantic import ValidationError

from ..models import Book, DailyPick

logger = logging.getLogger(__name__)


class LibraryStore:
    """Persists liked books and the daily pick for a single reader."""

    def __init__(self, library_file: Path):
        self.library_file = Path(library_file)
        self._lock = Lock()

    # Raw document ---------------------------------------------------------

    def _load(self) -> Dict[str, Any]:
        try:
            if self.library_file.exists():
                with open(self.library_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading library data from {self.library_file}: {e}")
        return {"liked_books": [], "daily_pick": None}

    def _save(self, data: Dict[str, Any]) -> None:
        self.library_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.library_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    # Liked books ----------------------------------------------------------

    def get_liked_books(self) -> List[Book]:
        """Liked books, oldest like first. Malformed entries are skipped."""
        books: List[Book] = []
        for raw in self._load().get("liked_books") or []:
            try:
                books.append(Book.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed liked book entry: {e}")
        return books

    def get_liked_ids(self) -> Set[str]:
        return {book.id for book in self.get_liked_books()}

    def save_liked_books(self, books: List[Book]) -> None:
        with self._lock:
            data = self._load()
            data["liked_books"] = [book.to_dict() for book in books]
            self._save(data)

    def add_liked_book(self, book: Book) -> bool:
        """Append a like; returns False when the book was already liked."""
        with self._lock:
            data = self._load()
            liked = data.get("liked_books") or []
            if any(entry.get("id") == book.id for entry in liked):
                return False
            liked.append(book.to_dict())
            data["liked_books"] = liked
            self._save(data)
        return True

    def remove_liked_book(self, book_id: str) -> bool:
        with self._lock:
            data = self._load()
            liked = data.get("liked_books") or []
            kept = [entry for entry in liked if entry.get("id") != book_id]
            if len(kept) == len(liked):
                return False
            data["liked_books"] = kept
            self._save(data)
        return True

    # Daily pick -----------------------------------------------------------

    def get_daily_pick(self) -> Optional[DailyPick]:
        raw = self._load().get("daily_pick")
        if not raw:
            return None
        try:
            return DailyPick.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed daily pick record: {e}")
            return None

    def save_daily_pick(self, pick: DailyPick) -> None:
        """Overwrite the stored daily pick."""
        with self._lock:
            data = self._load()
            data["daily_pick"] = pick.to_dict()
            self._save(data)

    def clear(self) -> None:
        with self._lock:
            self._save({"liked_books": [], "daily_pick": None})
