"""
Open Library catalog client.

Fetches additional candidate books by subject and maps Open Library search
documents onto ``Book`` records. Requests are retried with exponential
backoff; once the attempts are exhausted a ``CatalogError`` is raised and the
caller decides how to degrade.
"""

import logging
import time
from collections import Counter
from typing import Any, Callable, Dict, Iterable, List, Optional

import requests

from ..models import Book, BookMetadata
from ..reading_time import estimate_reading_time

logger = logging.getLogger(__name__)

SEARCH_FIELDS = [
    "key",
    "title",
    "author_name",
    "subject",
    "cover_i",
    "ratings_average",
    "readinglog_count",
    "want_to_read_count",
    "ratings_count",
    "number_of_pages_median",
    "first_publish_year",
]

SUBJECT_TO_GENRE = {
    "fantasy": "Fantasy",
    "science fiction": "Science Fiction",
    "sci-fi": "Science Fiction",
    "mystery": "Mystery",
    "detective": "Mystery",
    "romance": "Romance",
    "love stories": "Romance",
    "thriller": "Thriller",
    "thrillers": "Thriller",
    "suspense": "Thriller",
    "crime": "Thriller",
    "historical fiction": "Historical Fiction",
    "biography": "Biography",
    "autobiographies": "Biography",
    "memoir": "Biography",
    "self-help": "Self-Help",
    "personal development": "Self-Help",
    "philosophy": "Philosophy",
    "horror": "Horror",
    "humor": "Comedy",
    "humour": "Comedy",
    "satire": "Comedy",
    "young adult": "Young Adult",
    "poetry": "Poetry",
    "adventure": "Adventure",
    "classics": "Classics",
    "dystopian": "Science Fiction",
    "literary fiction": "Contemporary Fiction",
    "contemporary": "Contemporary Fiction",
    "lgbtq": "LGBTQ+",
    "queer": "LGBTQ+",
}

SUBJECT_TO_MOOD = {
    "fantasy": ["Magical", "Epic"],
    "science fiction": ["Thought-provoking", "Epic"],
    "mystery": ["Suspenseful", "Clever"],
    "romance": ["Romantic", "Emotional"],
    "thriller": ["Suspenseful", "Dark"],
    "horror": ["Dark", "Thrilling"],
    "biography": ["Inspiring", "Educational"],
    "self-help": ["Motivational", "Practical"],
    "philosophy": ["Philosophical", "Thought-provoking"],
    "humor": ["Light-hearted", "Funny"],
    "poetry": ["Beautiful", "Contemplative"],
    "adventure": ["Epic", "Thrilling"],
    "historical fiction": ["Immersive", "Engaging"],
    "dystopian": ["Dark", "Thought-provoking"],
    "coming of age": ["Emotional", "Inspiring"],
    "love stories": ["Romantic", "Heartwarming"],
    "suspense": ["Suspenseful", "Gripping"],
    "war": ["Powerful", "Dark"],
    "magic": ["Magical", "Escapist"],
    "friendship": ["Heartwarming", "Emotional"],
}

GENRE_TO_SUBJECT = {
    "Science Fiction": "science fiction",
    "Historical Fiction": "historical fiction",
    "Contemporary Fiction": "literary fiction",
    "Self-Help": "self-help",
    "Comedy": "humor",
    "Young Adult": "young adult",
    "LGBTQ+": "lgbtq",
}

MAX_GENRES = 4
MAX_MOODS = 3
MAX_SUBJECTS = 20
DEFAULT_PAGES = 250
PLACEHOLDER_DESCRIPTION = "Discover this book on your reading journey."


class CatalogError(Exception):
    """Raised when the external catalog cannot be reached."""


def map_subjects_to_genres(subjects: Iterable[str]) -> List[str]:
    genres: List[str] = []
    for subject in subjects:
        lower = subject.lower()
        for key, genre in SUBJECT_TO_GENRE.items():
            if key in lower:
                if genre not in genres:
                    genres.append(genre)
                break
    return genres[:MAX_GENRES]


def map_subjects_to_moods(subjects: Iterable[str]) -> List[str]:
    moods: List[str] = []
    for subject in subjects:
        lower = subject.lower()
        for key, mood_list in SUBJECT_TO_MOOD.items():
            if key in lower:
                for mood in mood_list:
                    if mood not in moods:
                        moods.append(mood)
    return moods[:MAX_MOODS]


def transform_doc(doc: Dict[str, Any], searched_subject: str) -> Optional[Book]:
    """Map an Open Library search document to a ``Book``.

    Documents without a title, author or cover are skipped, as are poorly
    rated books with more than ten ratings.
    """
    authors = doc.get("author_name") or []
    if not doc.get("title") or not authors or not doc.get("cover_i"):
        return None

    subjects = doc.get("subject") or []
    pages = doc.get("number_of_pages_median") or DEFAULT_PAGES

    genres = map_subjects_to_genres(subjects)
    if not genres:
        genres = [SUBJECT_TO_GENRE.get(searched_subject.lower(), "General")]

    moods = map_subjects_to_moods(subjects) or ["Interesting"]

    rating = round(doc["ratings_average"], 1) if doc.get("ratings_average") else 0.0
    ratings_count = doc.get("ratings_count")
    if rating < 2.5 and ratings_count and ratings_count > 10:
        return None

    return Book(
        id=f"ol_{doc.get('key', '').replace('/works/', '')}",
        title=doc["title"],
        author=authors[0],
        cover=f"https://covers.openlibrary.org/b/id/{doc['cover_i']}-L.jpg",
        rating=rating,
        pages=pages,
        genre=genres,
        mood=moods,
        description=PLACEHOLDER_DESCRIPTION,
        published_year=doc.get("first_publish_year"),
        reading_time=estimate_reading_time(pages),
        metadata=BookMetadata(
            subjects=subjects[:MAX_SUBJECTS],
            readinglog_count=doc.get("readinglog_count"),
            want_to_read_count=doc.get("want_to_read_count"),
            ratings_count=ratings_count,
            source="openlibrary",
        ),
    )


class OpenLibraryClient:
    """Search client for openlibrary.org."""

    def __init__(
        self,
        base_url: str = "https://openlibrary.org",
        timeout: int = 10,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the client.

        Args:
            base_url: Open Library root URL
            timeout: Request timeout in seconds
            max_attempts: Attempts per request before giving up
            backoff_seconds: First retry delay; doubles after each failure
            session: Optional pre-configured requests session
            sleep: Sleep function, replaceable in tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.backoff_seconds = backoff_seconds
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "book-recommender/0.1 (+https://openlibrary.org/developers/api)"})
        self._sleep = sleep

    def _get_json(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET a JSON document with retry and exponential backoff."""
        url = f"{self.base_url}{path}"
        last_error: Optional[Exception] = None

        for attempt in range(self.max_attempts):
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)
                response.raise_for_status()
                return response.json()
            except (requests.RequestException, ValueError) as e:
                last_error = e
                if attempt == self.max_attempts - 1:
                    break
                delay = self.backoff_seconds * (2 ** attempt)
                logger.warning(f"Attempt {attempt + 1} failed for {url}, retrying in {delay:.0f}s...")
                self._sleep(delay)

        logger.error(f"Failed to fetch {url} after {self.max_attempts} attempts: {last_error}")
        raise CatalogError(f"Open Library request failed: {last_error}")

    def search_subject(self, subject: str, limit: int = 20) -> List[Book]:
        """Search books by subject, best rated first."""
        data = self._get_json("/search.json", {
            "subject": subject,
            "fields": ",".join(SEARCH_FIELDS),
            "limit": limit,
            "sort": "rating",
        })
        books: List[Book] = []
        for doc in data.get("docs") or []:
            book = transform_doc(doc, subject)
            if book is not None:
                books.append(book)
        return books

    def fetch_more_candidates(self, seed_books: List[Book], limit: int = 20, max_subjects: int = 3) -> List[Book]:
        """Fetch candidates for the seed books' most frequent genres.

        Raises ``CatalogError`` only when every subject search fails.
        """
        genre_counts = Counter(genre for book in seed_books for genre in book.genre)
        subjects = [
            GENRE_TO_SUBJECT.get(genre, genre.lower())
            for genre, _ in genre_counts.most_common(max_subjects)
        ] or ["fiction"]

        seen_ids = set()
        results: List[Book] = []
        failures = 0
        per_subject = max(1, limit // len(subjects))
        for subject in subjects:
            try:
                books = self.search_subject(subject, per_subject)
            except CatalogError:
                failures += 1
                continue
            for book in books:
                if book.id not in seen_ids:
                    seen_ids.add(book.id)
                    results.append(book)

        if failures == len(subjects):
            raise CatalogError("All catalog subject searches failed")

        logger.info(f"Fetched {len(results)} candidates for subjects {subjects}")
        return results[:limit]
