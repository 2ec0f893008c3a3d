"""
Catalog package: candidate cache, reader library and external catalog client.
"""

from .book_cache import BookCache, load_sample_books
from .library_store import LibraryStore
from .openlibrary_client import (
    CatalogError,
    OpenLibraryClient,
    transform_doc,
)

__all__ = [
    "BookCache",
    "load_sample_books",
    "LibraryStore",
    "CatalogError",
    "OpenLibraryClient",
    "transform_doc",
]
