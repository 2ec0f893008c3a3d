"""
Factory for creating the library module.
"""
from recommendation_service import BookCache, LibraryStore
from .routes import create_library_routes


def create_library_module(library_store: LibraryStore, book_cache: BookCache) -> dict:
    """
    Create the library module with all its components.

    Returns:
        Dictionary containing:
            - service: LibraryStore instance
            - blueprint: Flask blueprint for routes
    """
    blueprint = create_library_routes(library_store, book_cache)

    return {
        "service": library_store,
        "blueprint": blueprint
    }
