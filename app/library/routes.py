"""
Library routes for managing liked books.
"""
from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from recommendation_service import Book, BookCache, LibraryStore


def create_library_routes(library_store: LibraryStore, book_cache: BookCache) -> Blueprint:
    """Create library routes blueprint."""
    bp = Blueprint('library', __name__, url_prefix='/api/library')

    @bp.route('/liked', methods=['GET'])
    def list_liked():
        books = library_store.get_liked_books()
        return jsonify({"books": [book.to_dict() for book in books], "count": len(books)})

    @bp.route('/liked', methods=['POST'])
    def add_liked():
        """
        Like a book.

        Body: a full book object, or {"id": ...} for a book already in the cache.
        """
        payload = request.get_json(silent=True)
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        book_id = payload.get("id")
        if not book_id:
            return jsonify({"error": "Book id is required"}), 400

        if payload.get("title"):
            try:
                book = Book.model_validate(payload)
            except ValidationError as e:
                return jsonify({"error": "Invalid book", "details": e.errors(include_url=False)}), 400
        else:
            matches = book_cache.query_cache(lambda candidate: candidate.id == book_id)
            if not matches:
                return jsonify({"error": f"Unknown book: {book_id}"}), 404
            book = matches[0]

        added = library_store.add_liked_book(book)
        return jsonify({"status": "ok", "added": added, "book": book.to_dict()}), 201 if added else 200

    @bp.route('/liked/<book_id>', methods=['DELETE'])
    def remove_liked(book_id):
        if not library_store.remove_liked_book(book_id):
            return jsonify({"error": f"Book not in library: {book_id}"}), 404
        return jsonify({"status": "ok", "removed": book_id})

    return bp
