"""
Recommendation routes for API endpoints.
"""
from flask import Blueprint, jsonify, request

from recommendation_service import (
    BookChainWalker,
    DailyPickGenerator,
    MOOD_FILTERS,
    TIME_SUGGESTIONS,
    RecommendationService,
    UnknownFilterError,
)

MAX_COUNT = 50
MAX_CHAIN_LENGTH = 10


def _int_arg(name: str, default: int, upper: int) -> int:
    """Read a positive integer query parameter, clamped to ``upper``."""
    try:
        value = int(request.args.get(name, default))
    except ValueError:
        value = default
    return max(1, min(value, upper))


def create_recommendation_routes(
    recommendation_service: RecommendationService,
    daily_pick_generator: DailyPickGenerator,
    chain_walker: BookChainWalker,
) -> Blueprint:
    """Create recommendations routes blueprint."""
    bp = Blueprint('recommendations', __name__, url_prefix='/api/recommendations')

    @bp.route('/smart', methods=['GET'])
    def get_smart():
        """
        Personalized recommendations.

        Query parameters:
            - count: Number of books (default from config, max 50)
        """
        count = _int_arg('count', recommendation_service.recommendation_config.smart_count, MAX_COUNT)
        results = recommendation_service.get_smart_recommendations(count=count)
        return jsonify({
            "recommendations": [item.to_dict() for item in results],
            "count": len(results)
        })

    @bp.route('/diverse', methods=['GET'])
    def get_diverse():
        """Books outside the reader's usual genres."""
        count = _int_arg('count', recommendation_service.recommendation_config.diverse_count, MAX_COUNT)
        books = recommendation_service.get_diverse_recommendations(count=count)
        return jsonify({
            "books": [book.to_dict() for book in books],
            "count": len(books)
        })

    @bp.route('/filters', methods=['GET'])
    def get_filters():
        """Available mood filters and time suggestions."""
        return jsonify({
            "moods": [
                {"id": mood.id, "name": mood.name, "description": mood.description}
                for mood in MOOD_FILTERS.values()
            ],
            "times": [
                {"id": time.id, "name": time.name, "description": time.description}
                for time in TIME_SUGGESTIONS.values()
            ]
        })

    @bp.route('/mood/<mood_id>', methods=['GET'])
    def get_by_mood(mood_id):
        try:
            books = recommendation_service.get_books_by_mood(mood_id)
        except UnknownFilterError:
            return jsonify({"error": f"Unknown mood: {mood_id}"}), 404
        return jsonify({"mood": mood_id, "books": [book.to_dict() for book in books], "count": len(books)})

    @bp.route('/time/<time_id>', methods=['GET'])
    def get_by_time(time_id):
        try:
            books = recommendation_service.get_books_by_time(time_id)
        except UnknownFilterError:
            return jsonify({"error": f"Unknown time suggestion: {time_id}"}), 404
        return jsonify({"time": time_id, "books": [book.to_dict() for book in books], "count": len(books)})

    @bp.route('/daily-pick', methods=['GET'])
    def get_daily_pick():
        """Today's pick, or null when fewer than three books are liked."""
        pick = daily_pick_generator.generate_daily_pick()
        return jsonify({"pick": pick.to_dict() if pick else None})

    @bp.route('/daily-pick/dismiss', methods=['POST'])
    def dismiss_daily_pick():
        pick = daily_pick_generator.dismiss()
        if pick is None:
            return jsonify({"error": "No daily pick to dismiss"}), 404
        return jsonify({"status": "ok", "pick": pick.to_dict()})

    @bp.route('/daily-pick/save', methods=['POST'])
    def save_daily_pick():
        pick = daily_pick_generator.save_to_library()
        if pick is None:
            return jsonify({"error": "No daily pick to save"}), 404
        return jsonify({"status": "ok", "pick": pick.to_dict()})

    @bp.route('/chain/<book_id>', methods=['GET'])
    def get_chain(book_id):
        """
        Reading path starting at a book.

        Query parameters:
            - length: Number of hops (default from config, max 10)
        """
        start_book = chain_walker.find_book(book_id)
        if start_book is None:
            return jsonify({"error": f"Unknown book: {book_id}"}), 404

        length = _int_arg('length', chain_walker.recommendation_config.chain_length, MAX_CHAIN_LENGTH)
        chain = chain_walker.generate_book_chain(start_book, chain_length=length)
        return jsonify({"chain": chain.to_dict() if chain else None})

    @bp.route('/chains', methods=['GET'])
    def get_chains():
        """Reading paths starting from random liked books."""
        count = _int_arg('count', 3, MAX_CHAIN_LENGTH)
        chains = chain_walker.generate_chains_from_liked(count=count)
        return jsonify({
            "chains": [chain.to_dict() for chain in chains],
            "count": len(chains)
        })

    return bp
