import argparse
import random
from datetime import timedelta
from pathlib import Path
from typing import Optional, Union

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from config_manager import ConfigManager
from recommendation_service import BookCache, LibraryStore, OpenLibraryClient, setup_logging

from app.library.factory import create_library_module
from app.recommendations.factory import create_recommendations_module

PROJECT_ROOT = Path(__file__).parent.parent


def create_app(
    config_manager: Optional[ConfigManager] = None,
    data_dir: Optional[Union[str, Path]] = None,
    catalog_client: Optional[OpenLibraryClient] = None,
    rng: Optional[random.Random] = None,
) -> Flask:
    """Build the Flask application.

    Args:
        config_manager: Configuration source; a default ConfigManager when omitted
        data_dir: Directory for the library and cache files; overrides the configured one
        catalog_client: External catalog client; built from the catalog config when omitted
        rng: Random source for the daily pick and reading paths
    """
    config_manager = config_manager or ConfigManager()
    paths_config = config_manager.get_paths_config()
    catalog_config = config_manager.get_catalog_config()

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    if data_dir is None:
        data_dir = PROJECT_ROOT / paths_config.data_dir
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)

    library_store = LibraryStore(data_dir / paths_config.library_file)
    book_cache = BookCache(
        data_dir / paths_config.cache_file,
        get_liked_ids=library_store.get_liked_ids,
        max_size=catalog_config.max_cache_size,
        query_ttl=timedelta(hours=catalog_config.query_ttl_hours),
    )

    if catalog_client is None:
        catalog_client = OpenLibraryClient(
            base_url=catalog_config.base_url,
            timeout=catalog_config.timeout,
            max_attempts=catalog_config.max_attempts,
            backoff_seconds=catalog_config.backoff_seconds,
        )

    # -------------------------------------------------------------------------
    # Modules
    # -------------------------------------------------------------------------

    app = Flask(__name__)
    app.wsgi_app = ProxyFix(
            app.wsgi_app,
            x_proto = 1,     # trust 1 hop for X-Forwarded-Proto
            x_host  = 1,     # trust 1 hop for X-Forwarded-Host
            x_prefix= 1)     # trust 1 hop for X-Forwarded-Prefix

    library_module = create_library_module(library_store, book_cache)
    recommendations_module = create_recommendations_module(
        library_store=library_store,
        book_cache=book_cache,
        config_manager=config_manager,
        catalog_client=catalog_client,
        rng=rng,
    )

    app.register_blueprint(library_module["blueprint"])
    app.register_blueprint(recommendations_module["blueprint"])

    app.extensions["recommendations"] = recommendations_module
    app.extensions["library"] = library_module

    @app.get("/actuator/health")
    def actuator_health():
        """Health check endpoint for monitoring tools and cloud platforms."""
        return jsonify({
            "status": "UP",
            "service": "book-recommender"
        }), 200

    return app


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Flask application for book recommendations")
    parser.add_argument("--port", type=int, help="Port to run the server on")
    parser.add_argument("--host", type=str, help="Host to bind the server to")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args()

    config_manager = ConfigManager()
    app_config = config_manager.get_app_config()

    # Override configuration with command line arguments
    if args.port:
        app_config.port = args.port
    if args.host:
        app_config.host = args.host
    if args.debug:
        app_config.debug = args.debug

    setup_logging(debug=app_config.debug)
    app = create_app(config_manager)

    print(f"📋 Configuration loaded:")
    print(f"   - Catalog: {config_manager.get_catalog_config().base_url}")
    print(f"   - Data dir: {config_manager.get_paths_config().data_dir}")
    print(f"   - Server: {app_config.host}:{app_config.port}")
    app.run(
        host=app_config.host,
        port=app_config.port,
        debug=app_config.debug
    )
