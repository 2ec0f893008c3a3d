"""
Configuration management for the book recommendation service.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class ScoringConfig:
    """Tunable scoring heuristics."""
    popularity_boost: float
    quality_boost: float
    quality_baseline: float
    quality_min_rating: float
    mmr_lambda: float
    diverse_score_threshold: float
    diverse_min_rating: float
    diverse_min_genres: int


@dataclass
class RecommendationConfig:
    """Recommendation feature settings."""
    smart_count: int
    diverse_count: int
    filter_limit: int
    daily_pick_min_liked: int
    daily_pick_pool_size: int
    daily_pick_top_n: int
    chain_length: int
    chain_top_n: int


@dataclass
class CatalogConfig:
    """External catalog and candidate cache settings."""
    base_url: str
    timeout: int
    max_attempts: int
    backoff_seconds: float
    fetch_limit: int
    max_cache_size: int
    query_ttl_hours: int


@dataclass
class AppConfig:
    """Application configuration settings."""
    host: str
    port: int
    debug: bool


@dataclass
class PathsConfig:
    """Path configuration settings."""
    data_dir: str
    library_file: str
    cache_file: str


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "recommender_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "scoring": {
                "popularity_boost": 0.03,
                "quality_boost": 0.05,
                "quality_baseline": 3.5,
                "quality_min_rating": 4.0,
                "mmr_lambda": 0.7,
                "diverse_score_threshold": 0.3,
                "diverse_min_rating": 3.5,
                "diverse_min_genres": 3
            },
            "recommendations": {
                "smart_count": 8,
                "diverse_count": 6,
                "filter_limit": 20,
                "daily_pick_min_liked": 3,
                "daily_pick_pool_size": 5,
                "daily_pick_top_n": 3,
                "chain_length": 4,
                "chain_top_n": 5
            },
            "catalog": {
                "base_url": "https://openlibrary.org",
                "timeout": 10,
                "max_attempts": 3,
                "backoff_seconds": 1.0,
                "fetch_limit": 20,
                "max_cache_size": 500,
                "query_ttl_hours": 24
            },
            "app": {
                "host": "0.0.0.0",
                "port": 5080,
                "debug": False
            },
            "paths": {
                "data_dir": "data",
                "library_file": "library.json",
                "cache_file": "book_cache.json"
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config:
                if isinstance(values, dict):
                    self._config[section].update(values)
                else:
                    self._config[section] = values
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # Scoring settings
        if os.getenv("POPULARITY_BOOST"):
            self._config["scoring"]["popularity_boost"] = float(os.getenv("POPULARITY_BOOST"))

        if os.getenv("QUALITY_BOOST"):
            self._config["scoring"]["quality_boost"] = float(os.getenv("QUALITY_BOOST"))

        if os.getenv("MMR_LAMBDA"):
            self._config["scoring"]["mmr_lambda"] = float(os.getenv("MMR_LAMBDA"))

        if os.getenv("DIVERSE_SCORE_THRESHOLD"):
            self._config["scoring"]["diverse_score_threshold"] = float(os.getenv("DIVERSE_SCORE_THRESHOLD"))

        # Catalog settings
        if os.getenv("OPENLIBRARY_BASE_URL"):
            self._config["catalog"]["base_url"] = os.getenv("OPENLIBRARY_BASE_URL")

        if os.getenv("CATALOG_TIMEOUT"):
            self._config["catalog"]["timeout"] = int(os.getenv("CATALOG_TIMEOUT"))

        if os.getenv("CATALOG_MAX_ATTEMPTS"):
            self._config["catalog"]["max_attempts"] = int(os.getenv("CATALOG_MAX_ATTEMPTS"))

        if os.getenv("MAX_CACHE_SIZE"):
            self._config["catalog"]["max_cache_size"] = int(os.getenv("MAX_CACHE_SIZE"))

        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

        # Paths
        if os.getenv("DATA_DIR"):
            self._config["paths"]["data_dir"] = os.getenv("DATA_DIR")

    def get_scoring_config(self) -> ScoringConfig:
        """Get scoring configuration."""
        scoring = self._config["scoring"]
        return ScoringConfig(
            popularity_boost=scoring["popularity_boost"],
            quality_boost=scoring["quality_boost"],
            quality_baseline=scoring["quality_baseline"],
            quality_min_rating=scoring["quality_min_rating"],
            mmr_lambda=scoring["mmr_lambda"],
            diverse_score_threshold=scoring["diverse_score_threshold"],
            diverse_min_rating=scoring["diverse_min_rating"],
            diverse_min_genres=scoring["diverse_min_genres"]
        )

    def get_recommendation_config(self) -> RecommendationConfig:
        """Get recommendation feature configuration."""
        rec = self._config["recommendations"]
        return RecommendationConfig(
            smart_count=rec["smart_count"],
            diverse_count=rec["diverse_count"],
            filter_limit=rec["filter_limit"],
            daily_pick_min_liked=rec["daily_pick_min_liked"],
            daily_pick_pool_size=rec["daily_pick_pool_size"],
            daily_pick_top_n=rec["daily_pick_top_n"],
            chain_length=rec["chain_length"],
            chain_top_n=rec["chain_top_n"]
        )

    def get_catalog_config(self) -> CatalogConfig:
        """Get external catalog configuration."""
        catalog = self._config["catalog"]
        return CatalogConfig(
            base_url=catalog["base_url"],
            timeout=catalog["timeout"],
            max_attempts=catalog["max_attempts"],
            backoff_seconds=catalog["backoff_seconds"],
            fetch_limit=catalog["fetch_limit"],
            max_cache_size=catalog["max_cache_size"],
            query_ttl_hours=catalog["query_ttl_hours"]
        )

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"]
        )

    def get_paths_config(self) -> PathsConfig:
        """Get paths configuration."""
        paths_config = self._config["paths"]
        return PathsConfig(
            data_dir=paths_config["data_dir"],
            library_file=paths_config["library_file"],
            cache_file=paths_config["cache_file"]
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_scoring_config() -> ScoringConfig:
    """Get scoring configuration."""
    return config_manager.get_scoring_config()


def get_recommendation_config() -> RecommendationConfig:
    """Get recommendation feature configuration."""
    return config_manager.get_recommendation_config()


def get_catalog_config() -> CatalogConfig:
    """Get external catalog configuration."""
    return config_manager.get_catalog_config()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def get_paths_config() -> PathsConfig:
    """Get paths configuration."""
    return config_manager.get_paths_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
