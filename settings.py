import os
import json
import logging
from typing import Dict, Any, Optional, Tuple

logger = logging.getLogger("books-search-lambda")

DEFAULT_CORS_ORIGIN = (
    "http://aws-books-explorer-frontend-20251123.s3-website-ap-northeast-1.amazonaws.com"
)


class AppConfig:
    """Application configuration management"""

    # Default configuration values
    _defaults = {
        "google_books_api_key": None,  # Should be set via environment variable
        "google_books_secret_name": None,
        "aws_region": "ap-northeast-1",
        "cors_origin": DEFAULT_CORS_ORIGIN,
        "books_api_url": "https://www.googleapis.com/books/v1/volumes",
        "fallback_query": "node",
        "max_results": 10,
        "retry_attempts": 3,
        "retry_backoff_seconds": 0.3,
        "request_timeout_seconds": None,  # Unbounded unless configured
        "error_snippet_chars": 1000,
        "api_base": "http://localhost:8000",  # Used by the local search page
    }

    # Keys read from well-known variable names instead of BOOKS_<KEY>
    _env_names: Dict[str, Tuple[str, ...]] = {
        "google_books_api_key": ("GOOGLE_BOOKS_API_KEY",),
        "google_books_secret_name": ("GOOGLE_BOOKS_SECRET_NAME",),
        "aws_region": ("AWS_REGION", "AWS_DEFAULT_REGION"),
        "cors_origin": ("CORS_ORIGIN",),
    }

    # Cache for config values
    _config_cache: Optional[Dict[str, Any]] = None

    @classmethod
    def get_value(cls, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.
        Checks environment variables first, then config file, then defaults.
        """
        for env_key in cls._env_names.get(key, (f"BOOKS_{key.upper()}",)):
            value = os.environ.get(env_key)
            if value:
                return value

        # Load config if not already loaded
        if cls._config_cache is None:
            cls._load_config()

        if cls._config_cache.get(key) is not None:
            return cls._config_cache[key]

        if cls._defaults.get(key) is not None:
            return cls._defaults[key]

        return default

    @classmethod
    def get_int(cls, key: str, default: Optional[int] = None) -> Optional[int]:
        value = cls.get_value(key, default)
        return None if value is None else int(value)

    @classmethod
    def get_float(cls, key: str, default: Optional[float] = None) -> Optional[float]:
        value = cls.get_value(key, default)
        return None if value is None else float(value)

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded config file so the next lookup reloads it"""
        cls._config_cache = None

    @classmethod
    def _load_config(cls) -> None:
        """Load configuration from file"""
        cls._config_cache = {}

        # Determine config file location
        config_path = os.environ.get(
            "BOOKS_CONFIG_PATH",
            "/opt/python/config/app_config.json"
        )

        # For local development, check current directory
        if not os.path.exists(config_path):
            local_config = "./config.json"
            if os.path.exists(local_config):
                config_path = local_config

        try:
            if os.path.exists(config_path):
                with open(config_path, 'r') as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError("top-level JSON value must be an object")
                cls._config_cache = loaded
                logger.info(f"Loaded configuration from {config_path}")
            else:
                logger.info("No configuration file found, using defaults")
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration: {str(e)}")
            # Continue with empty config and defaults
