"""Configuration management for the catalog CLI."""

import json
import os
from pathlib import Path

from common.constants import DEFAULT_CHILDREN_LIMIT, SEARCH_DEBOUNCE_SECONDS
from common.logging_config import get_logger

logger = get_logger(__name__)


class Config:
    """Manages CLI configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "catalog_host": os.environ.get("CATALOG_CLIENT_HOST", "localhost"),
        "catalog_port": int(os.environ.get("CATALOG_CLIENT_PORT", "3000")),
        "api_prefix": "/api/v1",
        "timeout": 10,
        "max_retries": 3,
        "retry_backoff_multiplier": 2,
        "page_size": DEFAULT_CHILDREN_LIMIT,
        "search_debounce_seconds": SEARCH_DEBOUNCE_SECONDS,
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.catalog/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            import tempfile
            self.config_path = Path(tempfile.gettempdir()) / '.catalog' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                config = self.DEFAULT_CONFIG.copy()
                config.update(data)
                return config
            except (json.JSONDecodeError, IOError) as e:
                logger.warning(f"Ignoring unreadable config file {self.config_path}: {e}")
                return self.DEFAULT_CONFIG.copy()
        else:
            config = self.DEFAULT_CONFIG.copy()
            try:
                with open(self.config_path, 'w') as f:
                    json.dump(config, f, indent=2)
            except IOError as e:
                logger.warning(f"Could not write default config to {self.config_path}: {e}")
            return config

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_path, 'w') as f:
                json.dump(self.data, f, indent=2)
        except IOError as e:
            logger.warning(f"Could not save config to {self.config_path}: {e}")

    def get_server_url(self) -> str:
        """
        Get catalog server root URL.

        Returns:
            Server URL string (e.g., "http://localhost:3000")
        """
        host = self.data.get('catalog_host', 'localhost')
        port = self.data.get('catalog_port', 3000)
        return f"http://{host}:{port}"

    def get_base_url(self) -> str:
        """
        Get catalog API base URL.

        Returns:
            Base URL string (e.g., "http://localhost:3000/api/v1")
        """
        return self.get_server_url() + self.data.get('api_prefix', '/api/v1')

    def set_server(self, host: str, port: int) -> None:
        """
        Point the client at another server and save to file.
        """
        self.data['catalog_host'] = host
        self.data['catalog_port'] = port
        self.save()

    def get_timeout(self) -> float:
        """
        Get request timeout in seconds.

        Returns:
            Timeout value in seconds
        """
        return self.data.get('timeout', 10)

    def get_retry_config(self) -> dict:
        """
        Get retry configuration.

        Returns:
            Dictionary with 'max_retries' and 'retry_backoff_multiplier'
        """
        return {
            'max_retries': self.data.get('max_retries', 3),
            'retry_backoff_multiplier': self.data.get('retry_backoff_multiplier', 2),
        }

    def get_page_size(self) -> int:
        """Number of children fetched per listing page."""
        return self.data.get('page_size', DEFAULT_CHILDREN_LIMIT)

    def get_search_debounce(self) -> float:
        """Quiet period in seconds before a typed search query is sent."""
        return self.data.get('search_debounce_seconds', SEARCH_DEBOUNCE_SECONDS)
