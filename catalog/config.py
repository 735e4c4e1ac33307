"""Configuration settings for the catalog server."""

import os

from common.constants import DEFAULT_CHILDREN_LIMIT, DEFAULT_SEARCH_LIMIT


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_PATH = os.environ.get("CATALOG_DATABASE_PATH", "/app/data/catalog.db")

CATALOG_HOST = os.environ.get("CATALOG_HOST", "0.0.0.0")

CATALOG_PORT = int(os.environ.get("CATALOG_PORT", "3000"))

# "sqlite" or "memory"
STORAGE_BACKEND = os.environ.get("CATALOG_STORAGE", "sqlite").strip().lower()

STRICT_TREE = _env_flag("CATALOG_STRICT_TREE")

VALIDATE_PARENT_ON_UPDATE = _env_flag("CATALOG_VALIDATE_PARENT_ON_UPDATE")

CASCADE_DELETE = _env_flag("CATALOG_CASCADE_DELETE")

STRICT_HTTP_STATUS = _env_flag("CATALOG_STRICT_HTTP_STATUS")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CATALOG_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

CHILDREN_LIMIT = int(os.environ.get("CATALOG_CHILDREN_LIMIT", str(DEFAULT_CHILDREN_LIMIT)))

SEARCH_LIMIT = int(os.environ.get("CATALOG_SEARCH_LIMIT", str(DEFAULT_SEARCH_LIMIT)))
