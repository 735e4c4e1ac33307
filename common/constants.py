"""Project-wide constants (page sizes, delays, size bounds)."""

DEFAULT_CHILDREN_LIMIT: int = 100
DEFAULT_SEARCH_LIMIT: int = 50

ROOT_SENTINEL: str = "root"

SEARCH_DEBOUNCE_SECONDS: float = 0.3

# SQLite INTEGER is a signed 64-bit value
MAX_NODE_SIZE: int = 2 ** 63 - 1

API_PREFIX: str = "/api/v1"
