"""Pipeline settings read from environment variables."""

import os

from karasu_listings.utils.logging_config import env_int


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, str(default)))
    except ValueError:
        return default


class PipelineSettings:
    """Environment-driven defaults for the listing pipeline and data layer."""

    SEARCH_PAGE_SIZE = env_int("SEARCH_PAGE_SIZE", 18)
    RELATED_PAGE_SIZE = env_int("RELATED_PAGE_SIZE", 6)
    LISTINGS_FETCH_LIMIT = env_int("LISTINGS_FETCH_LIMIT", 500)
    LISTINGS_FETCH_TIMEOUT_SECONDS = _env_float("LISTINGS_FETCH_TIMEOUT_SECONDS", 10.0)
