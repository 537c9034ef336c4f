"""Runtime configuration for Campus Gaming Network.

Values come from the environment (a local `.env` file is loaded first).
Read them through the getters so tests can monkeypatch the environment.
"""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def get_storage_bucket() -> str:
    """Storage bucket that holds school logos."""
    return os.getenv("STORAGE_BUCKET", "").strip()


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def get_cache_max_entries() -> Optional[int]:
    """Maximum records kept per cache, or None for no limit.

    Empty, zero, negative or non-numeric values all mean no limit.
    """
    raw = os.getenv("CACHE_MAX_ENTRIES", "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def get_gravatar_default() -> str:
    return os.getenv("GRAVATAR_DEFAULT", "robohash").strip() or "robohash"


def get_gravatar_rating() -> str:
    return os.getenv("GRAVATAR_RATING", "pg").strip() or "pg"
