from functools import lru_cache

from kinkatsu.cache import tags
from kinkatsu.cache.store import TagCache
from kinkatsu.settings import get_settings


@lru_cache
def get_cache() -> TagCache:
    """The process-wide cache; also a FastAPI dependency."""
    return TagCache(max_entries=get_settings().CACHE_MAX_ENTRIES)


__all__ = ["TagCache", "get_cache", "tags"]
