"""In-process TTL cache in front of the namelist sheet."""
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

SOURCE_CACHE = "cache"
SOURCE_API = "api"
SOURCE_API_FORCED = "api_forced"


class TTLCache:
    """Entries expire ``ttl_seconds`` after being set. The clock is injectable for tests."""

    def __init__(self, ttl_seconds: float = 60.0, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() > expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (value, self._clock() + self.ttl_seconds)

    def invalidate(self, key: Optional[str] = None) -> None:
        """Drop one key, or everything when ``key`` is None."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)


class NamelistService:
    def __init__(self, repo, cache: TTLCache):
        self.repo = repo
        self.cache = cache

    def get_rows(self, reload: bool = False) -> Tuple[str, List[list]]:
        """Return ``(source, rows)``. A reload skips the cached copy but still refreshes it."""
        key = self.repo.cache_key
        if not reload:
            cached = self.cache.get(key)
            if cached is not None:
                return SOURCE_CACHE, cached
        rows = self.repo.fetch_rows()
        self.cache.set(key, rows)
        logger.debug("Namelist fetched (%s rows, reload=%s)", len(rows), reload)
        return (SOURCE_API_FORCED if reload else SOURCE_API), rows


def extract_names(rows: List[list]) -> List[str]:
    """First cell of every non-empty row, stripped."""
    names = []
    for row in rows or []:
        if not row:
            continue
        value = str(row[0]).strip()
        if value:
            names.append(value)
    return names
