"""
JSON file cache for participant data.

The cache file holds one JSON object. It is read wholesale into nested
OrderedDicts (see ``util.convert``), mutated in memory by the caller, and
written back wholesale.
"""

import json
import logging
from collections import OrderedDict
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from participant_tracker.config import app_root
from participant_tracker.exceptions import InvalidCacheDataError
from participant_tracker.util.convert import from_nested_map, to_nested_map

logger = logging.getLogger(__name__)

CACHE_FILENAME = "cache.json"


def default_cache_path() -> Path:
    """Return the cache file location in the application root."""
    return app_root() / CACHE_FILENAME


def load_cache(path: str | Path | None = None) -> OrderedDict | None:
    """
    Load the cache file.

    Args:
        path: Cache file (default: cache.json in the application root)

    Returns:
        Cache contents as nested OrderedDicts, or None if the file is missing,
        unreadable or not valid JSON
    """
    cache_file = Path(path) if path is not None else default_cache_path()
    try:
        with open(cache_file, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        logger.debug(f"Cache not loaded from {cache_file}: {e}")
        return None

    return to_nested_map(data)


def save_cache(data: Mapping[str, Any], path: str | Path | None = None) -> None:
    """
    Write the cache file, replacing any existing content.

    Args:
        data: Cache contents (nested OrderedDicts or plain dicts)
        path: Cache file (default: cache.json in the application root)

    Raises:
        InvalidCacheDataError: If ``data`` is not a mapping
        OSError: If the file cannot be written
    """
    if not isinstance(data, Mapping):
        raise InvalidCacheDataError(type(data).__name__)

    cache_file = Path(path) if path is not None else default_cache_path()
    cache_file.parent.mkdir(parents=True, exist_ok=True)
    with open(cache_file, "w", encoding="utf-8") as f:
        json.dump(from_nested_map(data), f, indent=2, ensure_ascii=False)


class ParticipantCache:
    """
    Participant cache bound to one file.

    Entries live in memory until ``save()`` is called.
    """

    def __init__(self, cache_file: Path | None = None):
        """
        Initialize participant cache.

        Args:
            cache_file: Path to cache file (default: cache.json in the application root)
        """
        self.cache_file = Path(cache_file) if cache_file is not None else default_cache_path()
        self._cache: OrderedDict = OrderedDict()
        self.load()

    def load(self) -> bool:
        """
        Reload entries from disk.

        Returns:
            True if the file was read, False if it was missing or corrupt
            (the cache is then empty)
        """
        data = load_cache(self.cache_file)
        if not isinstance(data, OrderedDict):
            self._cache = OrderedDict()
            return False
        self._cache = data
        return True

    def save(self) -> None:
        """Write all entries to disk."""
        save_cache(self._cache, self.cache_file)

    def get(self, key: str, default: Any = None) -> Any:
        return self._cache.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store a value; plain dicts are converted to the nested map form."""
        self._cache[key] = to_nested_map(value, depth=1)

    def remove(self, key: str) -> None:
        self._cache.pop(key, None)

    def clear(self) -> None:
        """Remove all entries and persist the empty cache."""
        self._cache = OrderedDict()
        self.save()

    def to_dict(self) -> dict[str, Any]:
        return from_nested_map(self._cache)

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def get_stats(self) -> dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dict with total entries and the cache file location
        """
        return {
            "total_entries": len(self._cache),
            "cache_file": str(self.cache_file),
        }
