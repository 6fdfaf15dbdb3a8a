"""
Wallpalette Palette Cache
Content-addressed result cache with file and in-memory LRU backends.
"""
import json
import os
import tempfile
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional, Union

from loguru import logger
from pydantic import ValidationError

from wallpalette.config import config
from wallpalette.errors import CacheIOError
from wallpalette.schemas import CacheRecord
from wallpalette.services.colors.constants import CACHE_VERSION
from wallpalette.services.fingerprint import file_mtime, generate_cache_key


class CacheBackend(ABC):
    """Abstract base class for cache backends. Values are JSON-compatible dicts."""

    @abstractmethod
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Get value from cache, None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: Dict[str, Any]) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete key from cache."""
        pass

    @abstractmethod
    def clear(self) -> int:
        """Clear all cache entries, returning how many were removed."""
        pass


class InMemoryCacheBackend(CacheBackend):
    """In-memory LRU cache backend, used for tests and ephemeral runs."""

    def __init__(self, max_size: Optional[int] = None):
        self.max_size = config.CACHE_MAX_ENTRIES if max_size is None else max_size
        if self.max_size < 1:
            raise ValueError(f"max_size must be positive: {self.max_size}")
        self._cache: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
        self._lock = Lock()

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Get value and mark it most recently used."""
        with self._lock:
            if key not in self._cache:
                return None
            self._cache.move_to_end(key)
            return dict(self._cache[key])

    def set(self, key: str, value: Dict[str, Any]) -> None:
        """Set value and evict the least recently used entry at capacity."""
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
            elif len(self._cache) >= self.max_size:
                evicted, _ = self._cache.popitem(last=False)
                logger.debug(f"Evicted cache key {evicted}")
            self._cache[key] = dict(value)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._cache.pop(key, None) is not None

    def clear(self) -> int:
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            return count


class FileCacheBackend(CacheBackend):
    """
    One pretty-printed ``<key>.json`` file per key in a cache directory.

    Writes go through a temporary file in the same directory followed by
    ``os.replace``, so readers see either the old or the new record. Any
    filesystem or decoding failure raises ``CacheIOError``.
    """

    SUFFIX = ".json"

    def __init__(self, cache_dir: Union[str, Path, None] = None):
        self.cache_dir = Path(cache_dir or config.CACHE_DIR).expanduser()

    def _path(self, key: str) -> Path:
        return self.cache_dir / f"{key}{self.SUFFIX}"

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        path = self._path(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            raise CacheIOError(f"Failed to read cache file {path}: {e}") from e

    def set(self, key: str, value: Dict[str, Any]) -> None:
        path = self._path(key)
        tmp_name = None
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, prefix=f".{key}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, indent=2)
            os.replace(tmp_name, path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise CacheIOError(f"Failed to write cache file {path}: {e}") from e

    def delete(self, key: str) -> bool:
        try:
            self._path(key).unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise CacheIOError(f"Failed to delete cache file for {key}: {e}") from e

    def clear(self) -> int:
        if not self.cache_dir.exists():
            return 0
        count = 0
        try:
            for path in self.cache_dir.glob(f"*{self.SUFFIX}"):
                path.unlink()
                count += 1
        except OSError as e:
            raise CacheIOError(f"Failed to clear cache directory {self.cache_dir}: {e}") from e
        return count


class ExtractionCache:
    """
    Palette cache keyed by image path, modification time, theme and mode.

    Cache problems never fail an extraction: unreadable, invalid or outdated
    records count as misses and failed writes are logged and dropped.
    """

    def __init__(self, backend: Optional[CacheBackend] = None, version: int = CACHE_VERSION):
        self.backend = backend if backend is not None else FileCacheBackend()
        self.version = version
        self.stats = {"hits": 0, "misses": 0, "writes": 0, "errors": 0}
        self._lock = Lock()

    @staticmethod
    def make_key(image_path: Union[str, Path], mtime_seconds: float,
                 prefer_light: bool, mode: str = "default") -> str:
        return generate_cache_key(image_path, mtime_seconds, prefer_light, mode)

    def key_for_file(self, image_path: Union[str, Path], prefer_light: bool,
                     mode: str = "default") -> Optional[str]:
        """Cache key for the file's current version, None if it cannot be stat'ed."""
        mtime = file_mtime(image_path)
        if mtime is None:
            logger.warning(f"Cannot stat {image_path}; skipping cache")
            return None
        return self.make_key(image_path, mtime, prefer_light, mode)

    def _count(self, stat: str):
        with self._lock:
            self.stats[stat] += 1

    def get(self, key: str) -> Optional[List[str]]:
        """Cached palette for key, or None on any kind of miss."""
        try:
            raw = self.backend.get(key)
        except CacheIOError as e:
            logger.warning(f"Cache read failed, treating as miss: {e}")
            self._count("errors")
            self._count("misses")
            return None

        if raw is None:
            self._count("misses")
            return None

        try:
            record = CacheRecord.model_validate(raw)
        except ValidationError as e:
            logger.warning(f"Invalid cache record for {key}: {e.error_count()} errors")
            self._count("misses")
            return None

        if record.version != self.version:
            logger.debug(f"Cache version mismatch for {key}: {record.version} != {self.version}")
            self._count("misses")
            return None

        logger.debug(f"Cache hit for {key}")
        self._count("hits")
        return list(record.palette)

    def put(self, key: str, palette: List[str]) -> bool:
        """Store a palette. Returns False if the write failed."""
        record = CacheRecord(
            palette=palette,
            timestamp=int(time.time() * 1000),
            version=self.version,
        )
        try:
            self.backend.set(key, record.model_dump())
        except CacheIOError as e:
            logger.warning(f"Cache write failed for {key}: {e}")
            self._count("errors")
            return False

        self._count("writes")
        return True

    def clear(self) -> int:
        """Remove every cached palette and reset statistics."""
        try:
            removed = self.backend.clear()
        except CacheIOError as e:
            logger.warning(f"Failed to clear cache: {e}")
            return 0

        with self._lock:
            for stat in self.stats:
                self.stats[stat] = 0
        logger.info(f"Cleared {removed} cached palettes")
        return removed

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            stats = self.stats.copy()
        total = stats["hits"] + stats["misses"]
        return {
            "stats": stats,
            "hit_rate": stats["hits"] / total if total > 0 else 0.0,
            "total_requests": total,
        }
