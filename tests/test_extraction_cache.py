"""
Unit tests for cache keys, cache backends and the extraction cache.
"""

import hashlib
import json

import pytest

from wallpalette.errors import CacheIOError
from wallpalette.services.cache import (
    CacheBackend,
    ExtractionCache,
    FileCacheBackend,
    InMemoryCacheBackend,
)
from wallpalette.services.fingerprint import generate_cache_key, generate_cache_key_digest

PALETTE = [f"#{i:02X}{i:02X}{i:02X}" for i in range(0, 256, 17)][:16]


class FailingBackend(CacheBackend):
    """Backend whose every operation fails."""

    def get(self, key):
        raise CacheIOError("disk on fire")

    def set(self, key, value):
        raise CacheIOError("disk on fire")

    def delete(self, key):
        raise CacheIOError("disk on fire")

    def clear(self):
        raise CacheIOError("disk on fire")


class TestCacheKeys:
    """Test cache key derivation."""

    def test_digest_matches_md5_of_path_mtime_theme(self):
        expected = hashlib.md5(b"/tmp/wall.png-1700000000-dark").hexdigest()
        assert generate_cache_key_digest("/tmp/wall.png", 1700000000.9, False) == expected

    def test_theme_changes_key(self):
        dark = generate_cache_key("/tmp/wall.png", 100, False)
        light = generate_cache_key("/tmp/wall.png", 100, True)
        assert dark != light

    def test_mode_suffix(self):
        base = generate_cache_key("/tmp/wall.png", 100, False)
        assert generate_cache_key("/tmp/wall.png", 100, False, "default") == base
        assert generate_cache_key("/tmp/wall.png", 100, False, "pastel") == f"{base}_pastel"

    def test_key_for_missing_file_is_none(self, tmp_path, memory_cache):
        assert memory_cache.key_for_file(tmp_path / "missing.png", False) is None


class TestInMemoryBackend:
    """Test LRU behaviour of the memory backend."""

    def test_set_get_delete(self):
        backend = InMemoryCacheBackend(max_size=4)
        backend.set("a", {"x": 1})
        assert backend.get("a") == {"x": 1}
        assert backend.delete("a")
        assert backend.get("a") is None

    def test_least_recently_used_is_evicted(self):
        backend = InMemoryCacheBackend(max_size=2)
        backend.set("a", {"v": 1})
        backend.set("b", {"v": 2})
        backend.get("a")
        backend.set("c", {"v": 3})

        assert backend.get("b") is None
        assert backend.get("a") == {"v": 1}
        assert backend.get("c") == {"v": 3}

    def test_zero_max_size_is_rejected(self):
        with pytest.raises(ValueError):
            InMemoryCacheBackend(max_size=0)

    def test_explicit_max_size_is_kept(self):
        assert InMemoryCacheBackend(max_size=1).max_size == 1

    def test_clear_returns_count(self):
        backend = InMemoryCacheBackend()
        backend.set("a", {})
        backend.set("b", {})
        assert backend.clear() == 2
        assert len(backend) == 0


class TestFileBackend:
    """Test the one-file-per-key backend."""

    def test_writes_pretty_json_file(self, tmp_path):
        backend = FileCacheBackend(tmp_path / "cache")
        backend.set("abc", {"palette": PALETTE})

        path = tmp_path / "cache" / "abc.json"
        assert path.exists()
        text = path.read_text()
        assert "\n  " in text
        assert json.loads(text) == {"palette": PALETTE}

    def test_no_temp_files_left_behind(self, tmp_path):
        backend = FileCacheBackend(tmp_path)
        backend.set("k1", {"a": 1})
        backend.set("k1", {"a": 2})
        assert sorted(p.name for p in tmp_path.iterdir()) == ["k1.json"]
        assert backend.get("k1") == {"a": 2}

    def test_missing_key_is_none(self, tmp_path):
        assert FileCacheBackend(tmp_path).get("nothing") is None

    def test_corrupt_file_raises_cache_error(self, tmp_path):
        (tmp_path / "bad.json").write_text("{not json")
        with pytest.raises(CacheIOError):
            FileCacheBackend(tmp_path).get("bad")

    def test_clear_removes_records(self, tmp_path):
        backend = FileCacheBackend(tmp_path)
        backend.set("a", {})
        backend.set("b", {})
        assert backend.clear() == 2
        assert list(tmp_path.glob("*.json")) == []


class TestExtractionCache:
    """Test record validation and miss semantics."""

    def test_roundtrip(self, memory_cache):
        assert memory_cache.put("key", PALETTE)
        assert memory_cache.get("key") == PALETTE

    def test_record_layout(self, tmp_path):
        cache = ExtractionCache(FileCacheBackend(tmp_path))
        cache.put("key", PALETTE)

        record = json.loads((tmp_path / "key.json").read_text())
        assert record["palette"] == PALETTE
        assert record["version"] == 1
        assert record["timestamp"] > 1_600_000_000_000

    def test_missing_key_is_miss(self, memory_cache):
        assert memory_cache.get("absent") is None
        assert memory_cache.get_cache_stats()["stats"]["misses"] == 1

    def test_version_mismatch_is_miss(self):
        backend = InMemoryCacheBackend()
        ExtractionCache(backend, version=1).put("key", PALETTE)
        assert ExtractionCache(backend, version=2).get("key") is None

    def test_invalid_record_is_miss(self):
        backend = InMemoryCacheBackend()
        backend.set("key", {"palette": ["#FFF"], "timestamp": 1, "version": 1})
        assert ExtractionCache(backend).get("key") is None

    def test_corrupt_file_is_miss(self, tmp_path):
        (tmp_path / "key.json").write_text("{not json")
        cache = ExtractionCache(FileCacheBackend(tmp_path))
        assert cache.get("key") is None
        assert cache.get_cache_stats()["stats"]["errors"] == 1

    def test_failing_backend_never_raises(self):
        cache = ExtractionCache(FailingBackend())
        assert cache.get("key") is None
        assert cache.put("key", PALETTE) is False
        assert cache.clear() == 0

    def test_unwritable_directory_is_logged_not_raised(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file where the cache dir should be")
        cache = ExtractionCache(FileCacheBackend(blocker / "cache"))
        assert cache.put("key", PALETTE) is False

    def test_stats_and_clear(self, memory_cache):
        memory_cache.put("key", PALETTE)
        memory_cache.get("key")
        memory_cache.get("other")

        stats = memory_cache.get_cache_stats()
        assert stats["stats"]["hits"] == 1
        assert stats["hit_rate"] == pytest.approx(0.5)

        assert memory_cache.clear() == 1
        assert memory_cache.get_cache_stats()["total_requests"] == 0
        assert memory_cache.get("key") is None
