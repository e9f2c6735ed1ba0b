"""
Tests for the in-memory and SQLite analysis caches.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from resumescore.cache import AnalysisCache, cache_key, hash_text
from resumescore.database import CachedAnalysis, SqlAnalysisCache, init_database


class TestKeys:
    """Test cache key derivation."""

    def test_hash_is_stable(self):
        assert hash_text("abc") == hash_text("abc")
        assert hash_text("abc") != hash_text("abd")
        assert len(hash_text("")) == 64

    def test_cache_key_prefix(self):
        assert cache_key("job_analysis", "jd").startswith("job_analysis_")


class TestAnalysisCache:
    """Test thread-safe in-memory cache."""

    def test_get_set(self, quiet_logger):
        cache = AnalysisCache(logger=quiet_logger)
        assert cache.get("k") is None

        cache.set("k", {"a": 1})
        assert cache.get("k") == {"a": 1}
        assert "k" in cache
        assert len(cache) == 1

    def test_clear(self, quiet_logger):
        cache = AnalysisCache(logger=quiet_logger)
        cache.set("k", 1)
        cache.clear()
        assert len(cache) == 0

    def test_get_or_compute_once(self, quiet_logger):
        cache = AnalysisCache(logger=quiet_logger)
        calls = []

        def compute():
            calls.append(1)
            return "value"

        assert cache.get_or_compute("k", compute) == "value"
        assert cache.get_or_compute("k", compute) == "value"
        assert len(calls) == 1
        assert quiet_logger.get_metrics()["cache_hit_rate"] == 0.5

    def test_concurrent_compute_once(self, quiet_logger):
        cache = AnalysisCache(logger=quiet_logger)
        calls = []

        def compute():
            calls.append(1)
            return len(calls)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: cache.get_or_compute("shared", compute), range(32)))

        assert len(calls) == 1
        assert set(results) == {1}

    def test_independent_instances(self, quiet_logger):
        a = AnalysisCache(logger=quiet_logger)
        b = AnalysisCache(logger=quiet_logger)
        a.set("k", 1)
        assert b.get("k") is None


class TestSqlAnalysisCache:
    """Test SQLite-backed cache."""

    @pytest.fixture
    def sql_cache(self, tmp_path, quiet_logger):
        cache = SqlAnalysisCache(tmp_path / "data" / "cache.db", logger=quiet_logger)
        yield cache
        cache.close()

    def test_init_creates_file(self, tmp_path):
        db_path = tmp_path / "nested" / "cache.db"
        init_database(db_path)
        assert db_path.exists()

    def test_round_trip(self, sql_cache):
        payload = {"requirements": {"critical": ["Python"]}, "experience_level": "senior"}
        sql_cache.set("job_analysis_abc", payload)

        assert sql_cache.get("job_analysis_abc") == payload
        assert "job_analysis_abc" in sql_cache
        assert len(sql_cache) == 1

    def test_overwrite(self, sql_cache):
        sql_cache.set("k", [1])
        sql_cache.set("k", [2])

        assert sql_cache.get("k") == [2]
        assert len(sql_cache) == 1

    def test_missing_key(self, sql_cache):
        assert sql_cache.get("nope") is None
        assert "nope" not in sql_cache

    def test_persists_between_instances(self, tmp_path, quiet_logger):
        db_path = tmp_path / "cache.db"
        first = SqlAnalysisCache(db_path, logger=quiet_logger)
        first.set("k", {"v": 1})
        first.close()

        second = SqlAnalysisCache(db_path, logger=quiet_logger)
        try:
            assert second.get("k") == {"v": 1}
        finally:
            second.close()

    def test_get_or_compute(self, sql_cache, quiet_logger):
        calls = []

        def compute():
            calls.append(1)
            return {"n": len(calls)}

        assert sql_cache.get_or_compute("k", compute) == {"n": 1}
        assert sql_cache.get_or_compute("k", compute) == {"n": 1}
        assert len(calls) == 1
        metrics = quiet_logger.get_metrics()
        assert metrics["cache_hits"] == 1
        assert metrics["cache_misses"] == 1

    def test_corrupt_entry_ignored(self, sql_cache):
        with sql_cache.Session() as session:
            session.add(CachedAnalysis(cache_key="bad", payload="{not json"))
            session.commit()

        assert sql_cache.get("bad") is None

    def test_clear(self, sql_cache):
        sql_cache.set("a", 1)
        sql_cache.set("b", 2)
        sql_cache.clear()
        assert len(sql_cache) == 0
