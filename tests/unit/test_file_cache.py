"""Unit tests for the content hash cache."""

import json
from pathlib import Path

import pytest

from hygienic.consolidation import ConsolidationResult
from hygienic.storage import FileHashCache


@pytest.fixture()
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "Page.tsx"
    path.write_text("export const Page = () => null;\n", encoding="utf-8")
    return path


def _result(path: Path, changed: bool = False) -> ConsolidationResult:
    return ConsolidationResult(file_path=str(path), changed=changed)


class TestCacheLookup:
    """Tests for hit/miss decisions."""

    def test_miss_before_caching(self, tmp_path: Path, source_file: Path) -> None:
        cache = FileHashCache(tmp_path / "cache.json")
        cache.load()
        assert not cache.is_file_cached(source_file)

    def test_hit_after_caching(self, tmp_path: Path, source_file: Path) -> None:
        cache = FileHashCache(tmp_path / "cache.json")
        cache.cache_file(source_file, _result(source_file))
        assert cache.is_file_cached(source_file)

    def test_modification_invalidates(self, tmp_path: Path, source_file: Path) -> None:
        cache = FileHashCache(tmp_path / "cache.json")
        cache.cache_file(source_file, _result(source_file))

        source_file.write_text("export const Page = () => <main />;\n", encoding="utf-8")

        assert not cache.is_file_cached(source_file)

    def test_unreadable_file_never_hits(self, tmp_path: Path) -> None:
        cache = FileHashCache(tmp_path / "cache.json")
        missing = tmp_path / "gone.tsx"
        assert cache.compute_file_hash(missing) == ""
        assert not cache.is_file_cached(missing)

    def test_key_is_resolved_path(
        self, tmp_path: Path, source_file: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Relative and absolute spellings share one entry."""
        monkeypatch.chdir(tmp_path)
        cache = FileHashCache(tmp_path / "cache.json")
        cache.cache_file(Path("Page.tsx"), _result(source_file))

        assert cache.is_file_cached(source_file)
        assert len(cache) == 1

    def test_entry_records_changed_flag(self, tmp_path: Path, source_file: Path) -> None:
        cache = FileHashCache(tmp_path / "cache.json")
        cache.cache_file(source_file, _result(source_file, changed=True))

        entry = cache.get_entry(source_file)

        assert entry is not None
        assert entry["changed"] is True
        assert entry["hash"] == FileHashCache.compute_file_hash(source_file)
        assert entry["timestamp"]


class TestDisabledCache:
    """A disabled cache never hits and never writes."""

    def test_lookups_false(self, tmp_path: Path, source_file: Path) -> None:
        cache = FileHashCache(tmp_path / "cache.json", enabled=False)
        cache.cache_file(source_file, _result(source_file))
        assert not cache.is_file_cached(source_file)

    def test_save_is_noop(self, tmp_path: Path) -> None:
        cache_path = tmp_path / "cache.json"
        cache = FileHashCache(cache_path, enabled=False)
        cache.save()
        assert not cache_path.exists()


class TestPersistence:
    """Tests for loading and saving the cache file."""

    def test_round_trip(self, tmp_path: Path, source_file: Path) -> None:
        cache_path = tmp_path / "cache.json"
        cache = FileHashCache(cache_path)
        cache.cache_file(source_file, _result(source_file))
        cache.save()

        reloaded = FileHashCache(cache_path)
        reloaded.load()

        assert reloaded.is_file_cached(source_file)
        assert str(source_file.resolve()) in json.loads(cache_path.read_text())

    def test_corrupted_file_loads_empty(self, tmp_path: Path) -> None:
        cache_path = tmp_path / "cache.json"
        cache_path.write_text("{not json", encoding="utf-8")

        cache = FileHashCache(cache_path)
        cache.load()

        assert len(cache) == 0

    def test_non_object_root_loads_empty(self, tmp_path: Path) -> None:
        cache_path = tmp_path / "cache.json"
        cache_path.write_text("[1, 2]", encoding="utf-8")

        cache = FileHashCache(cache_path)
        cache.load()

        assert len(cache) == 0

    def test_clear_persists(self, tmp_path: Path, source_file: Path) -> None:
        cache_path = tmp_path / "cache.json"
        cache = FileHashCache(cache_path)
        cache.cache_file(source_file, _result(source_file))
        cache.clear()

        assert json.loads(cache_path.read_text()) == {}
        assert not cache.is_file_cached(source_file)

    def test_path_and_cache_file_coexist(self, tmp_path: Path, source_file: Path) -> None:
        """The persisted location does not hide the cache_file method."""
        cache_path = tmp_path / "cache.json"
        cache = FileHashCache(cache_path)

        cache.cache_file(source_file, _result(source_file))
        cache.save()

        assert cache.cache_path == cache_path
        assert cache_path.exists()
        assert len(cache) == 1
