"""Tests for the on-disk version cache."""

import json
from datetime import datetime, timedelta
from pathlib import Path

from action_upgrader.cache import CandidateCache


class TestCandidateCache:
    """Tests for CandidateCache."""

    def test_round_trip(self, tmp_path: Path) -> None:
        cache = CandidateCache(tmp_path / "cache.json")
        cache.set("actions", "checkout", ["v4", "v4.1.0"])
        assert cache.get("actions", "checkout") == ["v4", "v4.1.0"]

    def test_missing_entry(self, tmp_path: Path) -> None:
        assert CandidateCache(tmp_path / "cache.json").get("a", "b") is None

    def test_expired_entry(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        stale = (datetime.now() - timedelta(hours=2)).isoformat()
        path.write_text(json.dumps({"a/b": {"names": ["v1"], "timestamp": stale}}))
        assert CandidateCache(path).get("a", "b") is None

    def test_custom_expiry(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        recent = (datetime.now() - timedelta(hours=2)).isoformat()
        path.write_text(json.dumps({"a/b": {"names": ["v1"], "timestamp": recent}}))
        assert CandidateCache(path, expiry_hours=3).get("a", "b") == ["v1"]

    def test_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        path.write_text("{not json")
        cache = CandidateCache(path)
        assert cache.get("a", "b") is None
        cache.set("a", "b", ["v2"])
        assert cache.get("a", "b") == ["v2"]

    def test_bad_timestamp(self, tmp_path: Path) -> None:
        path = tmp_path / "cache.json"
        path.write_text(json.dumps({"a/b": {"names": ["v1"], "timestamp": "yesterday"}}))
        assert CandidateCache(path).get("a", "b") is None

    def test_keeps_other_entries(self, tmp_path: Path) -> None:
        cache = CandidateCache(tmp_path / "cache.json")
        cache.set("a", "one", ["v1"])
        cache.set("a", "two", ["v2"])
        assert cache.get("a", "one") == ["v1"]
        assert cache.get("a", "two") == ["v2"]

    def test_unwritable_location_is_ignored(self, tmp_path: Path) -> None:
        cache = CandidateCache(tmp_path / "missing-dir" / "cache.json")
        cache.set("a", "b", ["v1"])
        assert cache.get("a", "b") is None
