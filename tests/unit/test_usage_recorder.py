"""
Unit tests for usage logging.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from app.services.data_store import DataStore
from app.services.usage_recorder import UsageRecorder


@pytest.fixture
def store(tmp_path):
    return DataStore(base_path=str(tmp_path / "store"))


@pytest.fixture
def recorder(store):
    return UsageRecorder(store)


def seed(store, *entries):
    db = store.read()
    db["usageLogs"].extend(entries)
    store.write(db)


def entry(entry_id, platform, age_days=0, created_at=None):
    created = created_at or (datetime.now(timezone.utc) - timedelta(days=age_days)).isoformat()
    return {
        "id": entry_id,
        "platform": platform,
        "apiKeyId": "env",
        "endpoint": "/x",
        "method": "POST",
        "statusCode": 200,
        "success": True,
        "createdAt": created,
    }


class TestRecord:
    def test_record_success(self, recorder, store):
        log = recorder.record(
            platform="kling",
            endpoint="/v1/video/text-to-video",
            status_code=200,
            success=True,
            duration_ms=20000,
            api_key_id="env",
            error_message="ignored on success",
        )

        stored = store.read()["usageLogs"]
        assert len(stored) == 1
        assert stored[0]["id"] == log.id
        assert stored[0]["platform"] == "kling"
        assert stored[0]["statusCode"] == 200
        assert stored[0]["duration"] == 20000
        assert stored[0]["apiKeyId"] == "env"
        assert "errorMessage" not in stored[0]

    def test_record_failure_keeps_message(self, recorder):
        log = recorder.record(
            platform="openai",
            endpoint="/chat/completions",
            status_code=429,
            success=False,
            error_message="Rate limit reached",
            model="gpt-4",
        )

        assert log.error_message == "Rate limit reached"
        assert log.model == "gpt-4"
        assert log.api_key_id == "default"

    def test_write_failure_is_swallowed(self, recorder, store):
        with patch.object(store, "write", side_effect=OSError("disk full")):
            result = recorder.record(platform="veo", endpoint="/x", status_code=200, success=True)

        assert result is None


class TestQueries:
    def test_get_recent_newest_first(self, recorder, store):
        seed(store, entry("old", "kling", age_days=2), entry("new", "openai"), entry("mid", "veo", age_days=1))

        assert [log.id for log in recorder.get_recent()] == ["new", "mid", "old"]
        assert [log.id for log in recorder.get_recent(limit=1)] == ["new"]

    def test_get_by_platform(self, recorder, store):
        seed(store, entry("a", "kling", age_days=1), entry("b", "openai"), entry("c", "kling"))

        assert [log.id for log in recorder.get_by_platform("kling")] == ["c", "a"]

    def test_naive_timestamps_sort_with_aware_ones(self, recorder, store):
        seed(
            store,
            entry("naive", "kling", created_at="2020-01-01T00:00:00"),
            entry("aware", "kling"),
        )

        assert [log.id for log in recorder.get_recent()] == ["aware", "naive"]


class TestPrune:
    def test_prune_older_than(self, recorder, store):
        seed(store, entry("stale", "kling", age_days=45), entry("fresh", "kling", age_days=3))

        removed = recorder.prune_older_than(30)

        assert removed == 1
        assert [item["id"] for item in store.read()["usageLogs"]] == ["fresh"]

    def test_prune_nothing(self, recorder, store):
        seed(store, entry("fresh", "kling"))
        assert recorder.prune_older_than(30) == 0
