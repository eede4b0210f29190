"""Unit tests for the JSON history store."""
import json
import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest

from mindcheck.domain.models import AssessmentVerdict, Severity
from mindcheck.infrastructure.config import DEFAULT_HISTORY_PATH
from mindcheck.infrastructure.history.json_store import JsonHistoryStore


@pytest.fixture
def temp_storage():
    """Create a temporary path for the history file."""
    temp_dir = tempfile.mkdtemp()
    temp_path = os.path.join(temp_dir, "history.json")

    yield temp_path

    # Cleanup
    if os.path.exists(temp_path):
        os.unlink(temp_path)
    os.rmdir(temp_dir)


def _verdict(n: int) -> AssessmentVerdict:
    return AssessmentVerdict(
        primary_condition=f"Condition {n}",
        confidence=0.5,
        severity=Severity.LOW,
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=n),
    )


class TestJsonHistoryStore:
    """Test JsonHistoryStore functionality."""

    def test_missing_file_is_empty(self, temp_storage):
        store = JsonHistoryStore(storage_path=temp_storage)
        assert store.load() == []
        assert store.recent() == []

    def test_append_and_reload(self, temp_storage):
        store = JsonHistoryStore(storage_path=temp_storage)
        assert store.append(_verdict(1)) is None
        assert store.append(_verdict(2)) is None

        reloaded = JsonHistoryStore(storage_path=temp_storage)
        assert [v.primary_condition for v in reloaded.load()] == ["Condition 1", "Condition 2"]
        assert reloaded.load()[0].timestamp == _verdict(1).timestamp

        with open(temp_storage, "r") as f:
            raw = json.load(f)
        assert raw[0]["severity"] == "low"

    def test_capacity_evicts_oldest_first(self, temp_storage):
        store = JsonHistoryStore(storage_path=temp_storage)
        evicted = [store.append(_verdict(n)) for n in range(1, 14)]

        assert evicted[:10] == [None] * 10
        assert [v.primary_condition for v in evicted[10:]] == ["Condition 1", "Condition 2", "Condition 3"]

        entries = store.load()
        assert len(entries) == 10
        assert [v.primary_condition for v in entries] == [f"Condition {n}" for n in range(4, 14)]

    def test_custom_capacity(self, temp_storage):
        store = JsonHistoryStore(storage_path=temp_storage, capacity=2)
        for n in range(5):
            store.append(_verdict(n))
        assert len(store.load()) == 2

    def test_invalid_capacity(self, temp_storage):
        with pytest.raises(ValueError):
            JsonHistoryStore(storage_path=temp_storage, capacity=0)

    def test_recent_is_most_recent_first(self, temp_storage):
        store = JsonHistoryStore(storage_path=temp_storage)
        for n in range(1, 4):
            store.append(_verdict(n))
        assert [v.primary_condition for v in store.recent()] == ["Condition 3", "Condition 2", "Condition 1"]
        assert [v.primary_condition for v in store.recent(limit=1)] == ["Condition 3"]

    def test_malformed_json_reads_as_empty(self, temp_storage):
        with open(temp_storage, "w") as f:
            f.write("{not json")
        store = JsonHistoryStore(storage_path=temp_storage)
        assert store.load() == []
        store.append(_verdict(1))
        assert len(store.load()) == 1

    def test_wrong_shape_reads_as_empty(self, temp_storage):
        with open(temp_storage, "w") as f:
            json.dump({"entries": []}, f)
        assert JsonHistoryStore(storage_path=temp_storage).load() == []

        with open(temp_storage, "w") as f:
            json.dump([{"primary_condition": "Normal"}], f)
        assert JsonHistoryStore(storage_path=temp_storage).load() == []

    def test_delete_by_most_recent_index(self, temp_storage):
        store = JsonHistoryStore(storage_path=temp_storage)
        for n in range(1, 4):
            store.append(_verdict(n))

        removed = store.delete(0)
        assert removed.primary_condition == "Condition 3"
        assert [v.primary_condition for v in store.load()] == ["Condition 1", "Condition 2"]

        removed = store.delete(1)
        assert removed.primary_condition == "Condition 1"

    def test_delete_out_of_range(self, temp_storage):
        store = JsonHistoryStore(storage_path=temp_storage)
        with pytest.raises(IndexError):
            store.delete(0)

    def test_default_path_matches_settings(self):
        store = JsonHistoryStore()
        assert store.storage_path == DEFAULT_HISTORY_PATH

    def test_clear(self, temp_storage):
        store = JsonHistoryStore(storage_path=temp_storage)
        store.append(_verdict(1))
        store.clear()
        assert store.load() == []
