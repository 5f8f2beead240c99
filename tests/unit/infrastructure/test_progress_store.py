"""
Tests pour le fichier des points de reprise de synchronisation.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from jikan_lite.infrastructure.progress_store import SyncProgressStore


@pytest.fixture
def store(tmp_path: Path) -> SyncProgressStore:
    return SyncProgressStore(tmp_path / "state" / "progress.json")


class TestSyncProgressStore:
    """Tests du SyncProgressStore."""

    def test_missing_file_is_empty_state(self, store):
        assert store.read_all() == {}
        assert store.load("anime") is None

    def test_save_then_load(self, store):
        store.save("anime", 41)

        progress = store.load("anime")
        assert progress is not None
        assert progress.last_index == 41
        assert progress.updated_at

    def test_file_format(self, store):
        store.save("anime", 2)
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert data["anime"]["lastIndex"] == 2
        assert "updatedAt" in data["anime"]

    def test_other_kinds_preserved(self, store):
        store.save("manga", 10)
        store.save("anime", 3)
        store.save("anime", 4)

        assert store.load("manga").last_index == 10
        assert store.load("anime").last_index == 4

    def test_corrupt_file_is_empty_state(self, store):
        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.path.write_text("{not json", encoding="utf-8")

        assert store.load("anime") is None
        store.save("anime", 0)
        assert store.load("anime").last_index == 0

    @pytest.mark.parametrize("entry", [{"lastIndex": "5"}, {"lastIndex": -2}, {}, [1, 2]])
    def test_invalid_entry_ignored(self, store, entry):
        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.path.write_text(json.dumps({"anime": entry}), encoding="utf-8")
        assert store.load("anime") is None

    def test_no_temporary_file_left(self, store):
        store.save("anime", 1)
        assert [p.name for p in store.path.parent.iterdir()] == ["progress.json"]

    def test_interrupted_write_keeps_previous_checkpoint(self, store):
        store.save("anime", 41)

        with patch("pathlib.Path.replace", side_effect=OSError("crash")):
            with pytest.raises(OSError):
                store.save("anime", 42)

        assert store.load("anime").last_index == 41
