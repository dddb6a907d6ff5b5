"""
Unit tests for the key-value storage backends.
"""

import pytest

from notekeeper.core.exceptions import StorageReadError, StorageWriteError
from notekeeper.core.storage import FileKeyValueStorage, KeyValueStorage, MemoryKeyValueStorage


class TestMemoryStorage:
    def test_missing_key_returns_none(self):
        assert MemoryKeyValueStorage().get_item("nope") is None

    def test_set_then_get(self):
        storage = MemoryKeyValueStorage()
        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"

    def test_remove_absent_key_is_fine(self):
        storage = MemoryKeyValueStorage({"k": "v"})
        storage.remove_item("k")
        storage.remove_item("k")
        assert storage.keys() == []

    def test_satisfies_protocol(self):
        assert isinstance(MemoryKeyValueStorage(), KeyValueStorage)


class TestFileStorage:
    def test_missing_key_returns_none(self, tmp_path):
        assert FileKeyValueStorage(tmp_path).get_item("@notes_app_storage") is None

    def test_round_trip_creates_directory(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path / "nested" / "dir")
        storage.set_item("@notes_app_storage", "[]")
        assert storage.get_item("@notes_app_storage") == "[]"

    def test_key_is_encoded_into_file_name(self, tmp_path):
        FileKeyValueStorage(tmp_path).set_item("@notes/app", "x")
        assert (tmp_path / "%40notes%2Fapp").read_text(encoding="utf-8") == "x"

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path)
        storage.set_item("k", "first")
        storage.set_item("k", "second")
        assert storage.get_item("k") == "second"
        assert [p.name for p in tmp_path.iterdir()] == ["k"]

    def test_unicode_survives(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path)
        storage.set_item("k", "Ghi chú ✓")
        assert storage.get_item("k") == "Ghi chú ✓"

    def test_write_failure_raises_storage_write_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(StorageWriteError):
            FileKeyValueStorage(blocker).set_item("k", "v")

    def test_undecodable_bytes_are_read_and_written_back_unchanged(self, tmp_path):
        (tmp_path / "k").write_bytes(b"caf\xe9 \xff")
        storage = FileKeyValueStorage(tmp_path)
        value = storage.get_item("k")
        assert value.startswith("caf")

        storage.set_item("copy", value)
        assert (tmp_path / "copy").read_bytes() == b"caf\xe9 \xff"

    def test_unreadable_path_raises_storage_read_error(self, tmp_path):
        (tmp_path / "k").mkdir()
        with pytest.raises(StorageReadError):
            FileKeyValueStorage(tmp_path).get_item("k")

    def test_remove_item(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path)
        storage.set_item("k", "v")
        storage.remove_item("k")
        storage.remove_item("k")
        assert storage.get_item("k") is None
