"""Tests for core.storage — LocalStorage and MemoryStorage."""

import pytest

from scalebook.core.storage import (
    LocalStorage,
    MemoryStorage,
    StorageKeyError,
    StoragePermissionError,
)


class TestLocalStorage:
    @pytest.fixture
    def storage(self, tmp_path):
        return LocalStorage(base_path=str(tmp_path / "store"))

    def test_save_and_load(self, storage):
        meta = storage.save("weights", b'{"a": 1}', content_type="application/json")
        assert meta.key == "weights"
        assert meta.size == 8
        assert meta.content_type == "application/json"
        assert storage.load("weights") == b'{"a": 1}'

    def test_text_roundtrip(self, storage):
        storage.save_text("doc", "体重 70.5")
        assert storage.load_text("doc") == "体重 70.5"

    def test_overwrite_replaces(self, storage):
        storage.save("k", b"first")
        storage.save("k", b"second")
        assert storage.load("k") == b"second"

    def test_no_temp_files_left(self, storage):
        storage.save("k", b"data")
        leftovers = [p for p in storage.base_path.iterdir() if p.name.endswith(".tmp")]
        assert leftovers == []

    def test_exists(self, storage):
        assert not storage.exists("missing")
        storage.save("present", b"hi")
        assert storage.exists("present")

    def test_delete(self, storage):
        storage.save("to_delete", b"bye")
        assert storage.delete("to_delete")
        assert not storage.exists("to_delete")
        assert not storage.delete("to_delete")  # already gone

    def test_list_keys(self, storage):
        storage.save("a/1", b"a1")
        storage.save("a/2", b"a2")
        storage.save("b/1", b"b1")

        assert list(storage.list_keys()) == ["a/1", "a/2", "b/1"]
        assert list(storage.list_keys(prefix="a/")) == ["a/1", "a/2"]

    def test_load_missing_raises(self, storage):
        with pytest.raises(StorageKeyError, match="not found"):
            storage.load("no_such_key")

    @pytest.mark.parametrize("key", ["", "   ", "../escape", "/etc/passwd", "~/x", "a\\b", "a\x00b"])
    def test_rejects_unsafe_keys(self, storage, key):
        with pytest.raises(StoragePermissionError):
            storage.save(key, b"x")

    def test_creates_base_path(self, tmp_path):
        target = tmp_path / "deep" / "nested"
        LocalStorage(base_path=str(target))
        assert target.is_dir()


class TestMemoryStorage:
    def test_roundtrip_and_delete(self):
        storage = MemoryStorage()
        storage.save("k", b"v")
        assert storage.exists("k")
        assert storage.load("k") == b"v"
        assert storage.delete("k")
        assert not storage.delete("k")

    def test_load_missing_raises(self):
        with pytest.raises(StorageKeyError):
            MemoryStorage().load("nope")

    def test_list_keys_prefix(self):
        storage = MemoryStorage()
        for key in ("x1", "x2", "y1"):
            storage.save(key, b"")
        assert list(storage.list_keys("x")) == ["x1", "x2"]
