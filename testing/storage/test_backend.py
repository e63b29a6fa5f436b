"""键值存储后端测试。"""

from __future__ import annotations

from pathlib import Path

import pytest

from autogear.infra.exceptions import StorageError
from autogear.infra.file_utils import load_yaml
from autogear.storage.backend import KeyValueStorage, MemoryStorage, YamlFileStorage


class TestKeyValueStorageABC:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            KeyValueStorage()  # type: ignore[abstract]


class TestMemoryStorage:
    def test_missing_key(self):
        assert MemoryStorage().get_item("nope") is None

    def test_set_get(self):
        s = MemoryStorage()
        s.set_item("k", {"a": 1})
        assert s.get_item("k") == {"a": 1}

    def test_values_copied(self):
        s = MemoryStorage()
        value = {0: None}
        s.set_item("k", value)
        value[0] = "P1"
        got = s.get_item("k")
        got[1] = "P2"
        assert s.get_item("k") == {0: None}

    def test_initial_copied(self):
        initial = {"k": [1]}
        s = MemoryStorage(initial)
        initial["k"].append(2)
        assert s.get_item("k") == [1]


class TestYamlFileStorage:
    def test_missing_file_is_empty(self, tmp_path: Path):
        s = YamlFileStorage(tmp_path / "none.yaml")
        assert s.get_item("anything") is None

    def test_persists_every_set(self, tmp_path: Path):
        path = tmp_path / "sub" / "storage.yaml"
        s = YamlFileStorage(path)
        s.set_item("auto_swap_enabled", True)
        s.set_item("potion_assignments", {0: "P1", 1: None})
        assert load_yaml(path) == {
            "auto_swap_enabled": True,
            "potion_assignments": {0: "P1", 1: None},
        }
        assert s.path == path

    def test_reload(self, tmp_path: Path):
        path = tmp_path / "storage.yaml"
        YamlFileStorage(path).set_item("k", "v")
        assert YamlFileStorage(path).get_item("k") == "v"

    def test_no_temp_files_left(self, tmp_path: Path):
        s = YamlFileStorage(tmp_path / "storage.yaml")
        s.set_item("a", 1)
        s.set_item("b", 2)
        assert [p.name for p in tmp_path.iterdir()] == ["storage.yaml"]

    def test_invalid_yaml(self, tmp_yaml):
        path = tmp_yaml("bad.yaml", "a: [1, 2\n")
        with pytest.raises(StorageError):
            YamlFileStorage(path)

    def test_top_level_must_be_mapping(self, tmp_yaml):
        path = tmp_yaml("list.yaml", "- a\n- b\n")
        with pytest.raises(StorageError):
            YamlFileStorage(path)
