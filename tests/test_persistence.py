"""
Tests for persistence — file utilities and the selection store.
"""

import json
from pathlib import Path

import pytest

from pkgpilot.core.config.settings import Settings
from pkgpilot.core.data import UnknownPackageManagerError
from pkgpilot.core.persistence.file_io import get_config_dir, read_file, write_file
from pkgpilot.core.persistence.selection_store import SelectionStore


class TestFileIO:
    def test_write_and_read(self, tmp_path: Path):
        path = tmp_path / "a.txt"
        write_file(path, "hello")
        assert read_file(path) == "hello"

    def test_read_missing_returns_none(self, tmp_path: Path):
        assert read_file(tmp_path / "missing.txt") is None

    def test_read_directory_returns_none(self, tmp_path: Path):
        assert read_file(tmp_path) is None

    def test_read_binary_garbage_returns_none(self, tmp_path: Path):
        path = tmp_path / "bin"
        path.write_bytes(b"\xff\xfe\x00\x80")
        assert read_file(path) is None

    def test_write_creates_directories(self, tmp_path: Path):
        path = tmp_path / "deep" / "nested" / "file.json"
        write_file(path, "{}")
        assert path.is_file()

    def test_write_overwrites(self, tmp_path: Path):
        path = tmp_path / "f.txt"
        write_file(path, "one")
        write_file(path, "two")
        assert path.read_text() == "two"

    def test_write_leaves_no_temp_files(self, tmp_path: Path):
        write_file(tmp_path / "f.json", "{}")
        assert [p.name for p in tmp_path.iterdir()] == ["f.json"]


class TestConfigDir:
    def test_override(self, tmp_path: Path):
        assert get_config_dir({"PKGPILOT_HOME": str(tmp_path)}) == tmp_path

    def test_default_home(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_config_dir({}) == tmp_path / ".pkgpilot"

    def test_empty_override_ignored(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_config_dir({"PKGPILOT_HOME": ""}) == tmp_path / ".pkgpilot"

    def test_reads_os_environ(self, isolated_home: Path):
        assert get_config_dir() == isolated_home


class TestSelectionStore:
    def test_paths(self, store: SelectionStore, project_dir: Path, global_dir: Path):
        assert store.project_path(project_dir) == project_dir / ".pkgpilot" / "package-manager.json"
        assert store.global_path() == global_dir / "package-manager.json"

    def test_custom_names(self, project_dir: Path, global_dir: Path):
        settings = Settings(config_dir_name=".tools", choice_file_name="pm.json")
        store = SelectionStore(global_dir=global_dir, settings=settings)
        assert store.project_path(project_dir) == project_dir / ".tools" / "pm.json"
        assert store.global_path() == global_dir / "pm.json"

    def test_global_dir_from_settings(self, tmp_path: Path):
        store = SelectionStore(settings=Settings(global_dir=tmp_path / "g"))
        assert store.global_path() == tmp_path / "g" / "package-manager.json"

    def test_global_dir_defaults_to_home(self, isolated_home: Path):
        assert SelectionStore().global_path() == isolated_home / "package-manager.json"

    def test_project_round_trip(self, store: SelectionStore, project_dir: Path):
        choice = store.set_project("yarn", project_dir)
        assert choice.package_manager == "yarn"
        assert store.read_project_choice(project_dir) == "yarn"

    def test_global_round_trip(self, store: SelectionStore):
        store.set_global("pnpm")
        assert store.read_global_choice() == "pnpm"

    def test_file_format(self, store: SelectionStore, project_dir: Path):
        choice = store.set_project("bun", project_dir)
        raw = store.project_path(project_dir).read_text()
        assert raw.endswith("\n")
        assert json.loads(raw) == {"packageManager": "bun", "setAt": choice.set_at}

    def test_read_missing(self, store: SelectionStore, project_dir: Path):
        assert store.read_project_choice(project_dir) is None
        assert store.read_global_choice() is None

    @pytest.mark.parametrize("content", [
        "{not json",
        "[]",
        '"pnpm"',
        json.dumps({"packageManager": "cargo"}),
        json.dumps({"packageManager": 1}),
        json.dumps({"setAt": "2024-01-01T00:00:00.000Z"}),
    ])
    def test_read_tolerates_bad_content(self, store: SelectionStore, project_dir: Path, content):
        path = store.project_path(project_dir)
        path.parent.mkdir(parents=True)
        path.write_text(content)
        assert store.read_project_choice(project_dir) is None

    def test_rejects_unknown_on_write(self, store: SelectionStore, project_dir: Path):
        with pytest.raises(UnknownPackageManagerError):
            store.set_project("deno", project_dir)
        with pytest.raises(UnknownPackageManagerError):
            store.set_global("deno")
        assert not store.global_path().exists()
