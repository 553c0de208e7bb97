from __future__ import annotations

import json
from pathlib import Path

from watchdog.events import DirModifiedEvent, FileModifiedEvent, FileMovedEvent

from pageassets import AssetRegistry
from pageassets.watcher import ManifestEventHandler


def _manifest(tmp_path: Path, table: dict) -> Path:
    path = tmp_path / "cache.json"
    path.write_text(json.dumps(table), encoding="utf-8")
    return path


def test_modification_reloads_manifest(tmp_path: Path) -> None:
    path = _manifest(tmp_path, {"app.js": "v1"})
    registry = AssetRegistry()
    reloads = []
    handler = ManifestEventHandler(registry, path, delay=0, on_reload=reloads.append)

    handler.on_modified(FileModifiedEvent(str(path)))
    assert registry.cachebuster.hashes == {"app.js": "v1"}

    path.write_text(json.dumps({"app.js": "v2"}), encoding="utf-8")
    handler.on_modified(FileModifiedEvent(str(path)))
    assert registry.cachebuster.hashes == {"app.js": "v2"}
    assert reloads == [registry, registry]


def test_other_files_and_directories_are_ignored(tmp_path: Path) -> None:
    path = _manifest(tmp_path, {"app.js": "v1"})
    registry = AssetRegistry()
    handler = ManifestEventHandler(registry, path, delay=0)
    handler.on_modified(FileModifiedEvent(str(tmp_path / "other.json")))
    handler.on_modified(DirModifiedEvent(str(tmp_path)))
    assert registry.cachebuster.hashes == {}


def test_rapid_changes_are_debounced(tmp_path: Path) -> None:
    path = _manifest(tmp_path, {"app.js": "v1"})
    registry = AssetRegistry()
    handler = ManifestEventHandler(registry, path, delay=3600)
    handler.on_modified(FileModifiedEvent(str(path)))
    path.write_text(json.dumps({"app.js": "v2"}), encoding="utf-8")
    handler.on_modified(FileModifiedEvent(str(path)))
    assert registry.cachebuster.hashes == {"app.js": "v1"}


def test_rename_over_manifest_reloads(tmp_path: Path) -> None:
    path = _manifest(tmp_path, {"app.js": "v3"})
    registry = AssetRegistry()
    handler = ManifestEventHandler(registry, path, delay=3600)
    handler.on_moved(FileMovedEvent(str(tmp_path / "cache.json.tmp"), str(path)))
    assert registry.cachebuster.hashes == {"app.js": "v3"}
