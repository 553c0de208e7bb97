# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
import os
import sys
import time
from pathlib import Path
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

from .registry import AssetRegistry


class ManifestEventHandler(FileSystemEventHandler):
    """Reload a registry's cache-buster table when its manifest changes."""

    def __init__(self, registry: AssetRegistry, manifest, delay=0.5, on_reload=None):
        self.registry = registry
        self.manifest = Path(manifest).resolve()
        self.delay = delay
        self.on_reload = on_reload
        self.last_reload = 0.0

    def _is_manifest(self, src_path) -> bool:
        try:
            return Path(os.fsdecode(src_path)).resolve() == self.manifest
        except OSError:
            return False

    def _reload(self, now):
        self.registry.load_cachebuster(self.manifest)
        self.last_reload = now
        if self.on_reload is not None:
            self.on_reload(self.registry)

    def on_modified(self, event):
        if event.is_directory or not self._is_manifest(event.src_path):
            return

        # Debounce
        now = time.time()
        if now - self.last_reload < self.delay:
            return

        self._reload(now)

    on_created = on_modified

    def on_moved(self, event):
        # Editors often save through a temp file renamed over the manifest.
        if not event.is_directory and self._is_manifest(event.dest_path):
            self._reload(time.time())


def watch_manifest(registry: AssetRegistry, manifest, on_reload=None) -> Observer:
    """Start watching ``manifest``; the caller stops and joins the observer."""
    handler = ManifestEventHandler(registry, manifest, on_reload=on_reload)
    observer = Observer()
    observer.schedule(handler, str(handler.manifest.parent), recursive=False)
    observer.start()
    return observer


def cmd_watch(args):
    """Reload the configured cache-buster manifest on change until interrupted."""
    from .config import Config

    config = Config.load(Path(args.config) if args.config else None)
    manifest = config.get_cachebuster_path()
    if manifest is None:
        raise ValueError(f"'registry.cachebuster' not specified in {config.path}")

    registry = config.apply(AssetRegistry())

    def report(reg):
        sys.stdout.write(f"[watch] reloaded {len(reg.cachebuster.hashes)} cache-buster entries\n")

    sys.stdout.write(f"[watch] Watching {manifest} for changes...\n")
    observer = watch_manifest(registry, manifest, on_reload=report)
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        observer.stop()
    observer.join()
