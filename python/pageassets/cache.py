# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
"""Version-lookup caches for wildcard resolution.

Provides an in-process TTL cache and a JSON file cache stored in the
platform-appropriate cache directory.
"""
import json
import os
import sys
import time
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple


def get_cache_dir() -> Path:
    """Get the platform-appropriate cache directory for pageassets.

    - Windows: %LOCALAPPDATA%\\pageassets\\cache
    - macOS: ~/Library/Caches/pageassets
    - Linux: ~/.cache/pageassets (XDG_CACHE_HOME if set)
    """
    if sys.platform == "win32":
        base = os.environ.get("LOCALAPPDATA")
        if base:
            return Path(base) / "pageassets" / "cache"
        return Path.home() / "AppData" / "Local" / "pageassets" / "cache"
    elif sys.platform == "darwin":
        return Path.home() / "Library" / "Caches" / "pageassets"
    else:
        xdg = os.environ.get("XDG_CACHE_HOME")
        if xdg:
            return Path(xdg) / "pageassets"
        return Path.home() / ".cache" / "pageassets"


def _expiry(now: float, ttl_minutes: int) -> Optional[float]:
    if ttl_minutes <= 0:
        return None
    return now + ttl_minutes * 60


class MemoryVersionCache:
    """In-process cache; entries expire ``ttl_minutes`` after being stored."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[str, Optional[float]]] = {}

    def _live(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires = entry
        if expires is not None and self._clock() >= expires:
            del self._entries[key]
            return None
        return value

    def has(self, key: str) -> bool:
        return self._live(key) is not None

    def get(self, key: str) -> Optional[str]:
        return self._live(key)

    def put(self, key: str, value: str, ttl_minutes: int) -> None:
        self._entries[key] = (value, _expiry(self._clock(), ttl_minutes))

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class FileVersionCache:
    """Version cache persisted as JSON so resolutions survive restarts.

    Expiry uses wall-clock time. A missing or corrupt file reads as empty.
    """

    def __init__(self, path: Optional[Path] = None, clock: Callable[[], float] = time.time):
        self.path = Path(path) if path else get_cache_dir() / "versions.json"
        self._clock = clock

    def _load(self) -> Dict[str, dict]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=True, sort_keys=True), encoding="utf-8")

    def get(self, key: str) -> Optional[str]:
        entry = self._load().get(key)
        if not isinstance(entry, dict):
            return None
        expires = entry.get("expires")
        if expires is not None:
            if isinstance(expires, bool) or not isinstance(expires, (int, float)):
                return None
            if self._clock() >= expires:
                return None
        value = entry.get("value")
        return value if isinstance(value, str) else None

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def put(self, key: str, value: str, ttl_minutes: int) -> None:
        data = self._load()
        data[key] = {"value": value, "expires": _expiry(self._clock(), ttl_minutes)}
        self._save(data)

    def clear(self) -> int:
        """Remove the cache file; return the number of entries dropped."""
        count = len(self._load())
        if self.path.exists():
            self.path.unlink()
        return count


def cmd_cache_dir(args):
    """Print the cache directory path."""
    cache_dir = get_cache_dir()
    if getattr(args, "json", False):
        result = {
            "schema": "pageassets.cache_dir.v1",
            "path": str(cache_dir),
            "exists": cache_dir.exists(),
        }
        sys.stdout.write(json.dumps(result, ensure_ascii=True) + "\n")
    else:
        sys.stdout.write(str(cache_dir) + "\n")


def cmd_cache_clear(args):
    """Drop every persisted version lookup."""
    path = getattr(args, "path", None)
    removed = FileVersionCache(Path(path) if path else None).clear()

    if getattr(args, "json", False):
        result = {
            "schema": "pageassets.cache_clear.v1",
            "ok": True,
            "removed_count": removed,
        }
        sys.stdout.write(json.dumps(result, ensure_ascii=True) + "\n")
    else:
        sys.stdout.write(f"[ok] removed {removed} cached lookups\n")
