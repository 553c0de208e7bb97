# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
from pathlib import Path
from typing import Dict, List, Optional, Any
try:
    import tomllib
except ImportError:
    import tomli as tomllib

from .cache import FileVersionCache, MemoryVersionCache
from .kinds import UnknownExtension
from .registry import DEFAULT_CACHE_KEY, DEFAULT_CACHE_TTL, AssetRegistry

CONFIG_FILENAME = "pageassets.toml"

# Default configuration structure
DEFAULT_CONFIG = {
    "registry": {
        "domain": "/",
        "prefix": "",
        "secure": False,
        "short_hand_ready": False,
        "on_unknown_extension": "none",
        # "environment": "production",
        # "cachebuster": "cache.json",
    },
    "cache": {
        "enabled": True,
        "ttl_minutes": DEFAULT_CACHE_TTL,
        "key": DEFAULT_CACHE_KEY,
        "backend": "memory",  # memory | file | none
    },
    "assets": {
        "css": [],
        "less": [],
        "js": [],  # strings or { src = "...", name = "...", type = "..." }
    },
    "styles": {},
    "scripts": {},
}


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        return [value]
    return list(value)


class Config:
    def __init__(self, data: Dict[str, Any], path: Path):
        self.data = data
        self.path = path
        self.root = path.parent

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration from pageassets.toml."""
        if path is None:
            path = Path.cwd() / CONFIG_FILENAME
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"No {CONFIG_FILENAME} found at {path}.")

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except Exception as e:
            raise ValueError(f"Failed to parse {path}: {e}")

        return cls(data, path)

    def _table(self, name: str) -> Dict[str, Any]:
        merged = dict(DEFAULT_CONFIG.get(name, {}))
        merged.update(self.data.get(name, {}))
        return merged

    @property
    def registry(self) -> Dict[str, Any]:
        return self._table("registry")

    @property
    def cache(self) -> Dict[str, Any]:
        return self._table("cache")

    @property
    def assets(self) -> Dict[str, Any]:
        return self._table("assets")

    @property
    def styles(self) -> Dict[str, Any]:
        return self._table("styles")

    @property
    def scripts(self) -> Dict[str, Any]:
        return self._table("scripts")

    def resolve_path(self, relative_path: str) -> Path:
        return self.root / relative_path

    # Helpers for common fields
    def get_cachebuster_path(self) -> Optional[Path]:
        manifest = self.registry.get("cachebuster")
        return self.resolve_path(manifest) if manifest else None

    def build_version_cache(self):
        backend = str(self.cache.get("backend", "memory")).lower()
        if backend == "memory":
            return MemoryVersionCache()
        if backend == "file":
            path = self.cache.get("path")
            return FileVersionCache(self.resolve_path(path) if path else None)
        if backend == "none":
            return None
        raise ValueError(f"Unknown cache backend {backend!r} in {self.path}")

    def apply(self, registry: AssetRegistry) -> AssetRegistry:
        """Push settings, manifest, cache and listed assets into ``registry``."""
        reg = self.registry
        registry.set_domain(str(reg["domain"]))
        registry.set_prefix(str(reg["prefix"]))
        registry.secure = bool(reg["secure"])
        registry.set_use_short_hand_ready(bool(reg["short_hand_ready"]))
        registry.on_unknown_extension = reg["on_unknown_extension"]
        if reg.get("environment"):
            registry.environment = str(reg["environment"])

        manifest = self.get_cachebuster_path()
        if manifest is not None:
            registry.load_cachebuster(manifest)

        cache = self.cache
        registry.cache_enabled = bool(cache["enabled"])
        registry.cache_ttl = int(cache["ttl_minutes"])
        registry.cache_key = str(cache["key"])
        registry.version_cache = self.build_version_cache()

        assets = self.assets
        # Listed files keep their table even when the extension is unrecognized.
        registry.add(_as_list(assets.get("css")), on_unknown_extension=UnknownExtension.CSS)
        registry.add(_as_list(assets.get("less")), on_unknown_extension=UnknownExtension.LESS)
        for entry in _as_list(assets.get("js")):
            if isinstance(entry, dict):
                params = dict(entry)
                src = params.pop("src", None)
                if not src:
                    raise ValueError(f"JS entry without 'src' in {self.path}: {entry!r}")
                registry.add(str(src), params, UnknownExtension.JS)
            else:
                registry.add(str(entry), None, UnknownExtension.JS)

        for name, snippets in self.styles.items():
            for snippet in _as_list(snippets):
                registry.add_style(snippet, name)
        for name, snippets in self.scripts.items():
            for snippet in _as_list(snippets):
                registry.add_script(snippet, name)
        return registry
