# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
"""Asset registry for server-side templates.

Collects CSS, LESS and JS references plus inline style/script snippets, keeps
them ordered, rewrites their URLs (domain, cache-buster token, wildcard
versions) and renders them as HTML tags or raw path lists.
"""
from .cache import FileVersionCache, MemoryVersionCache
from .cachebuster import CacheBuster
from .config import Config
from .diagnostics import AssetWarning
from .kinds import AssetKind, UnknownExtension, classify
from .registry import AssetRegistry
from .sections import ScriptAttributes
from .versioning import VersionCache, natural_key, resolve_wildcard

__all__ = [
    "AssetKind",
    "AssetRegistry",
    "AssetWarning",
    "CacheBuster",
    "Config",
    "FileVersionCache",
    "MemoryVersionCache",
    "ScriptAttributes",
    "UnknownExtension",
    "VersionCache",
    "classify",
    "natural_key",
    "resolve_wildcard",
]
