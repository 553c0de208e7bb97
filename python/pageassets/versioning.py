# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
"""Wildcard version resolution.

``js/vendor/lib-*.min.js`` resolves to the naturally-greatest matching file in
``js/vendor`` (``lib-10.min.js`` beats ``lib-9.min.js``). Lookups can be
memoized through any object exposing ``has``/``get``/``put``.
"""
from __future__ import annotations

import os
import re
from fnmatch import fnmatchcase
from typing import Any, Callable, List, Optional, Protocol, Union

WILDCARD = "*"

_DIGITS_RE = re.compile(r"(\d+)")


class VersionCache(Protocol):
    def has(self, key: str) -> bool: ...

    def get(self, key: str) -> Optional[str]: ...

    def put(self, key: str, value: str, ttl_minutes: int) -> None: ...


def capability(cache: Any, name: str) -> Optional[Callable[..., Any]]:
    """Return the cache method ``name`` if the collaborator provides it."""
    if cache is None:
        return None
    method = getattr(cache, name, None)
    return method if callable(method) else None


def natural_key(name: str) -> List[Union[str, int]]:
    parts: List[Union[str, int]] = []
    for i, chunk in enumerate(_DIGITS_RE.split(name)):
        parts.append(int(chunk) if i % 2 else chunk)
    return parts


def list_directory(directory: str) -> List[str]:
    try:
        return os.listdir(directory)
    except OSError:
        return []


def latest_match(identifier: str) -> str:
    """Replace the wildcard file name with the greatest match on disk."""
    directory, pattern = os.path.split(identifier)
    directory = directory or "."
    matches = [name for name in list_directory(directory) if fnmatchcase(name, pattern)]
    if not matches:
        return identifier
    return f"{directory}/{max(matches, key=lambda n: (natural_key(n), n))}"


def resolve_wildcard(
    identifier: str,
    cache: Any = None,
    *,
    enabled: bool = True,
    key_prefix: str = "",
    ttl_minutes: int = 360,
) -> str:
    if WILDCARD not in identifier:
        return identifier
    key = key_prefix + identifier
    has = capability(cache, "has") if enabled else None
    get = capability(cache, "get") if enabled else None
    if has is not None and get is not None and has(key):
        cached = get(key)
        if isinstance(cached, str):
            return cached
    resolved = latest_match(identifier)
    put = capability(cache, "put") if enabled else None
    if put is not None:
        put(key, resolved, ttl_minutes)
    return resolved
