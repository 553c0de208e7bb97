# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
"""Cache-buster tokens appended to asset URLs as a query string.

Tokens come from a static JSON manifest (``{"app.js": "3f2a9c"}``) or from a
generator callable; the callable wins when both are present.
"""
import json
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from .diagnostics import warn

GeneratorFn = Callable[[str], Optional[str]]
ReaderFn = Callable[[Path], str]


def read_manifest(
    path: Union[str, Path], reader: Optional[ReaderFn] = None
) -> Optional[Dict[str, str]]:
    """Parse a manifest file into a string-to-string table.

    Returns None when the file does not exist. Unreadable or malformed files
    give an empty table. ``reader`` replaces the default UTF-8 file read.
    """
    path = Path(path)
    if not path.exists():
        return None
    try:
        text = reader(path) if reader is not None else path.read_text(encoding="utf-8")
        data = json.loads(text)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        warn(f"Ignoring unreadable cache-buster manifest {path}: {e}")
        return {}
    if not isinstance(data, dict):
        warn(f"Ignoring cache-buster manifest {path}: expected a JSON object")
        return {}
    return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}


class CacheBuster:
    def __init__(self) -> None:
        self.hashes: Dict[str, str] = {}
        self.generator: Optional[GeneratorFn] = None
        self.reader: Optional[ReaderFn] = None

    def load(self, path: Union[str, Path]) -> None:
        table = read_manifest(path, self.reader)
        if table is not None:
            self.hashes = table

    def set_generator(self, fn: Optional[GeneratorFn]) -> None:
        self.generator = fn

    def token(self, identifier: str) -> str:
        if self.generator is not None:
            value = self.generator(identifier)
            if value is not None and not isinstance(value, str):
                warn(f"Cache-buster generator returned {type(value).__name__} for {identifier!r}; ignoring")
                return ""
            return value or ""
        return self.hashes.get(identifier, "")

    def resolve(self, identifier: str) -> str:
        token = self.token(identifier)
        if token:
            return f"{identifier}?{token}"
        return identifier

    def clear(self) -> None:
        self.hashes = {}
        self.generator = None
        self.reader = None
