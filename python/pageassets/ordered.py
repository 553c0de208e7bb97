# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
from __future__ import annotations

from typing import Dict, Iterator, List


def insert_before(items: Dict[str, str], key: str, anchor: str) -> Dict[str, str]:
    """Return a copy of ``items`` with ``key`` placed right before ``anchor``.

    ``key`` is removed from its old position first. An absent anchor appends.
    """
    rest = {k: v for k, v in items.items() if k != key}
    if anchor not in rest:
        rest[key] = key
        return rest
    out: Dict[str, str] = {}
    for k, v in rest.items():
        if k == anchor:
            out[key] = key
        out[k] = v
    return out


def insert_after(items: Dict[str, str], key: str, anchor: str) -> Dict[str, str]:
    """Return a copy of ``items`` with ``key`` placed right after ``anchor``."""
    rest = {k: v for k, v in items.items() if k != key}
    if anchor not in rest:
        rest[key] = key
        return rest
    out: Dict[str, str] = {}
    for k, v in rest.items():
        out[k] = v
        if k == anchor:
            out[key] = key
    return out


class OrderedAssets:
    """Insertion-ordered, duplicate-free collection of asset identifiers."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def add(self, identifier: str) -> None:
        if identifier not in self._items:
            self._items[identifier] = identifier

    def insert_before(self, identifier: str, anchor: str) -> None:
        self._items = insert_before(self._items, identifier, anchor)

    def insert_after(self, identifier: str, anchor: str) -> None:
        self._items = insert_after(self._items, identifier, anchor)

    def remove(self, identifier: str) -> None:
        self._items.pop(identifier, None)

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> List[str]:
        return list(self._items)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._items)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"OrderedAssets({self.keys()!r})"
