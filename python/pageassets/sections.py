# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
"""Named sections for script files and inline snippets.

Script files live in exactly one section at a time: adding an identifier to a
section first removes it from every other section, and sections that end up
empty are deleted instead of being kept around.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .ordered import insert_after, insert_before

DEFAULT_SCRIPT_SECTION = "footer"
DEFAULT_STYLE_SECTION = "header"
READY_SECTION = "ready"

ScriptParams = Union[Mapping[str, Any], str, None]


def split_script_params(params: ScriptParams) -> Tuple[str, Dict[str, Any]]:
    """Split call parameters into ``(section name, attribute values)``."""
    if params is None:
        return DEFAULT_SCRIPT_SECTION, {}
    if isinstance(params, str):
        return params or DEFAULT_SCRIPT_SECTION, {}
    name = params.get("name")
    section = DEFAULT_SCRIPT_SECTION if name is None else str(name)
    attrs = {str(k): v for k, v in params.items() if k != "name"}
    return section, attrs


@dataclass
class ScriptAttributes:
    """Per-script tag attributes; unknown keys are kept in ``extra``."""

    type: Any = None
    defer: Any = None
    async_: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def merge(self, values: Mapping[str, Any]) -> "ScriptAttributes":
        for key, value in values.items():
            if key == "type":
                self.type = value
            elif key == "defer":
                self.defer = value
            elif key in ("async", "async_"):
                self.async_ = value
            else:
                self.extra[key] = value
        return self

    def get(self, key: str, default: Any = None) -> Any:
        return self.as_dict().get(key, default)

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type, "defer": self.defer, "async": self.async_}
        out.update(self.extra)
        return out


class ScriptSections:
    def __init__(self) -> None:
        self._sections: Dict[str, Dict[str, str]] = {}
        self._attributes: Dict[str, Dict[str, ScriptAttributes]] = {}

    def add(self, identifier: str, params: ScriptParams = None) -> None:
        """Place ``identifier`` at the end of its target section.

        An empty identifier only triggers the purge and cleanup steps.
        """
        name, attrs = split_script_params(params)
        self._purge(identifier)
        if identifier != "":
            self._sections.setdefault(name, {})[identifier] = identifier
            self._merge_attributes(name, identifier, attrs)
        self._drop_empty()

    def insert_before(self, identifier: str, anchor: str, params: ScriptParams = None) -> None:
        if identifier == "":
            return
        name, attrs = split_script_params(params)
        self._purge(identifier)
        self._sections[name] = insert_before(self._sections.get(name, {}), identifier, anchor)
        self._merge_attributes(name, identifier, attrs)
        self._drop_empty()

    def insert_after(self, identifier: str, anchor: str, params: ScriptParams = None) -> None:
        if identifier == "":
            return
        name, attrs = split_script_params(params)
        self._purge(identifier)
        self._sections[name] = insert_after(self._sections.get(name, {}), identifier, anchor)
        self._merge_attributes(name, identifier, attrs)
        self._drop_empty()

    def _purge(self, identifier: str) -> None:
        for section in self._sections.values():
            section.pop(identifier, None)

    def _drop_empty(self) -> None:
        for name in [n for n, items in self._sections.items() if not items]:
            del self._sections[name]
            self._attributes.pop(name, None)

    def _merge_attributes(self, name: str, identifier: str, attrs: Mapping[str, Any]) -> None:
        section = self._attributes.setdefault(name, {})
        section.setdefault(identifier, ScriptAttributes()).merge(attrs)

    def section(self, name: str) -> List[str]:
        return list(self._sections.get(name, {}))

    def names(self) -> List[str]:
        return list(self._sections)

    def locate(self, identifier: str) -> Optional[str]:
        for name, items in self._sections.items():
            if identifier in items:
                return name
        return None

    def attributes(self, name: str, identifier: str) -> Optional[ScriptAttributes]:
        return self._attributes.get(name, {}).get(identifier)

    def as_dict(self) -> Dict[str, List[str]]:
        return {name: list(items) for name, items in self._sections.items()}

    def clear(self) -> None:
        self._sections.clear()
        self._attributes.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._sections

    def __bool__(self) -> bool:
        return bool(self._sections)


class SnippetSections:
    """Raw inline snippets grouped by section; duplicates are kept."""

    def __init__(self) -> None:
        self._sections: Dict[str, List[Any]] = {}

    def add(self, snippet: str, name: str) -> None:
        self._sections.setdefault(name, []).append(snippet)

    def get(self, name: str) -> List[Any]:
        return list(self._sections.get(name, []))

    def items(self) -> Iterator[Tuple[str, List[Any]]]:
        for name, snippets in list(self._sections.items()):
            yield name, list(snippets)

    def as_dict(self) -> Dict[str, List[Any]]:
        return {name: list(snippets) for name, snippets in self._sections.items()}

    def clear(self) -> None:
        self._sections.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._sections

    def __bool__(self) -> bool:
        return any(self._sections.values())
