# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
"""Text output for registry state.

Every function returns a string; an empty or missing collection renders as
``""`` (no wrapper tags). Every line starts with the registry prefix.
"""
from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING, Any, Iterable, List

from .sections import (
    DEFAULT_SCRIPT_SECTION,
    DEFAULT_STYLE_SECTION,
    READY_SECTION,
    ScriptAttributes,
)

if TYPE_CHECKING:
    from .registry import AssetRegistry

CSS_LINK = '<link rel="stylesheet" type="text/css" href="{url}">'
LESS_LINK = '<link rel="stylesheet/less" type="text/css" href="{url}">'
STYLE_OPEN = '<style type="text/css">'
STYLE_CLOSE = "</style>"
SCRIPT_ATTRS = ("type", "defer", "async")


def attr_text(value: Any) -> str:
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


def _link_tags(registry: "AssetRegistry", items: Iterable[str], template: str) -> str:
    registry.check_env()
    prefix = registry.prefix
    return "".join(
        f"{prefix}{template.format(url=escape(registry.url(item), quote=True))}\n" for item in items
    )


def _raw_list(registry: "AssetRegistry", items: Iterable[str], separator: str) -> str:
    registry.check_env()
    prefix = registry.prefix
    return "".join(f"{prefix}{registry.url(item)}{separator}" for item in items)


def render_css(registry: "AssetRegistry") -> str:
    return _link_tags(registry, registry.css_files, CSS_LINK)


def render_less(registry: "AssetRegistry") -> str:
    return _link_tags(registry, registry.less_files, LESS_LINK)


def render_css_raw(registry: "AssetRegistry", separator: str = "") -> str:
    return _raw_list(registry, registry.css_files, separator)


def render_less_raw(registry: "AssetRegistry", separator: str = "") -> str:
    return _raw_list(registry, registry.less_files, separator)


def render_js_raw(
    registry: "AssetRegistry",
    separator: str = "",
    name: str = DEFAULT_SCRIPT_SECTION,
) -> str:
    return _raw_list(registry, registry.js_files.section(name), separator)


def script_tag(url: str, attrs: ScriptAttributes) -> str:
    tag = f'<script src="{escape(url, quote=True)}"'
    for attr in SCRIPT_ATTRS:
        text = attr_text(attrs.get(attr))
        if text:
            tag += f' {attr}="{escape(text, quote=True)}"'
    return tag + "></script>"


def render_js(registry: "AssetRegistry", name: str = DEFAULT_SCRIPT_SECTION) -> str:
    registry.check_env()
    prefix = registry.prefix
    lines: List[str] = []
    for item in registry.js_files.section(name):
        attrs = registry.js_files.attributes(name, item) or ScriptAttributes()
        lines.append(f"{prefix}{script_tag(registry.url(item), attrs)}\n")
    return "".join(lines)


def _strings(snippets: Iterable[Any]) -> List[str]:
    return [s for s in snippets if isinstance(s, str)]


def render_styles(registry: "AssetRegistry", name: str = DEFAULT_STYLE_SECTION) -> str:
    """Render inline styles.

    A named section is wrapped in one ``<style>`` block. An empty name renders
    every section with each snippet in its own block. A named section that is
    absent or empty renders ``""``; it does not fall back to every section.
    """
    prefix = registry.prefix
    if name:
        snippets = _strings(registry.inline_styles.get(name))
        if not snippets:
            return ""
        body = "".join(f"{prefix}{s}\n" for s in snippets)
        return f"{prefix}{STYLE_OPEN}\n{body}{prefix}{STYLE_CLOSE}\n"
    out: List[str] = []
    for _, snippets in registry.inline_styles.items():
        for s in _strings(snippets):
            if s:
                out.append(f"{prefix}{STYLE_OPEN}{s}{STYLE_CLOSE}\n")
    return "".join(out)


def _section_scripts(registry: "AssetRegistry", name: str) -> str:
    prefix = registry.prefix
    snippets = _strings(registry.inline_scripts.get(name))
    if not snippets:
        return ""
    if name == READY_SECTION:
        opener = "$(" if registry.short_hand_ready else "$(document).ready("
        body = "".join(f"{prefix}{s}\n" for s in snippets)
        return f"{prefix}<script>{opener}function(){{\n{body}{prefix}}});</script>\n"
    return "".join(f"{prefix}<script>\n{s}\n{prefix}</script>\n" for s in snippets)


def render_scripts(registry: "AssetRegistry", name: str = DEFAULT_SCRIPT_SECTION) -> str:
    if name:
        return _section_scripts(registry, name)
    return "".join(_section_scripts(registry, section) for section, _ in registry.inline_scripts.items())
