# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
"""The asset registry.

One ``AssetRegistry`` holds every collection, setting and hook. Host
applications own the instance, hand it to templates, and call ``reset()``
between independent scopes (tests, application boots).

    registry = AssetRegistry()
    registry.add("css/site.css")
    registry.add("js/app.js", {"name": "footer", "defer": True})
    head = registry.css()
    tail = registry.js()
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional, Union

from . import render
from .cachebuster import CacheBuster, GeneratorFn
from .kinds import AssetKind, UnknownExtension, classify, coerce_unknown_extension
from .ordered import OrderedAssets
from .sections import (
    DEFAULT_SCRIPT_SECTION,
    DEFAULT_STYLE_SECTION,
    ScriptParams,
    ScriptSections,
    SnippetSections,
)
from .urls import (
    DEFAULT_DOMAIN,
    LOCAL_ENVIRONMENT,
    EnvResolver,
    UrlGenerator,
    build_url,
    resolve_environment,
)
from .versioning import VersionCache, resolve_wildcard

DEFAULT_CACHE_TTL = 360  # minutes
DEFAULT_CACHE_KEY = "pageassets"


class AssetRegistry:
    def __init__(self) -> None:
        self.css_files = OrderedAssets()
        self.less_files = OrderedAssets()
        self.js_files = ScriptSections()
        self.inline_styles = SnippetSections()
        self.inline_scripts = SnippetSections()
        self.cachebuster = CacheBuster()
        self._set_defaults()

    def _set_defaults(self) -> None:
        self.domain: str = DEFAULT_DOMAIN
        self.prefix: str = ""
        self.secure: bool = False
        self.environment: Optional[str] = None
        self.cache_enabled: bool = True
        self.cache_ttl: int = DEFAULT_CACHE_TTL
        self.cache_key: str = DEFAULT_CACHE_KEY
        self.short_hand_ready: bool = False
        self.env_resolver: Optional[EnvResolver] = None
        self.url_generator: Optional[UrlGenerator] = None
        self.version_cache: Optional[VersionCache] = None
        self._on_unknown_extension = UnknownExtension.NONE

    def reset(self) -> None:
        """Drop every asset, snippet, manifest entry, hook and setting."""
        self.css_files.clear()
        self.less_files.clear()
        self.js_files.clear()
        self.inline_styles.clear()
        self.inline_scripts.clear()
        self.cachebuster.clear()
        self._set_defaults()

    # Settings

    def set_domain(self, url: str) -> None:
        self.domain = url

    def set_prefix(self, prefix: str) -> None:
        self.prefix = prefix

    def set_use_short_hand_ready(self, enabled: bool) -> None:
        self.short_hand_ready = bool(enabled)

    @property
    def on_unknown_extension(self) -> UnknownExtension:
        return self._on_unknown_extension

    @on_unknown_extension.setter
    def on_unknown_extension(self, value: Any) -> None:
        self._on_unknown_extension = coerce_unknown_extension(value)

    def set_on_unknown_extension_default(self, value: Any) -> None:
        self.on_unknown_extension = value

    def load_cachebuster(self, path: Union[str, Path]) -> None:
        self.cachebuster.load(path)

    def set_cachebuster_generator(self, fn: Optional[GeneratorFn]) -> None:
        self.cachebuster.set_generator(fn)

    # Adding assets

    def classify(self, identifier: str, policy: Optional[UnknownExtension] = None) -> AssetKind:
        return classify(identifier, policy, self._on_unknown_extension)

    def check_version(self, identifier: str) -> str:
        return resolve_wildcard(
            identifier,
            self.version_cache,
            enabled=self.cache_enabled,
            key_prefix=self.cache_key,
            ttl_minutes=self.cache_ttl,
        )

    def add(
        self,
        assets: Union[str, Iterable[str]],
        params: ScriptParams = None,
        on_unknown_extension: Optional[UnknownExtension] = None,
    ) -> None:
        """Add one identifier or several, routing each by its kind."""
        items = [assets] if isinstance(assets, str) else list(assets)
        for item in items:
            item = self.check_version(item)
            kind = self.classify(item, on_unknown_extension)
            if kind == AssetKind.JS:
                self.js_files.add(item, params)
            elif kind == AssetKind.CSS:
                self.css_files.add(item)
            elif kind == AssetKind.LESS:
                self.less_files.add(item)

    def add_before(
        self,
        asset: str,
        anchor: str,
        params: ScriptParams = None,
        on_unknown_extension: Optional[UnknownExtension] = None,
    ) -> None:
        asset = self.check_version(asset)
        kind = self.classify(asset, on_unknown_extension)
        if kind == AssetKind.JS:
            self.js_files.insert_before(asset, anchor, params)
        elif kind == AssetKind.CSS:
            self.css_files.insert_before(asset, anchor)
        elif kind == AssetKind.LESS:
            self.less_files.insert_before(asset, anchor)

    def add_after(
        self,
        asset: str,
        anchor: str,
        params: ScriptParams = None,
        on_unknown_extension: Optional[UnknownExtension] = None,
    ) -> None:
        asset = self.check_version(asset)
        kind = self.classify(asset, on_unknown_extension)
        if kind == AssetKind.JS:
            self.js_files.insert_after(asset, anchor, params)
        elif kind == AssetKind.CSS:
            self.css_files.insert_after(asset, anchor)
        elif kind == AssetKind.LESS:
            self.less_files.insert_after(asset, anchor)

    def add_script(self, script: str, name: str = DEFAULT_SCRIPT_SECTION) -> None:
        self.inline_scripts.add(script, name)

    def add_style(self, style: str, name: str = DEFAULT_STYLE_SECTION) -> None:
        self.inline_styles.add(style, name)

    # URLs

    def check_env(self) -> None:
        """Resolve the environment once; ``local`` forces a root-relative domain."""
        self.environment = resolve_environment(self.environment, self.env_resolver)
        if self.environment == LOCAL_ENVIRONMENT and self.domain != DEFAULT_DOMAIN:
            self.domain = DEFAULT_DOMAIN

    def url(self, identifier: str) -> str:
        return build_url(
            identifier,
            domain=self.domain,
            cachebuster=self.cachebuster,
            url_generator=self.url_generator,
            secure=self.secure,
        )

    # Output

    def css(self) -> str:
        return render.render_css(self)

    def css_raw(self, separator: str = "") -> str:
        return render.render_css_raw(self, separator)

    def less(self) -> str:
        return render.render_less(self)

    def less_raw(self, separator: str = "") -> str:
        return render.render_less_raw(self, separator)

    def js(self, name: str = DEFAULT_SCRIPT_SECTION) -> str:
        return render.render_js(self, name)

    def js_raw(self, separator: str = "", name: str = DEFAULT_SCRIPT_SECTION) -> str:
        return render.render_js_raw(self, separator, name)

    def styles(self, name: str = DEFAULT_STYLE_SECTION) -> str:
        return render.render_styles(self, name)

    def scripts(self, name: str = DEFAULT_SCRIPT_SECTION) -> str:
        return render.render_scripts(self, name)
