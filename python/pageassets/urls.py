# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
from __future__ import annotations

import re
from typing import Callable, Optional

from .cachebuster import CacheBuster
from .diagnostics import warn

DEFAULT_DOMAIN = "/"
DEFAULT_ENVIRONMENT = "production"
LOCAL_ENVIRONMENT = "local"

UrlGenerator = Callable[[str, bool], str]
EnvResolver = Callable[[], str]

_ABSOLUTE_RE = re.compile(r"^(https?:)?//", re.IGNORECASE)


def is_absolute_url(identifier: str) -> bool:
    return bool(_ABSOLUTE_RE.match(identifier))


def join_domain(domain: str, identifier: str) -> str:
    return domain.rstrip("/") + "/" + identifier.lstrip("/")


def build_url(
    identifier: str,
    *,
    domain: str = DEFAULT_DOMAIN,
    cachebuster: Optional[CacheBuster] = None,
    url_generator: Optional[UrlGenerator] = None,
    secure: bool = False,
) -> str:
    """Compose the public URL of an asset.

    Absolute URLs pass through untouched. Everything else gets its cache-buster
    token, then goes to ``url_generator`` if one is installed, or is joined
    onto ``domain`` otherwise.
    """
    if is_absolute_url(identifier):
        return identifier
    if cachebuster is not None:
        identifier = cachebuster.resolve(identifier)
    if url_generator is not None:
        url = url_generator(identifier, secure)
        if not isinstance(url, str):
            warn(f"URL generator returned {type(url).__name__} for {identifier!r}; emitting ''")
            return ""
        return url
    return join_domain(domain, identifier)


def resolve_environment(current: Optional[str], resolver: Optional[EnvResolver]) -> str:
    if current is not None:
        return current
    if resolver is None:
        return DEFAULT_ENVIRONMENT
    env = resolver()
    if not isinstance(env, str):
        warn(f"Environment resolver returned {type(env).__name__}; using {DEFAULT_ENVIRONMENT!r}")
        return DEFAULT_ENVIRONMENT
    return env
