# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
"""Asset kind detection.

Identifiers are classified by pattern, not by inspecting files: anything that
looks like a stylesheet is CSS, ``.less`` is LESS, script-looking paths are JS.
Unrecognized identifiers fall back to the unknown-extension policy.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Optional

from .diagnostics import warn


class AssetKind(str, Enum):
    NONE = "none"
    CSS = "css"
    LESS = "less"
    JS = "js"


class UnknownExtension(str, Enum):
    """Fallback kind for identifiers whose extension is not recognized."""

    NONE = "none"
    CSS = "css"
    LESS = "less"
    JS = "js"


# CSS is not a valid process-wide default; it can only be passed per call.
DEFAULT_POLICIES = (UnknownExtension.NONE, UnknownExtension.LESS, UnknownExtension.JS)

_CSS_RE = re.compile(r"\.css|/css\?", re.IGNORECASE)
_LESS_RE = re.compile(r"\.less", re.IGNORECASE)
_JS_RE = re.compile(r"\.js|/js", re.IGNORECASE)

_POLICY_TO_KIND = {
    UnknownExtension.CSS: AssetKind.CSS,
    UnknownExtension.LESS: AssetKind.LESS,
    UnknownExtension.JS: AssetKind.JS,
}


def coerce_unknown_extension(value: Any) -> UnknownExtension:
    """Validate a process-wide default policy, clamping bad input to ``NONE``."""
    try:
        policy = UnknownExtension(value)
    except ValueError:
        warn(f"Invalid unknown-extension policy {value!r}; using 'none'")
        return UnknownExtension.NONE
    if policy not in DEFAULT_POLICIES:
        warn(f"Unknown-extension policy {policy.value!r} cannot be a default; using 'none'")
        return UnknownExtension.NONE
    return policy


def classify(
    identifier: str,
    policy: Optional[UnknownExtension] = None,
    default: UnknownExtension = UnknownExtension.NONE,
) -> AssetKind:
    if _CSS_RE.search(identifier):
        return AssetKind.CSS
    if _LESS_RE.search(identifier):
        return AssetKind.LESS
    if _JS_RE.search(identifier):
        return AssetKind.JS
    if policy is None or policy == UnknownExtension.NONE:
        policy = default
    try:
        policy = UnknownExtension(policy)
    except ValueError:
        return AssetKind.NONE
    return _POLICY_TO_KIND.get(policy, AssetKind.NONE)
