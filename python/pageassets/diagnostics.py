# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
from __future__ import annotations

import warnings


class AssetWarning(UserWarning):
    """Warning emitted when the registry absorbs a bad input and degrades output."""


def warn(msg: str) -> None:
    warnings.warn(msg, AssetWarning, stacklevel=3)
