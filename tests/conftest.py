from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
PYTHON_SRC = ROOT / "python"

if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))
else:
    sys.path.remove(str(PYTHON_SRC))
    sys.path.insert(0, str(PYTHON_SRC))


def _prefer_local_pageassets_package() -> None:
    loaded = sys.modules.get("pageassets")
    if loaded is None:
        return
    mod_file = getattr(loaded, "__file__", "") or ""
    if str(PYTHON_SRC / "pageassets") in mod_file:
        return
    for name in list(sys.modules):
        if name == "pageassets" or name.startswith("pageassets."):
            sys.modules.pop(name, None)


_prefer_local_pageassets_package()


@pytest.fixture
def registry():
    from pageassets import AssetRegistry

    return AssetRegistry()


@pytest.fixture
def versioned_dir(tmp_path: Path) -> Path:
    """Directory holding test-1/2/10 builds plus an unrelated file."""
    target = tmp_path / "cdn" / "test"
    target.mkdir(parents=True)
    for name in ("test-1.min.js", "test-2.min.js", "test-10.min.js", "other.css"):
        (target / name).write_text("//", encoding="utf-8")
    return target
