# ruff: noqa: E402

import sys
from pathlib import Path

import pytest
from _pytest.doctest import DoctestModule

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

DOCTEST_MODULES = {
    SRC / "shellrun" / "__init__.py",
    SRC / "shellrun" / "arguments.py",
    SRC / "shellrun" / "config.py",
    SRC / "shellrun" / "debug.py",
    SRC / "shellrun" / "elevation.py",
    SRC / "shellrun" / "launch.py",
    SRC / "shellrun" / "models.py",
    SRC / "shellrun" / "modes.py",
    SRC / "shellrun" / "paths.py",
}


def pytest_collect_file(
    parent: pytest.Collector, file_path: Path
) -> DoctestModule | None:
    path = file_path if isinstance(file_path, Path) else Path(str(file_path))
    if path in DOCTEST_MODULES:
        return DoctestModule.from_parent(parent, path=path)
    return None
