from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def _qt_offscreen() -> None:
    """Ensure Qt can initialize in CI/headless environments."""

    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session", autouse=True)
def _add_repo_root_to_syspath() -> None:
    """Make local packages importable when running tests from `tests/`."""

    root = Path(__file__).resolve().parents[1]
    root_str = str(root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)


@pytest.fixture(autouse=True)
def _fresh_interpreter_lookup():
    """The interpreter lookup is memoized per process; tests need a clean slate."""

    from bloomsplash.resolve import _locate_interpreter

    _locate_interpreter.cache_clear()
    yield
    _locate_interpreter.cache_clear()


@pytest.fixture
def payload_dir(tmp_path: Path) -> Path:
    """A directory holding an executable Bloom.exe, like an installed Bloom."""

    exe = tmp_path / "Bloom.exe"
    exe.write_text("MZ", encoding="utf-8")
    exe.chmod(0o755)
    return tmp_path
