from __future__ import annotations

from pathlib import Path

import pytest

from bloomsplash.sentinel import SentinelError, create_marker, marker_present, remove_marker


def test_create_then_remove_marker(tmp_path: Path) -> None:
    marker = tmp_path / "BloomLaunching.now"

    create_marker(marker)
    assert marker_present(marker)

    remove_marker(marker)
    assert not marker_present(marker)


def test_second_create_fails_while_marker_exists(tmp_path: Path) -> None:
    marker = tmp_path / "BloomLaunching.now"
    create_marker(marker)

    with pytest.raises(SentinelError, match="already exists"):
        create_marker(marker)

    # The first instance's marker is left alone.
    assert marker.exists()


def test_create_in_missing_directory_fails(tmp_path: Path) -> None:
    with pytest.raises(SentinelError, match="cannot create marker"):
        create_marker(tmp_path / "no-such-dir" / "marker")


def test_sentinel_error_is_an_os_error() -> None:
    assert issubclass(SentinelError, OSError)


def test_remove_missing_marker_is_silent(tmp_path: Path) -> None:
    remove_marker(tmp_path / "never-created")


def test_remove_marker_ignores_os_errors(tmp_path: Path) -> None:
    # A directory cannot be unlinked; removal is advisory so nothing is raised.
    d = tmp_path / "dir"
    d.mkdir()
    remove_marker(d)
    assert d.exists()
