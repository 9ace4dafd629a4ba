"""Sentinel marker lifecycle.

The launcher creates the marker before anything else; Bloom deletes it once its
main window is up, which is the readiness signal the splash poll watches for.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)


class SentinelError(OSError):
    pass


def create_marker(path: Path) -> None:
    """Create `path` exclusively.

    Any failure (the file already exists, the directory is unwritable, ...) means
    this launcher cannot proceed. An existing marker usually means another
    launcher is still waiting for Bloom.
    """

    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o644)
    except FileExistsError as e:
        raise SentinelError(
            f"marker {path} already exists (is another instance starting?)"
        ) from e
    except OSError as e:
        raise SentinelError(f"cannot create marker {path}: {e.strerror or e}") from e

    os.close(fd)
    log.debug("Created marker %s", path)


def remove_marker(path: Path) -> None:
    """Best-effort delete; the payload may already have removed it."""

    try:
        os.unlink(path)
    except FileNotFoundError:
        log.debug("Marker %s already gone", path)
        return
    except OSError as e:
        log.debug("Could not remove marker %s: %s", path, e)
        return

    log.debug("Removed marker %s", path)


def marker_present(path: Path) -> bool:
    return os.path.lexists(path)
