from __future__ import annotations

import functools
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Sequence

from bloomsplash.config import LauncherConfig
from bloomsplash.context import LaunchContext

log = logging.getLogger(__name__)


class LaunchResolutionError(RuntimeError):
    pass


def resolve_self_directory(argv0: str | None = None, *, frozen: bool | None = None) -> Path:
    """Absolute directory holding the running launcher.

    A bundled (frozen) build is its own executable; a source run is the script
    named by argv[0].
    """

    if frozen is None:
        frozen = bool(getattr(sys, "frozen", False))

    if frozen:
        exe = sys.executable
    else:
        exe = argv0 if argv0 is not None else (sys.argv[0] if sys.argv else "")

    if not exe:
        raise LaunchResolutionError("cannot determine the launcher's own path")

    try:
        return Path(exe).resolve().parent
    except (OSError, RuntimeError) as e:
        raise LaunchResolutionError(f"cannot resolve launcher path {exe!r}: {e}") from e


def resolve_interpreter(environ: Mapping[str, str], config: LauncherConfig) -> Path:
    """Pick the Mono install to run Bloom with.

    Flatpak sandbox first, then the SIL-packaged mono, then the system one.
    """

    return _locate_interpreter(environ.get(config.flatpak_id_var, ""), config)


@functools.lru_cache(maxsize=None)
def _locate_interpreter(flatpak_id: str, config: LauncherConfig) -> Path:
    if flatpak_id.startswith(config.flatpak_id_prefix):
        chosen = config.flatpak_interpreter
    elif config.vendor_interpreter.exists():
        chosen = config.vendor_interpreter
    else:
        chosen = config.system_interpreter
    log.debug("Interpreter: %s (FLATPAK_ID=%r)", chosen, flatpak_id)
    return chosen


def resolve_payload(self_dir: Path, config: LauncherConfig) -> Path:
    payload = self_dir / config.payload_name
    if not payload.is_file() or not os.access(payload, os.R_OK | os.X_OK):
        raise LaunchResolutionError(f"{payload} is missing or not readable and executable")
    return payload


def build_argument_vector(
    interpreter: Path, payload: Path, argv: Sequence[str]
) -> tuple[str, ...]:
    """`[interpreter, payload, *argv[1:]]`; our own arguments are forwarded verbatim."""

    return (str(interpreter), str(payload), *argv[1:])


def build_launch_context(
    argv: Sequence[str],
    environ: Mapping[str, str],
    config: LauncherConfig,
    *,
    self_dir: Path | None = None,
) -> LaunchContext:
    if self_dir is None:
        self_dir = resolve_self_directory(argv[0] if argv else None)
    payload = resolve_payload(self_dir, config)
    interpreter = resolve_interpreter(environ, config)
    return LaunchContext(
        self_dir=self_dir,
        interpreter=interpreter,
        payload=payload,
        argv=tuple(argv),
        config=config,
    )
