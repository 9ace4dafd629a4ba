from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from bloomsplash.config import PRECONFIGURED_VAR

log = logging.getLogger(__name__)

PRELOAD_LIBRARY = "libgdiplus.so.0"

# Where Mono looks for Bloom's assemblies and its bundled GAC. Both are rooted
# at the launcher's own directory, next to Bloom.exe.
RUNTIME_ROOT_VARS = ("MONO_PATH", "MONO_GAC_PREFIX")

# Runtime settings Bloom expects regardless of install location.
FIXED_SETTINGS: dict[str, str] = {
    "MONO_ENABLE_SHM": "1",
    "MONO_WINFORMS_XIM_STYLE": "disabled",
    "MONO_TRACE_LISTENER": "Console.Out",
    "MONO_DEBUG": "explicit-null-checks",
}


def prepend_search_path(head: list[str], existing: str | None) -> str:
    """Join `head` in front of an os.pathsep-separated list.

    Empty entries are dropped so the result never has doubled separators (an
    empty entry means "current directory" to the loader).
    """

    parts = [p for p in head if p]
    if existing:
        parts.extend(p for p in existing.split(os.pathsep) if p)
    return os.pathsep.join(parts)


def build_environment(
    self_dir: Path,
    current_env: Mapping[str, str],
    *,
    preconfigured_var: str = PRECONFIGURED_VAR,
) -> dict[str, str]:
    env = dict(current_env)

    if env.get(preconfigured_var):
        log.debug("%s is set; passing the environment through", preconfigured_var)
        return env

    base = str(self_dir)

    env["LD_PRELOAD"] = str(self_dir / PRELOAD_LIBRARY)
    env["LD_LIBRARY_PATH"] = prepend_search_path(
        [base, str(self_dir / "lib")],
        current_env.get("LD_LIBRARY_PATH"),
    )
    for name in RUNTIME_ROOT_VARS:
        env[name] = base
    env["MONO_REGISTRY_PATH"] = str(self_dir / "registry")
    env.update(FIXED_SETTINGS)
    env["PATH"] = prepend_search_path([base], current_env.get("PATH"))

    log.debug("Child environment prepared for %s", base)
    return env
