from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping


SENTINEL_PATH = Path("/tmp/BloomLaunching.now")
PAYLOAD_NAME = "Bloom.exe"

FLATPAK_ID_VAR = "FLATPAK_ID"
FLATPAK_ID_PREFIX = "org.sil.Bloom"
FLATPAK_INTERPRETER = Path("/app/bin/mono")
VENDOR_INTERPRETER = Path("/opt/mono5-sil/bin/mono")
SYSTEM_INTERPRETER = Path("/usr/bin/mono")

# Set by the Bloom wrapper script once it has sourced its environ file.
PRECONFIGURED_VAR = "MONO_ENVIRON"

DEBUG_VAR = "BLOOM_SPLASH_DEBUG"
LOG_PATH = Path("/tmp/BloomSplash.log")

POLL_INTERVAL_MS = 1000
MAX_POLL_TICKS = 60

SPLASH_WIDTH = 400
SPLASH_HEIGHT = 300

# Optional overrides, mostly useful for packaging smoke tests.
SENTINEL_OVERRIDE_VAR = "BLOOM_SPLASH_SENTINEL"
TIMEOUT_OVERRIDE_VAR = "BLOOM_SPLASH_TIMEOUT"
LOG_OVERRIDE_VAR = "BLOOM_SPLASH_LOG"


@dataclass(frozen=True)
class LauncherConfig:
    sentinel_path: Path = SENTINEL_PATH
    payload_name: str = PAYLOAD_NAME
    flatpak_id_var: str = FLATPAK_ID_VAR
    flatpak_id_prefix: str = FLATPAK_ID_PREFIX
    flatpak_interpreter: Path = FLATPAK_INTERPRETER
    vendor_interpreter: Path = VENDOR_INTERPRETER
    system_interpreter: Path = SYSTEM_INTERPRETER
    preconfigured_var: str = PRECONFIGURED_VAR
    debug_var: str = DEBUG_VAR
    log_path: Path = LOG_PATH
    poll_interval_ms: int = POLL_INTERVAL_MS
    max_poll_ticks: int = MAX_POLL_TICKS
    splash_width: int = SPLASH_WIDTH
    splash_height: int = SPLASH_HEIGHT

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "LauncherConfig":
        cfg = cls()

        sentinel = environ.get(SENTINEL_OVERRIDE_VAR, "").strip()
        if sentinel:
            cfg = replace(cfg, sentinel_path=Path(sentinel))

        log_path = environ.get(LOG_OVERRIDE_VAR, "").strip()
        if log_path:
            cfg = replace(cfg, log_path=Path(log_path))

        timeout = environ.get(TIMEOUT_OVERRIDE_VAR, "").strip()
        if timeout:
            try:
                ticks = int(timeout)
            except ValueError:
                ticks = 0
            # Non-numeric or non-positive values keep the default ceiling.
            if ticks > 0:
                cfg = replace(cfg, max_poll_ticks=ticks)

        return cfg
