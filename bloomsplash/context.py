from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from bloomsplash.config import LauncherConfig


@dataclass(frozen=True)
class LaunchContext:
    """Everything resolved once at startup and handed to each component."""

    self_dir: Path
    interpreter: Path
    payload: Path
    argv: tuple[str, ...]
    config: LauncherConfig
