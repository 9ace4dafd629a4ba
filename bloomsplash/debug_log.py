from __future__ import annotations

import logging
from typing import Mapping, Sequence

from bloomsplash.config import LauncherConfig

_DEFAULT_LOGGERS = ("bloomsplash",)
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def is_truthy(value: str | None) -> bool:
    """`"1"` or anything starting with t/T/y/Y enables debugging."""

    if not value:
        return False
    value = value.strip()
    if value == "1":
        return True
    return value[:1].lower() in ("t", "y")


def configure_logging(
    environ: Mapping[str, str],
    config: LauncherConfig,
    logger_names: Sequence[str] = _DEFAULT_LOGGERS,
) -> logging.Handler:
    """Install the launcher's handler on the given package loggers.

    Returns the installed handler so callers (and tests) can close it.
    """

    handler: logging.Handler
    if is_truthy(environ.get(config.debug_var)):
        try:
            handler = logging.FileHandler(config.log_path, mode="w", encoding="utf-8")
        except OSError:
            # An unwritable log path must not stop the launch.
            handler = logging.NullHandler()
        else:
            handler.setFormatter(logging.Formatter(_FORMAT))
        level = logging.DEBUG
    else:
        handler = logging.NullHandler()
        level = logging.WARNING

    for name in logger_names:
        logger = logging.getLogger(name)
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False

    return handler
