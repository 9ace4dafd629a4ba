from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, Sequence

from PySide6.QtWidgets import QApplication

from bloomsplash.config import LauncherConfig
from bloomsplash.debug_log import configure_logging
from bloomsplash.environment import build_environment
from bloomsplash.resolve import (
    LaunchResolutionError,
    build_argument_vector,
    build_launch_context,
)
from bloomsplash.sentinel import SentinelError, create_marker, remove_marker

from bloomsplash_ui.process_supervisor import ProcessSupervisor, SpawnError
from bloomsplash_ui.quit_signals import QuitSignals
from bloomsplash_ui.splash_controller import SplashController
from bloomsplash_ui.splash_window import (
    SplashImageError,
    SplashWindow,
    default_splash_path,
    load_splash_pixmap,
)

log = logging.getLogger(__name__)


def _report(error: BaseException) -> None:
    sys.stderr.write(f"bloomsplash: {error}\n")
    log.error("%s", error)


def run_app(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Show the splash, start Bloom, and wait for it to come up.

    Returns 0 whenever the splash loop ran (Bloom ready, timeout, Bloom exited,
    window closed) and 1 for any setup failure.
    """

    argv = list(argv if argv is not None else sys.argv)
    environ = dict(os.environ if environ is None else environ)
    config = LauncherConfig.from_environ(environ)
    configure_logging(environ, config, ("bloomsplash", "bloomsplash_ui"))

    try:
        create_marker(config.sentinel_path)
    except SentinelError as e:
        _report(e)
        return 1

    # From here on the marker is ours and is removed on every exit path,
    # including SIGTERM/SIGINT, which end the loop instead of the process.
    quit_signals = QuitSignals()
    quit_signals.install()
    try:
        return _run_with_marker(argv, environ, config, quit_signals)
    except (SplashImageError, LaunchResolutionError, SpawnError) as e:
        _report(e)
        return 1
    finally:
        quit_signals.uninstall()
        remove_marker(config.sentinel_path)


def _run_with_marker(
    argv: list[str],
    environ: dict[str, str],
    config: LauncherConfig,
    quit_signals: QuitSignals,
) -> int:
    # Only argv[0]: the rest belongs to Bloom, and Qt would act on options such
    # as -style or -display.
    app = QApplication.instance() or QApplication(argv[:1])
    app.setApplicationName("Bloom")
    quit_signals.attach_event_loop()

    window = SplashWindow(
        load_splash_pixmap(default_splash_path()),
        width=config.splash_width,
        height=config.splash_height,
    )

    context = build_launch_context(argv, environ, config)
    child_argv = build_argument_vector(context.interpreter, context.payload, context.argv)
    child_env = build_environment(
        context.self_dir,
        environ,
        preconfigured_var=config.preconfigured_var,
    )

    supervisor = ProcessSupervisor()
    supervisor.spawn(child_argv, child_env)

    controller = SplashController(
        marker_path=config.sentinel_path,
        max_ticks=config.max_poll_ticks,
        interval_ms=config.poll_interval_ms,
    )
    supervisor.exited.connect(controller.on_child_exited)
    window.close_requested.connect(controller.on_close_requested)
    controller.finished.connect(lambda _reason: app.quit())
    quit_signals.received.connect(controller.on_close_requested)

    if quit_signals.pending is not None:
        # Asked to stop while setting up; Bloom is already on its way.
        controller.on_close_requested()
    else:
        window.center_on_screen()
        window.show()
        controller.start()
        app.exec()

    supervisor.release()
    window.hide()
    log.debug("Splash done: %s", controller.reason)
    return 0
