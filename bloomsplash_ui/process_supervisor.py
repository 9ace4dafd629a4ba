from __future__ import annotations

import logging
import os
import subprocess
import threading
from typing import Mapping, Sequence

from PySide6.QtCore import QObject, QSocketNotifier, Qt, Signal

log = logging.getLogger(__name__)


class SpawnError(RuntimeError):
    pass


class ProcessSupervisor(QObject):
    """Owns the Bloom child process and reports its exit to the event loop.

    The child is started with `subprocess.Popen` rather than `QProcess`: Bloom must
    keep running after the splash exits, and `QProcess` kills its child on
    destruction. Exit is watched through a Linux pidfd, which becomes readable
    when the process terminates, so the notification arrives as an ordinary
    socket-notifier event instead of a poll.

    Where pidfds are unavailable (old kernel, seccomp) a daemon thread blocks in
    `Popen.wait()` and hands the result back through a queued signal.
    """

    exited = Signal(int)  # returncode; observed, never inspected
    _waited = Signal(int)  # from the waiter thread

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._process: subprocess.Popen | None = None
        self._pidfd: int | None = None
        self._notifier: QSocketNotifier | None = None
        self._waiter: threading.Thread | None = None
        self._exit_reported = False
        self._released = False
        self._waited.connect(self._report_exit, Qt.ConnectionType.QueuedConnection)

    @property
    def pid(self) -> int | None:
        return None if self._process is None else self._process.pid

    def has_exited(self) -> bool:
        return self._exit_reported

    def spawn(self, argv: Sequence[str], env: Mapping[str, str]) -> int:
        if self._process is not None:
            raise RuntimeError("Child already spawned")
        if not argv:
            raise SpawnError("empty argument vector")

        try:
            process = subprocess.Popen(list(argv), env=dict(env), close_fds=True)
        except OSError as e:
            raise SpawnError(f"cannot start {argv[0]}: {e.strerror or e}") from e

        # The child is running from here on; nothing below may fail the launch.
        self._process = process
        try:
            pidfd = os.pidfd_open(process.pid)
        except (AttributeError, OSError) as e:
            log.debug("No pidfd for %s (%s); waiting on a thread", process.pid, e)
            self._waiter = threading.Thread(
                target=self._wait_in_thread,
                args=(process,),
                name="bloomsplash-child-waiter",
                daemon=True,
            )
            self._waiter.start()
        else:
            self._pidfd = pidfd
            self._notifier = QSocketNotifier(pidfd, QSocketNotifier.Type.Read, self)
            self._notifier.activated.connect(self._on_pidfd_ready)

        log.debug("Spawned pid %s: %s", process.pid, list(argv))
        return process.pid

    def _wait_in_thread(self, process: subprocess.Popen) -> None:
        self._waited.emit(process.wait())

    def _on_pidfd_ready(self, *_args) -> None:
        if self._process is None:
            return
        self._close_pidfd()
        # The pidfd only becomes readable once the child is a zombie, so this
        # reaps without blocking.
        self._report_exit(self._process.wait())

    def _report_exit(self, returncode: int) -> None:
        if self._exit_reported or self._released:
            return
        self._exit_reported = True
        log.debug("Child %s exited with %s", self.pid, returncode)
        self.exited.emit(returncode)

    def _close_pidfd(self) -> None:
        if self._notifier is not None:
            self._notifier.setEnabled(False)
            self._notifier.deleteLater()
            self._notifier = None
        if self._pidfd is not None:
            os.close(self._pidfd)
            self._pidfd = None

    def release(self) -> None:
        """Stop watching the child without touching it.

        Bloom keeps running after the splash goes away. A waiter thread, if any,
        is a daemon and simply stays blocked until the launcher exits.
        """

        self._released = True
        self._close_pidfd()
