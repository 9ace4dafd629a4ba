from __future__ import annotations

import logging
import signal
import socket
from typing import Iterable

from PySide6.QtCore import QObject, QSocketNotifier, Signal

log = logging.getLogger(__name__)


class QuitSignals(QObject):
    """Turns SIGTERM/SIGINT into a Qt signal so the splash can shut down cleanly.

    Python only runs signal handlers between bytecodes, and a blocked
    `app.exec()` runs none. `signal.set_wakeup_fd` makes the C-level handler
    write to a socket; the notifier on the other end wakes the event loop,
    which gives Python the chance to run `_on_signal`.

    A signal that arrives before anything is connected is kept in `pending`.
    """

    received = Signal(int)  # signum

    def __init__(
        self,
        signums: Iterable[int] = (signal.SIGTERM, signal.SIGINT),
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._signums = tuple(signums)
        self._pending: int | None = None
        self._previous_handlers: dict[int, object] = {}
        self._previous_wakeup_fd: int | None = None
        self._rsock: socket.socket | None = None
        self._wsock: socket.socket | None = None
        self._notifier: QSocketNotifier | None = None

    @property
    def pending(self) -> int | None:
        return self._pending

    def install(self) -> None:
        """Replace the handlers. Must run on the main thread."""

        for signum in self._signums:
            self._previous_handlers[signum] = signal.signal(signum, self._on_signal)

    def attach_event_loop(self) -> None:
        """Wake the Qt event loop on signal delivery.

        Needs a QCoreApplication, so it is separate from `install`.
        """

        if self._notifier is not None:
            return
        rsock, wsock = socket.socketpair()
        rsock.setblocking(False)
        wsock.setblocking(False)
        self._previous_wakeup_fd = signal.set_wakeup_fd(wsock.fileno())
        self._rsock, self._wsock = rsock, wsock

        self._notifier = QSocketNotifier(rsock.fileno(), QSocketNotifier.Type.Read, self)
        self._notifier.activated.connect(self._drain)

    def uninstall(self) -> None:
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler)
        self._previous_handlers.clear()

        if self._notifier is not None:
            self._notifier.setEnabled(False)
            self._notifier.deleteLater()
            self._notifier = None
        if self._wsock is not None:
            signal.set_wakeup_fd(
                -1 if self._previous_wakeup_fd is None else self._previous_wakeup_fd
            )
            self._previous_wakeup_fd = None
        for sock in (self._rsock, self._wsock):
            if sock is not None:
                sock.close()
        self._rsock = self._wsock = None

    def _on_signal(self, signum: int, _frame) -> None:
        if self._pending is None:
            self._pending = signum
        log.debug("Received signal %s", signum)
        self.received.emit(signum)

    def _drain(self, *_args) -> None:
        # The bytes are only a wake-up; `_on_signal` carries the signal itself.
        if self._rsock is None:
            return
        try:
            while self._rsock.recv(64):
                pass
        except (BlockingIOError, InterruptedError):
            pass
