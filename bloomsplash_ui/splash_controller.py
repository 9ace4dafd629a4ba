from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from bloomsplash.events import LoopEvent, PollDecision, TerminationReason, should_terminate
from bloomsplash.sentinel import marker_present

log = logging.getLogger(__name__)


class SplashController(QObject):
    """Drives the splash from Running to Terminating.

    Each event source (poll timer, child exit, window close) is turned into a
    `LoopEvent` and decided by `should_terminate`. The first terminating event
    wins; anything after it is ignored.
    """

    finished = Signal(object)  # TerminationReason

    def __init__(
        self,
        *,
        marker_path: Path,
        max_ticks: int,
        interval_ms: int,
        marker_check: Callable[[Path], bool] = marker_present,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._marker_path = marker_path
        self._max_ticks = max_ticks
        self._marker_check = marker_check
        self._ticks = 0
        self._reason: TerminationReason | None = None

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_tick)

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def reason(self) -> TerminationReason | None:
        return self._reason

    def is_running(self) -> bool:
        return self._timer.isActive() and self._reason is None

    def start(self) -> None:
        if self._reason is None:
            self._timer.start()

    def dispatch(self, event: LoopEvent) -> PollDecision | None:
        if self._reason is not None:
            return None

        present = self._marker_check(self._marker_path) if event == LoopEvent.TIMER_TICK else True
        decision = should_terminate(
            event,
            ticks=self._ticks,
            marker_present=present,
            max_ticks=self._max_ticks,
        )
        self._ticks = decision.ticks

        if decision.reason is not None:
            self._timer.stop()
            self._reason = decision.reason
            log.debug("Splash finished after %d ticks: %s", self._ticks, decision.reason.value)
            self.finished.emit(decision.reason)
        return decision

    @Slot()
    def _on_tick(self) -> None:
        self.dispatch(LoopEvent.TIMER_TICK)

    def on_child_exited(self, *_args) -> None:
        # "Bloom died early": not an error for the launcher.
        self.dispatch(LoopEvent.CHILD_EXITED)

    @Slot()
    def on_close_requested(self) -> None:
        self.dispatch(LoopEvent.CLOSE_REQUESTED)
