from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LoopEvent(str, Enum):
    TIMER_TICK = "timer_tick"
    CHILD_EXITED = "child_exited"
    CLOSE_REQUESTED = "close_requested"


class TerminationReason(str, Enum):
    READY = "ready"  # payload deleted the marker
    TIMED_OUT = "timed_out"
    CHILD_EXITED = "child_exited"
    CLOSED = "closed"


@dataclass(frozen=True)
class PollDecision:
    ticks: int
    reason: TerminationReason | None

    @property
    def terminate(self) -> bool:
        return self.reason is not None


def should_terminate(
    event: LoopEvent,
    *,
    ticks: int,
    marker_present: bool,
    max_ticks: int,
) -> PollDecision:
    """Decide what one loop event does to the splash.

    `ticks` is the poll counter before the event; the returned decision carries
    the updated counter. Only timer ticks advance it.
    """

    if event == LoopEvent.CLOSE_REQUESTED:
        return PollDecision(ticks=ticks, reason=TerminationReason.CLOSED)
    if event == LoopEvent.CHILD_EXITED:
        return PollDecision(ticks=ticks, reason=TerminationReason.CHILD_EXITED)
    if event != LoopEvent.TIMER_TICK:
        raise AssertionError(f"Unhandled loop event: {event}")

    ticks += 1
    if ticks >= max_ticks:
        return PollDecision(ticks=ticks, reason=TerminationReason.TIMED_OUT)
    if not marker_present:
        return PollDecision(ticks=ticks, reason=TerminationReason.READY)
    return PollDecision(ticks=ticks, reason=None)
