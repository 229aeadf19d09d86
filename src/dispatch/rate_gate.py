"""Single-slot gate admitting at most one unit of work per interval."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, TypeVar

from energygrid.errors import Cancelled

log = logging.getLogger("grid-report.dispatch.gate")

T = TypeVar("T")


class RateGate:
    """Strict sequential gate: one work item in flight, starts spaced by min_interval.

    Callers are served in arrival order. The interval is measured from the
    start of one admission to the start of the next, so a slow work item
    neither shortens nor lengthens the floor for its successor. The first
    admission runs immediately.

    clock must advance: waits sleep on the stop event for the remaining
    clock time, then re-read the clock.
    """

    def __init__(
        self,
        requests_per_second: float = 1.0,
        stop_event: threading.Event | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if requests_per_second <= 0:
            raise ValueError(
                f"requests_per_second must be positive, got {requests_per_second}"
            )
        self._min_interval = 1.0 / requests_per_second
        self._stop_event = stop_event or threading.Event()
        self._clock = clock
        self._cond = threading.Condition()
        self._next_ticket = 0
        self._now_serving = 0
        self._last_admission: float | None = None

    @property
    def min_interval(self) -> float:
        return self._min_interval

    @property
    def last_admission(self) -> float | None:
        return self._last_admission

    def admit(self, work: Callable[[], T]) -> T:
        """Run work once its turn and its slot arrive, and return its result.

        Exceptions from work propagate to the caller unchanged.

        Raises:
            Cancelled: the stop event was set before work could start.
        """
        with self._cond:
            ticket = self._next_ticket
            self._next_ticket += 1
            while ticket != self._now_serving:
                self._cond.wait()

        try:
            self._wait_for_slot()
            self._last_admission = self._clock()
            return work()
        finally:
            with self._cond:
                self._now_serving += 1
                self._cond.notify_all()

    def _wait_for_slot(self) -> None:
        if self._stop_event.is_set():
            raise Cancelled("Stopped before admission")
        if self._last_admission is None:
            return

        deadline = self._last_admission + self._min_interval
        remaining = deadline - self._clock()
        if remaining > 0:
            log.debug("Rate gate holding for %.3fs", remaining)
        while remaining > 0:
            if self._stop_event.wait(timeout=remaining):
                raise Cancelled("Stopped while waiting for a rate slot")
            remaining = deadline - self._clock()
