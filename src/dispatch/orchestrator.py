"""Drives device batches through the rate gate and retrying dispatcher."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Sequence

from dispatch.rate_gate import RateGate
from dispatch.retry import RetryingDispatcher
from energygrid.base import BaseGridClient
from energygrid.devices import make_batches
from energygrid.errors import Cancelled, GridError

log = logging.getLogger("grid-report.dispatch.orchestrator")


@dataclass(frozen=True)
class BatchFailure:
    """A batch that failed terminally. batch_index is 1-based."""

    batch_index: int
    serial_numbers: tuple[str, ...]
    error: str


@dataclass
class RunResult:
    """Outcome of one pass over a set of batches."""

    successes: list[dict] = field(default_factory=list)
    failures: list[BatchFailure] = field(default_factory=list)
    batches_total: int = 0
    cancelled: bool = False

    @property
    def batches_successful(self) -> int:
        return len(self.successes)

    @property
    def batches_failed(self) -> int:
        return len(self.failures)

    @property
    def batches_processed(self) -> int:
        return self.batches_successful + self.batches_failed


class BatchOrchestrator:
    """Resolves every batch, in order, to exactly one success or failure.

    A batch is only built after the previous one has been resolved. A
    terminal failure is recorded and the run moves on to the next batch.
    """

    def __init__(
        self,
        client: BaseGridClient,
        gate: RateGate,
        dispatcher: RetryingDispatcher,
        batch_size: int = 10,
        stop_event: threading.Event | None = None,
    ):
        self._client = client
        self._gate = gate
        self._dispatcher = dispatcher
        self._batch_size = batch_size
        self._stop_event = stop_event or threading.Event()

    def run(self, serial_numbers: Sequence[str]) -> RunResult:
        """Fetch all serial numbers in batches of batch_size."""
        batches = make_batches(serial_numbers, self._batch_size)
        log.info(
            "Created %d batches (%d devices per batch)", len(batches), self._batch_size
        )
        return self._drive(list(enumerate(batches, start=1)))

    def redrive(self, failures: Sequence[BatchFailure]) -> RunResult:
        """Re-attempt only the given failed batches, keeping their indices."""
        log.info("Re-driving %d failed batches", len(failures))
        return self._drive([(f.batch_index, list(f.serial_numbers)) for f in failures])

    def _drive(self, batches: list[tuple[int, list[str]]]) -> RunResult:
        result = RunResult(batches_total=len(batches))
        last_index = max((index for index, _ in batches), default=0)

        for index, batch in batches:
            if self._stop_event.is_set():
                log.warning(
                    "Stop requested; %d of %d batches resolved",
                    result.batches_processed, result.batches_total,
                )
                result.cancelled = True
                break

            log.info("[Batch %d/%d] Fetching %d devices...", index, last_index, len(batch))
            try:
                payload = self._gate.admit(self._work_item(batch))
            except Cancelled as e:
                result.cancelled = True
                if not e.attempted:
                    log.warning("Stop requested before batch %d was sent", index)
                    break
                log.error("Batch %d interrupted: %s", index, e)
                result.failures.append(
                    BatchFailure(batch_index=index, serial_numbers=tuple(batch), error=str(e))
                )
                break
            except GridError as e:
                log.error("Error in batch %d: %s", index, e)
                result.failures.append(
                    BatchFailure(batch_index=index, serial_numbers=tuple(batch), error=str(e))
                )
                continue

            result.successes.append(payload)
            devices = payload.get("data")
            log.info(
                "[Batch %d/%d] Received data for %d devices",
                index, last_index, len(devices) if isinstance(devices, list) else 0,
            )

        return result

    def _work_item(self, batch: list[str]):
        return lambda: self._dispatcher.call(lambda: self._client.fetch_devices(batch))
