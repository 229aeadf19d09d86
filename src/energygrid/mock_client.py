"""Mock EnergyGrid client for local development."""

import json
import logging
import random
from datetime import datetime, timezone

from energygrid.base import BaseGridClient, GridResponse, check_batch_size

log = logging.getLogger("grid-report.energygrid.mock")


class MockGridClient(BaseGridClient):
    """Returns canned device telemetry without touching the network.

    Readings are seeded per serial number so repeated runs agree.
    A non-zero grid_mock_error_rate makes some attempts answer 429 or 503.
    """

    def __init__(self, config: dict):
        self._config = config
        self._error_rate = float(config.get("grid_mock_error_rate", 0.0))
        self._rng = random.Random(config.get("grid_mock_seed"))

    def _device(self, serial: str) -> dict:
        rng = random.Random(serial)
        online = rng.random() < 0.85
        power = rng.uniform(0.5, 5.0) if online else 0.0
        return {
            "sn": serial,
            "status": "Online" if online else "Offline",
            "power": f"{power:.2f} kW",
            "last_updated": datetime.now(timezone.utc).isoformat(),
        }

    def fetch_devices(self, serial_numbers: list[str]) -> GridResponse:
        check_batch_size(serial_numbers)
        if self._error_rate and self._rng.random() < self._error_rate:
            status = self._rng.choice((429, 503))
            log.info("Mock: injecting HTTP %d", status)
            return GridResponse(status_code=status, body='{"error": "injected"}')

        log.debug("Mock: returning canned data for %d devices", len(serial_numbers))
        body = {"data": [self._device(sn) for sn in serial_numbers]}
        return GridResponse(status_code=200, body=json.dumps(body))
