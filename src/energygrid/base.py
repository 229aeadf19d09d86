"""Abstract base class for EnergyGrid API clients."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from energygrid.errors import ValidationError

# The API rejects requests naming more serial numbers than this.
MAX_BATCH_SIZE = 10


class Outcome(Enum):
    """Classification of a single request attempt."""

    SUCCESS = "success"
    RATE_LIMITED = "rate_limited"
    AUTH_FAILURE = "auth_failure"
    SERVER_ERROR = "server_error"
    NETWORK_ERROR = "network_error"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class GridResponse:
    """Result of one POST attempt.

    status_code is None when the request never produced an HTTP response;
    error then holds the transport-level message.
    """

    status_code: int | None
    body: str = ""
    error: str | None = None

    @property
    def outcome(self) -> Outcome:
        code = self.status_code
        if code is None:
            return Outcome.NETWORK_ERROR
        if code == 200:
            return Outcome.SUCCESS
        if code == 429:
            return Outcome.RATE_LIMITED
        if code == 401:
            return Outcome.AUTH_FAILURE
        if code >= 500:
            return Outcome.SERVER_ERROR
        return Outcome.UNEXPECTED

    def json(self) -> dict:
        """Parse the body as a JSON object.

        Raises:
            ValueError: body is not valid JSON or not an object.
        """
        data = json.loads(self.body)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return data


class BaseGridClient(ABC):
    """Common interface for mock and real EnergyGrid clients."""

    @abstractmethod
    def fetch_devices(self, serial_numbers: list[str]) -> GridResponse:
        """Perform one request for real-time data of the given devices.

        Args:
            serial_numbers: At most MAX_BATCH_SIZE device serial numbers.

        Returns:
            GridResponse for this single attempt. Never retries.

        Raises:
            ValidationError: more than MAX_BATCH_SIZE serial numbers.
        """
        ...

    def close(self) -> None:
        """Clean up resources. Override if needed."""
        pass


def check_batch_size(serial_numbers: list[str]) -> None:
    """Reject oversize batches before anything touches the network."""
    if len(serial_numbers) > MAX_BATCH_SIZE:
        raise ValidationError(
            f"Batch size cannot exceed {MAX_BATCH_SIZE} devices "
            f"(got {len(serial_numbers)})"
        )
