"""Per-call retry policy keyed by failure class."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from energygrid.base import GridResponse, Outcome
from energygrid.errors import (
    AuthenticationError,
    Cancelled,
    GridError,
    NetworkError,
    ParseError,
    RateLimitExceeded,
    ServerError,
    UnexpectedStatus,
)

log = logging.getLogger("grid-report.dispatch.retry")


class FailureClass(Enum):
    RATE_LIMITED = "rate_limited"
    AUTH_FAILURE = "auth_failure"
    SERVER_ERROR = "server_error"
    NETWORK_ERROR = "network_error"
    UNCLASSIFIED = "unclassified"


_FAILURE_CLASSES = {
    Outcome.RATE_LIMITED: FailureClass.RATE_LIMITED,
    Outcome.AUTH_FAILURE: FailureClass.AUTH_FAILURE,
    Outcome.SERVER_ERROR: FailureClass.SERVER_ERROR,
    Outcome.NETWORK_ERROR: FailureClass.NETWORK_ERROR,
    Outcome.UNEXPECTED: FailureClass.UNCLASSIFIED,
}


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed delay before re-attempting a retryable failure class."""

    delay: float


def default_policies(config: dict) -> dict[FailureClass, RetryPolicy]:
    """Retryable classes and their delays. Classes not listed are terminal."""
    retry_delay = float(config.get("grid_retry_delay", 1.0))
    return {
        FailureClass.RATE_LIMITED: RetryPolicy(
            delay=float(config.get("grid_rate_limit_delay", 1.5))
        ),
        FailureClass.SERVER_ERROR: RetryPolicy(delay=retry_delay),
        FailureClass.NETWORK_ERROR: RetryPolicy(delay=retry_delay),
    }


def _describe(response: GridResponse) -> str:
    if response.status_code is None:
        return f"network error: {response.error}"
    return f"HTTP {response.status_code}"


def _failure_error(failure: FailureClass, response: GridResponse, retried: int) -> GridError:
    """Build the terminal error for a failed attempt."""
    status = response.status_code
    if failure is FailureClass.AUTH_FAILURE:
        return AuthenticationError(f"Authentication failed. Status: {status}")
    if failure is FailureClass.RATE_LIMITED:
        return RateLimitExceeded(
            f"Rate limit exceeded after {retried} retries. Status: {status}"
        )
    if failure is FailureClass.SERVER_ERROR:
        return ServerError(
            f"Server error after {retried} retries. Status: {status}",
            status_code=status,
        )
    if failure is FailureClass.NETWORK_ERROR:
        return NetworkError(f"Network error after {retried} retries: {response.error}")
    return UnexpectedStatus(
        f"Request failed. Status: {status}, Response: {response.body}",
        status_code=status,
        body=response.body,
    )


class RetryingDispatcher:
    """Runs one request function under a bounded, per-call retry budget.

    Retries call request_fn again, so each attempt carries a fresh
    timestamp and signature. They do not go back through the
    rate gate: a retry continues the slot the call was admitted in.
    """

    def __init__(
        self,
        max_retries: int = 3,
        policies: dict[FailureClass, RetryPolicy] | None = None,
        stop_event: threading.Event | None = None,
    ):
        if max_retries < 0:
            raise ValueError(f"max_retries must be non-negative, got {max_retries}")
        self._max_retries = max_retries
        self._policies = policies if policies is not None else default_policies({})
        self._stop_event = stop_event or threading.Event()

    @classmethod
    def from_config(
        cls, config: dict, stop_event: threading.Event | None = None,
    ) -> RetryingDispatcher:
        return cls(
            max_retries=int(config.get("grid_max_retries", 3)),
            policies=default_policies(config),
            stop_event=stop_event,
        )

    def call(self, request_fn: Callable[[], GridResponse]) -> dict:
        """Return the parsed payload of the first successful attempt.

        Raises:
            ParseError, AuthenticationError, UnexpectedStatus: terminal outcomes.
            RateLimitExceeded, ServerError, NetworkError: retry budget spent.
            Cancelled: stop requested during a retry delay.
        """
        attempts_remaining = self._max_retries
        while True:
            response = request_fn()
            outcome = response.outcome

            if outcome is Outcome.SUCCESS:
                try:
                    return response.json()
                except ValueError as e:
                    raise ParseError(f"Failed to parse response: {e}") from e

            failure = _FAILURE_CLASSES[outcome]
            policy = self._policies.get(failure)
            retried = self._max_retries - attempts_remaining
            if policy is None or attempts_remaining == 0:
                raise _failure_error(failure, response, retried)

            log.warning(
                "[%s] %s. Retrying in %.1fs... (%d retries left)",
                failure.value, _describe(response), policy.delay, attempts_remaining,
            )
            attempts_remaining -= 1
            if self._stop_event.wait(timeout=policy.delay):
                raise Cancelled(
                    f"Stopped while waiting to retry after {_describe(response)}",
                    attempted=True,
                )
