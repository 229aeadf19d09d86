"""Failure taxonomy for EnergyGrid API calls."""

from __future__ import annotations


class GridError(Exception):
    """Base class for every per-batch failure."""


class ValidationError(GridError):
    """Request rejected locally before any network call (e.g. batch too large)."""


class ParseError(GridError):
    """HTTP 200 with a body that is not a JSON object."""


class AuthenticationError(GridError):
    """HTTP 401. Signature or token problems are never retried."""


class RateLimitExceeded(GridError):
    """HTTP 429 still returned after the retry budget was spent."""


class ServerError(GridError):
    """HTTP 5xx still returned after the retry budget was spent."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(GridError):
    """Transport-level failure still occurring after the retry budget was spent."""


class UnexpectedStatus(GridError):
    """Any status code without a dedicated policy."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class Cancelled(GridError):
    """A stop was requested while waiting for a rate slot or a retry delay.

    attempted is False when the batch never reached the network.
    """

    def __init__(self, message: str, attempted: bool = False):
        super().__init__(message)
        self.attempted = attempted
