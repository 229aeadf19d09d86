"""Device population and request batching."""

from __future__ import annotations

from typing import Sequence


def generate_serial_numbers(count: int = 500) -> list[str]:
    """Serial numbers SN-000 .. SN-{count-1}, zero padded to three digits."""
    return [f"SN-{i:03d}" for i in range(count)]


def make_batches(items: Sequence[str], batch_size: int) -> list[list[str]]:
    """Split items into consecutive chunks of at most batch_size, in order."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    return [list(items[i:i + batch_size]) for i in range(0, len(items), batch_size)]
