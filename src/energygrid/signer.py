"""Request signing for the EnergyGrid API.

signature = MD5(url_path + token + timestamp), hex encoded. The server
recomputes the same digest, so the algorithm and encoding must not change.
"""

from __future__ import annotations

import hashlib
import time


def current_timestamp() -> str:
    """Epoch milliseconds as a string, the form used in both header and digest."""
    return str(int(time.time() * 1000))


def generate_signature(url_path: str, token: str, timestamp: str) -> str:
    """Return the hex MD5 digest of path + token + timestamp."""
    digest = hashlib.md5(
        (url_path + token + timestamp).encode("utf-8"), usedforsecurity=False
    )
    return digest.hexdigest()
