"""Real EnergyGrid API client using signed JSON POSTs over httpx."""

from __future__ import annotations

import json
import logging

from energygrid.base import BaseGridClient, GridResponse, check_batch_size
from energygrid.errors import ParseError
from energygrid.signer import current_timestamp, generate_signature

log = logging.getLogger("grid-report.energygrid.client")


class GridClient(BaseGridClient):
    """Connects to the EnergyGrid device API.

    Every request carries a `signature` header computed from the URL path,
    the API token and a millisecond timestamp. The timestamp is taken per
    attempt, so a retried request is signed afresh.
    """

    def __init__(self, config: dict, transport=None):
        import httpx

        self._config = config
        self._path = config.get("grid_api_path", "/device/real/query")
        self._token = config.get("grid_api_token", "")
        self._client = httpx.Client(
            base_url=config.get("grid_api_url", "http://localhost:3000"),
            timeout=float(config.get("grid_timeout", 10.0)),
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    def _signed_headers(self) -> dict:
        timestamp = current_timestamp()
        return {
            "signature": generate_signature(self._path, self._token, timestamp),
            "timestamp": timestamp,
        }

    def fetch_devices(self, serial_numbers: list[str]) -> GridResponse:
        """Raises ParseError when a response body cannot be decoded."""
        import httpx

        check_batch_size(serial_numbers)
        payload = json.dumps({"sn_list": list(serial_numbers)})
        try:
            resp = self._client.post(
                self._path, content=payload, headers=self._signed_headers(),
            )
        except httpx.TransportError as e:
            log.debug("Transport error posting to %s", self._path, exc_info=True)
            return GridResponse(status_code=None, error=str(e) or e.__class__.__name__)
        except httpx.DecodingError as e:
            raise ParseError(f"Failed to decode response body: {e}") from e
        return GridResponse(status_code=resp.status_code, body=resp.text)

    def close(self) -> None:
        self._client.close()
