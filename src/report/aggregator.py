"""Reduce successful batch payloads into fleet-wide statistics."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def parse_power(value) -> float | None:
    """Numeric power in kW, or None if the reading is not a number.

    Strings may carry a unit suffix ("2.5 kW"); only the leading number counts.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return None
    match = _LEADING_NUMBER.match(value)
    if not match:
        return None
    return float(match.group(1))


@dataclass(frozen=True)
class AggregateReport:
    """Fleet summary, built once after every batch is resolved."""

    total_devices: int = 0
    online_devices: int = 0
    offline_devices: int = 0
    total_power_kw: float = 0.0
    devices: list[dict] = field(default_factory=list)

    @property
    def average_power_kw(self) -> float:
        if self.total_devices == 0:
            return 0.0
        return self.total_power_kw / self.total_devices

    @property
    def success_rate_percent(self) -> float:
        if self.total_devices == 0:
            return 0.0
        return self.online_devices / self.total_devices * 100

    def summary(self) -> dict:
        """Display values, rounded to two decimals."""
        return {
            "total_devices": self.total_devices,
            "online_devices": self.online_devices,
            "offline_devices": self.offline_devices,
            "total_power_kw": f"{self.total_power_kw:.2f}",
            "average_power_kw": f"{self.average_power_kw:.2f}",
            "success_rate": f"{self.success_rate_percent:.2f}%",
        }


def aggregate_results(successes: list[dict]) -> AggregateReport:
    """Count devices and sum power across successful payloads.

    Payloads without a `data` list contribute nothing. Records whose power
    is not numeric still count as devices.
    """
    total = online = 0
    total_power = 0.0
    devices: list[dict] = []

    for payload in successes:
        records = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(records, list):
            continue
        for device in records:
            total += 1
            devices.append(device)
            if not isinstance(device, dict):
                continue
            if device.get("status") == "Online":
                online += 1
            power = parse_power(device.get("power"))
            if power is not None:
                total_power += power

    return AggregateReport(
        total_devices=total,
        online_devices=online,
        offline_devices=total - online,
        total_power_kw=total_power,
        devices=devices,
    )
