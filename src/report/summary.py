"""Plain-text rendering of a finished run."""

from __future__ import annotations

from dispatch.orchestrator import RunResult
from report.aggregator import AggregateReport

_RULE = "=" * 60


def format_summary(report: AggregateReport, result: RunResult) -> str:
    s = report.summary()
    lines = [
        _RULE,
        "AGGREGATION SUMMARY",
        _RULE,
        f"Total Devices Processed: {s['total_devices']}",
        f"Online Devices: {s['online_devices']}",
        f"Offline Devices: {s['offline_devices']}",
        f"Total Power: {s['total_power_kw']} kW",
        f"Average Power per Device: {s['average_power_kw']} kW",
        f"Success Rate: {s['success_rate']}",
        f"Batches: {result.batches_successful} succeeded, "
        f"{result.batches_failed} failed, {result.batches_total} total",
        _RULE,
    ]
    if result.cancelled:
        lines.append("Run stopped early; results are partial.")
    if result.failures:
        lines.append(f"{len(result.failures)} batch(es) failed:")
        for failure in result.failures:
            sn = failure.serial_numbers
            span = f"{sn[0]}..{sn[-1]}" if sn else "no devices"
            lines.append(f"  Batch {failure.batch_index} ({span}): {failure.error}")
    return "\n".join(lines)
