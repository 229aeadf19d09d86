"""Grid Report - fetch EnergyGrid device telemetry and summarise it."""

import logging
import logging.handlers
import signal
import sys
import threading
from pathlib import Path

from config import load_config
from dispatch import BatchOrchestrator, RateGate, RetryingDispatcher, RunResult
from energygrid import get_grid_client
from energygrid.devices import generate_serial_numbers
from report.aggregator import AggregateReport, aggregate_results
from report.summary import format_summary

log = logging.getLogger("grid-report")


def setup_logging(config: dict) -> None:
    """Configure root logger with console and rotating file handlers."""
    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    level = getattr(logging, config["log_level"].upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    console = logging.StreamHandler()
    console.setFormatter(fmt)
    root.addHandler(console)

    # Rotating file handler
    log_dir = Path(config["log_dir"])
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / "grid-report.log",
        maxBytes=1_000_000,
        backupCount=3,
    )
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)


def run(config: dict, stop_event: threading.Event) -> tuple[RunResult, AggregateReport]:
    """Fetch every device once and aggregate whatever succeeded."""
    serial_numbers = generate_serial_numbers(config.get("grid_device_count", 500))
    log.info("Generated %d serial numbers", len(serial_numbers))

    client = get_grid_client(config)
    gate = RateGate(config.get("grid_requests_per_second", 1.0), stop_event=stop_event)
    dispatcher = RetryingDispatcher.from_config(config, stop_event=stop_event)
    orchestrator = BatchOrchestrator(
        client, gate, dispatcher,
        batch_size=config.get("grid_batch_size", 10),
        stop_event=stop_event,
    )

    try:
        result = orchestrator.run(serial_numbers)
    finally:
        client.close()

    log.info("Aggregating results from %d batches", result.batches_successful)
    return result, aggregate_results(result.successes)


def main() -> int:
    """Run once and map the outcome to a process exit code."""
    config = load_config()
    setup_logging(config)
    log.info("Starting EnergyGrid data aggregation (%s mode)", config["grid_mode"])

    stop_event = threading.Event()

    def shutdown(signum, frame):
        log.info("Shutting down...")
        stop_event.set()

    previous = {
        sig: signal.signal(sig, shutdown) for sig in (signal.SIGTERM, signal.SIGINT)
    }
    try:
        result, report = run(config, stop_event)
    except Exception:
        log.exception("Fatal error during aggregation")
        return 1
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    print(format_summary(report, result))
    log.info("Aggregation completed.")
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
