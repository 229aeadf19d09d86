"""Tests for the entry point: full mock run and exit codes."""

import logging
import signal
import sys
import threading
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import config as config_mod  # noqa: E402
import main as main_mod  # noqa: E402
from main import main, run  # noqa: E402


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() installs handlers on the root logger; drop them afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture()
def fast_env(monkeypatch, tmp_path):
    monkeypatch.setattr(config_mod, "ENV_FILE", tmp_path / ".env")
    monkeypatch.setenv("GRID_MODE", "mock")
    monkeypatch.setenv("GRID_DEVICE_COUNT", "25")
    monkeypatch.setenv("GRID_REQUESTS_PER_SECOND", "500")
    monkeypatch.setenv("GRID_MOCK_ERROR_RATE", "0")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    return tmp_path


def _fast_config(**overrides):
    config = {
        "grid_mode": "mock",
        "grid_device_count": 25,
        "grid_requests_per_second": 500,
        "grid_batch_size": 10,
        "grid_rate_limit_delay": 0,
        "grid_retry_delay": 0,
    }
    config.update(overrides)
    return config


def test_run_fetches_every_device():
    result, report = run(_fast_config(), threading.Event())
    assert result.batches_total == 3
    assert result.batches_successful == 3
    assert result.failures == []
    assert report.total_devices == 25
    assert report.online_devices + report.offline_devices == 25


def test_run_with_stop_already_requested():
    stop = threading.Event()
    stop.set()
    result, report = run(_fast_config(), stop)
    assert result.cancelled is True
    assert result.batches_processed == 0
    assert report.total_devices == 0


def test_run_survives_injected_errors():
    result, report = run(_fast_config(grid_mock_error_rate=1.0), threading.Event())
    assert result.batches_successful == 0
    assert result.batches_failed == 3
    assert report.average_power_kw == 0


def test_main_exits_zero_and_prints_summary(fast_env, capsys):
    assert main() == 0
    out = capsys.readouterr().out
    assert "AGGREGATION SUMMARY" in out
    assert "Total Devices Processed: 25" in out
    assert (fast_env / "logs" / "grid-report.log").exists()


def test_main_exits_zero_with_failed_batches(fast_env, monkeypatch, capsys):
    monkeypatch.setenv("GRID_BATCH_SIZE", "11")
    assert main() == 0
    assert "batch(es) failed" in capsys.readouterr().out


def test_main_exits_one_on_fatal_error(fast_env):
    with patch.object(main_mod, "run", side_effect=RuntimeError("boom")):
        assert main() == 1


def test_main_restores_signal_handlers(fast_env):
    before = signal.getsignal(signal.SIGINT)
    main()
    assert signal.getsignal(signal.SIGINT) is before
