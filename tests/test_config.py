"""Tests for configuration loading."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import config as config_mod  # noqa: E402
from config import load_config  # noqa: E402


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.setattr(config_mod, "ENV_FILE", tmp_path / ".env")
    for key in ("GRID_MODE", "GRID_BATCH_SIZE", "GRID_REQUESTS_PER_SECOND",
                "GRID_MAX_RETRIES", "GRID_DEVICE_COUNT", "GRID_API_URL"):
        monkeypatch.delenv(key, raising=False)

    config = load_config()
    assert config["grid_mode"] == "mock"
    assert config["grid_api_url"] == "http://localhost:3000"
    assert config["grid_batch_size"] == 10
    assert config["grid_requests_per_second"] == 1.0
    assert config["grid_max_retries"] == 3
    assert config["grid_device_count"] == 500


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setattr(config_mod, "ENV_FILE", tmp_path / ".env")
    monkeypatch.setenv("GRID_MODE", "live")
    monkeypatch.setenv("GRID_BATCH_SIZE", "5")
    monkeypatch.setenv("GRID_RETRY_DELAY", "0.25")

    config = load_config()
    assert config["grid_mode"] == "live"
    assert config["grid_batch_size"] == 5
    assert config["grid_retry_delay"] == 0.25


def test_env_file_does_not_override_environment(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "GRID_API_TOKEN='from_file'\n"
        "GRID_DEVICE_COUNT=42\n"
    )
    monkeypatch.setattr(config_mod, "ENV_FILE", env_file)
    monkeypatch.delenv("GRID_DEVICE_COUNT", raising=False)
    monkeypatch.setenv("GRID_API_TOKEN", "from_env")

    config = load_config()
    assert config["grid_api_token"] == "from_env"
    assert config["grid_device_count"] == 42
    monkeypatch.delenv("GRID_DEVICE_COUNT", raising=False)


def test_mock_seed(monkeypatch, tmp_path):
    monkeypatch.setattr(config_mod, "ENV_FILE", tmp_path / ".env")
    monkeypatch.delenv("GRID_MOCK_SEED", raising=False)
    assert load_config()["grid_mock_seed"] is None

    monkeypatch.setenv("GRID_MOCK_SEED", "7")
    assert load_config()["grid_mock_seed"] == 7
