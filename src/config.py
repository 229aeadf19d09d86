"""Configuration management for Grid Report."""

import os
from pathlib import Path

# Project root is one level up from src/
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"


def load_config() -> dict:
    """Load configuration from environment variables and .env file."""
    # Load .env file if it exists (don't override existing env vars)
    if ENV_FILE.exists():
        with open(ENV_FILE) as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                key, _, value = line.partition("=")
                key, value = key.strip(), value.strip().strip("\"'")
                if key not in os.environ:
                    os.environ[key] = value

    return {
        # EnergyGrid API
        "grid_mode": os.getenv("GRID_MODE", "mock"),  # "mock" or "live"
        "grid_api_url": os.getenv("GRID_API_URL", "http://localhost:3000"),
        "grid_api_path": os.getenv("GRID_API_PATH", "/device/real/query"),
        "grid_api_token": os.getenv("GRID_API_TOKEN", "interview_token_123"),
        "grid_timeout": float(os.getenv("GRID_TIMEOUT", "10.0")),

        # Pacing and retries (the API allows one request per second)
        "grid_requests_per_second": float(os.getenv("GRID_REQUESTS_PER_SECOND", "1.0")),
        "grid_batch_size": int(os.getenv("GRID_BATCH_SIZE", "10")),
        "grid_max_retries": int(os.getenv("GRID_MAX_RETRIES", "3")),
        "grid_rate_limit_delay": float(os.getenv("GRID_RATE_LIMIT_DELAY", "1.5")),
        "grid_retry_delay": float(os.getenv("GRID_RETRY_DELAY", "1.0")),

        # Device population
        "grid_device_count": int(os.getenv("GRID_DEVICE_COUNT", "500")),

        # Mock backend
        "grid_mock_error_rate": float(os.getenv("GRID_MOCK_ERROR_RATE", "0.0")),
        "grid_mock_seed": (
            int(os.environ["GRID_MOCK_SEED"]) if os.getenv("GRID_MOCK_SEED") else None
        ),

        # Logging
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "log_dir": os.getenv("LOG_DIR", str(PROJECT_ROOT / "logs")),
    }
