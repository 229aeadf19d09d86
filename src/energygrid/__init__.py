"""EnergyGrid device API: client factory."""

from energygrid.base import BaseGridClient


def get_grid_client(config: dict) -> BaseGridClient:
    """Create an EnergyGrid client based on configuration.

    Args:
        config: Application config dict. Uses 'grid_mode' to select backend.

    Returns:
        MockGridClient for "mock" mode, GridClient for "live" mode.
    """
    mode = config.get("grid_mode", "mock")

    if mode == "live":
        from energygrid.client import GridClient
        return GridClient(config)

    from energygrid.mock_client import MockGridClient
    return MockGridClient(config)
