"""Report building from fetched device data."""
