"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from forecaster.config.schema import ForecasterConfig
from forecaster.ingest.noaa_client import NoaaClient
from forecaster.location.resolver import DEFAULT_ZIP_DATA, LocationResolver

TEST_BASE_URL = "https://test-noaa.example.com"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_fixture(fixtures_dir: Path):
    def _load(name: str) -> dict:
        with open(fixtures_dir / name) as f:
            return json.load(f)

    return _load


@pytest.fixture
def resolver() -> LocationResolver:
    """Resolver over the bundled ZIP table."""
    return LocationResolver.from_csv(DEFAULT_ZIP_DATA)


@pytest.fixture
def test_config() -> ForecasterConfig:
    return ForecasterConfig(
        api={"base_url": TEST_BASE_URL, "timeout_seconds": 2.0},
        display={"timezone": "America/New_York"},
    )


@pytest.fixture
def noaa() -> NoaaClient:
    return NoaaClient(base_url=TEST_BASE_URL, timeout=2.0)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {"timeout_seconds": 5.0},
        "location": {"suggestion_limit": 10},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
