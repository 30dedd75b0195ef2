"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from sensormonitor.config.schema import InfluxConfig, MonitorConfig

INFLUX_URL = "https://influx.test"
FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _no_influx_env(monkeypatch):
    """Keep the developer's INFLUX_* variables out of config tests."""
    for var in ("INFLUX_BASE_URL", "INFLUX_ORG", "INFLUX_BUCKET", "INFLUX_TOKEN"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def temp_csv() -> str:
    return (FIXTURE_DIR / "influx_temp_24h.csv").read_text()


@pytest.fixture
def pressure_csv() -> str:
    return (FIXTURE_DIR / "influx_pressure_multitable.csv").read_text()


@pytest.fixture
def monitor_config() -> MonitorConfig:
    return MonitorConfig(
        influx=InfluxConfig(
            base_url=INFLUX_URL, org="picow", bucket="sensors", token="secret-token"
        ),
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "influx": {
            "base_url": INFLUX_URL,
            "org": "picow",
            "bucket": "sensors",
            "token": "secret-token",
        },
        "refresh": {"interval_seconds": 30},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
