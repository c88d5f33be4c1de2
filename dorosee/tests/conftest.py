"""Shared test fixtures."""

import json
from datetime import datetime
from pathlib import Path

import pytest
import yaml

from dorosee.config.defaults import SERVICE_KEY_ENV
from dorosee.config.schema import DoroseeConfig
from dorosee.models.common import KST


@pytest.fixture(autouse=True)
def _no_ambient_service_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's real key out of the tests."""
    monkeypatch.delenv(SERVICE_KEY_ENV, raising=False)


@pytest.fixture
def default_config() -> DoroseeConfig:
    return DoroseeConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "kma": {"timeout": 10.0, "max_retries": 1},
        "location": {"latitude": 35.1796, "longitude": 129.0756},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def seoul_forecast(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "kma_vilage_fcst_seoul.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def morning_kst() -> datetime:
    """10:30 KST, inside the 08:00 issuance slot of the seoul fixture."""
    return datetime(2026, 10, 19, 10, 30, tzinfo=KST)
