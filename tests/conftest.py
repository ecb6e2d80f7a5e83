"""Shared pytest fixtures for calabi-deployments tests."""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from deploy_helpers import RecordingDeployer


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def artifacts_dir(fixtures_dir: Path) -> Path:
    """Return the path to the sample Hardhat artifacts."""
    return fixtures_dir / "artifacts"


@pytest.fixture
def sample_registry_json(fixtures_dir: Path) -> Dict[str, Any]:
    """Load and return the sample registry fixture."""
    with open(fixtures_dir / "sample_registry.json") as f:
        return json.load(f)


@pytest.fixture
def temp_registry_dir(tmp_path: Path) -> Path:
    """Create a temporary registry directory for tests."""
    registry_dir = tmp_path / "deployments"
    registry_dir.mkdir(parents=True, exist_ok=True)
    return registry_dir


@pytest.fixture
def temp_registry_file(temp_registry_dir: Path, sample_registry_json: Dict[str, Any]) -> Path:
    """Create a temporary hardhat.json registry with sample data."""
    registry_path = temp_registry_dir / "hardhat.json"
    with open(registry_path, "w") as f:
        json.dump(sample_registry_json, f, indent=2)
    return registry_path


@pytest.fixture
def recording_deployer() -> RecordingDeployer:
    """Return a deploy capability that succeeds for every contract."""
    return RecordingDeployer()
