"""Path management utilities for calabi-deployments."""

import os
from pathlib import Path
from typing import Optional, Union

from .constants import ARTIFACTS_DIR_ENV, REGISTRY_DIR_ENV


def get_default_registry_dir() -> Path:
    """
    Get default registry directory.

    Returns:
        Path from $CALABI_REGISTRY_DIR, or ./deployments
    """
    override = os.environ.get(REGISTRY_DIR_ENV)
    if override:
        return Path(override).absolute()
    return Path.cwd() / "deployments"


def get_default_artifacts_dir() -> Path:
    """
    Get default compiled artifacts directory.

    Returns:
        Path from $CALABI_ARTIFACTS_DIR, or ./artifacts
    """
    override = os.environ.get(ARTIFACTS_DIR_ENV)
    if override:
        return Path(override).absolute()
    return Path.cwd() / "artifacts"


def get_registry_path(
    network: str, registry_root: Optional[Union[Path, str]] = None
) -> Path:
    """
    Get the registry file for a network.

    Args:
        network: Network name, e.g. "hardhat"
        registry_root: Custom registry directory (defaults to ./deployments)

    Returns:
        Absolute path to {registry_root}/{network}.json
    """
    if registry_root is None:
        registry_root = get_default_registry_dir()
    else:
        registry_root = Path(registry_root).absolute()

    return registry_root / f"{network}.json"
