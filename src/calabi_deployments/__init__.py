"""
calabi-deployments: deploy the Calabi swap contracts and track their addresses
"""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    ArtifactNotFoundError,
    ChainMismatchError,
    ConfigurationError,
    DefectiveArtifactError,
    DeploymentError,
    DeploymentFailedError,
    InvalidAddressError,
    InvalidAmountError,
    MissingEntryError,
    NetworkNotFoundError,
    RegistryFormatError,
    UnknownCategoryError,
    UnresolvedDependencyError,
)
from .formatting import format_amount
from .pacing import Pacer
from .registry import DeploymentRegistry, load_registry, save_registry
from .runner import check_plan, resolve_args, run_plan, run_step
from .types import (
    Amount,
    DeployerAddress,
    DeploymentStep,
    RegistryRef,
    Value,
    ZeroAddress,
)

try:
    __version__ = version("calabi-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentRegistry",
    "load_registry",
    "save_registry",
    "format_amount",
    "Pacer",
    "check_plan",
    "resolve_args",
    "run_plan",
    "run_step",
    "DeploymentStep",
    "Value",
    "RegistryRef",
    "ZeroAddress",
    "DeployerAddress",
    "Amount",
    "DeploymentError",
    "UnknownCategoryError",
    "MissingEntryError",
    "RegistryFormatError",
    "InvalidAddressError",
    "InvalidAmountError",
    "UnresolvedDependencyError",
    "DeploymentFailedError",
    "ArtifactNotFoundError",
    "DefectiveArtifactError",
    "NetworkNotFoundError",
    "ChainMismatchError",
    "ConfigurationError",
]
