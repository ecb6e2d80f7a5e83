"""Custom exception classes for calabi-deployments."""

from typing import Optional


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class UnknownCategoryError(DeploymentError, LookupError):
    """Raised when a registry category is not defined."""

    pass


class MissingEntryError(DeploymentError, LookupError):
    """Raised when a contract has not been recorded in a known category."""

    pass


class RegistryFormatError(DeploymentError, ValueError):
    """Raised when the persisted registry cannot be parsed."""

    pass


class InvalidAddressError(DeploymentError, ValueError):
    """Raised when a value written to the registry is not an address."""

    pass


class InvalidAmountError(DeploymentError, ValueError):
    """Raised when an amount cannot be converted to fixed-point."""

    pass


class UnresolvedDependencyError(DeploymentError, LookupError):
    """
    Raised when a step argument cannot be resolved.

    Carries the step being resolved and the registry reference that failed,
    so a misordered plan can be diagnosed from the error alone.
    """

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        category: Optional[str] = None,
        name: Optional[str] = None,
    ):
        super().__init__(message)
        self.step = step
        self.category = category
        self.name = name


class DeploymentFailedError(DeploymentError, RuntimeError):
    """Raised when the deploy capability fails for a step."""

    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(message)
        self.step = step


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when no compiled artifact exists for a contract."""

    pass


class DefectiveArtifactError(DeploymentError, ValueError):
    """Raised when an artifact is missing its ABI or creation bytecode."""

    pass


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when requested network is not configured."""

    pass


class ChainMismatchError(DeploymentError, ValueError):
    """Raised when the RPC endpoint serves a different chain than configured."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised when a required setting is missing."""

    pass
