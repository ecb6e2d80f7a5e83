"""Deployment registry for calabi-deployments."""

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from web3 import Web3

from .constants import KNOWN_CATEGORIES
from .exceptions import (
    InvalidAddressError,
    MissingEntryError,
    RegistryFormatError,
    UnknownCategoryError,
)

logger = logging.getLogger(__name__)


class DeploymentRegistry:
    """Addresses of deployed contracts, grouped by category."""

    def __init__(
        self,
        data: Optional[Dict[str, Dict[str, str]]] = None,
        path: Optional[Union[Path, str]] = None,
        categories: Iterable[str] = KNOWN_CATEGORIES,
    ):
        """
        Initialize the registry.

        Args:
            data: Mapping of category -> contract name -> address
            path: File the registry is persisted to by save()
            categories: Categories that always exist, even when empty
        """
        self._data: Dict[str, Dict[str, str]] = {c: {} for c in categories}
        for category, contracts in (data or {}).items():
            self._data[category] = dict(contracts)
        self.path = Path(path) if path is not None else None

    def categories(self) -> List[str]:
        """Get the names of all defined categories."""
        return list(self._data.keys())

    def contracts(self, category: str) -> Dict[str, str]:
        """
        Get a copy of every name -> address mapping in a category.

        Raises:
            UnknownCategoryError: If category is not defined
        """
        return dict(self._category(category))

    def has(self, category: str, name: str) -> bool:
        """
        Check if a contract has been recorded.

        Returns:
            True if the entry exists, False otherwise (including unknown category)
        """
        return name in self._data.get(category, {})

    def get(self, category: str, name: str) -> str:
        """
        Get the address recorded for a contract.

        Args:
            category: Registry category, e.g. "swap"
            name: Contract logical name, e.g. "CalabiFactory"

        Returns:
            Checksummed address

        Raises:
            UnknownCategoryError: If category is not defined
            MissingEntryError: If the contract has not been recorded yet
        """
        contracts = self._category(category)
        if name not in contracts:
            raise MissingEntryError(
                f"Contract '{name}' not found in category '{category}'"
            )
        return contracts[name]

    def set(self, category: str, name: str, address: str) -> None:
        """
        Record the address of a contract, replacing any earlier address.

        The change is in memory only; call save() to persist it.

        Raises:
            UnknownCategoryError: If category is not defined
            InvalidAddressError: If address is not a valid on-chain address
        """
        contracts = self._category(category)
        checksummed = checksum_address(address, f"{category}.{name}")
        previous = contracts.get(name)
        if previous is not None and previous != checksummed:
            logger.warning(
                "Replacing %s.%s: %s -> %s", category, name, previous, checksummed
            )
        contracts[name] = checksummed

    def save(self) -> None:
        """
        Persist the registry to the path it was loaded from.

        Raises:
            ValueError: If the registry has no path
        """
        if self.path is None:
            raise ValueError("Registry has no path to save to")
        save_registry(self, self.path)

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        """Get a deep copy of the registry contents."""
        return {category: dict(contracts) for category, contracts in self._data.items()}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DeploymentRegistry):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"DeploymentRegistry(path={self.path!s}, data={self._data!r})"

    def _category(self, category: str) -> Dict[str, str]:
        if category not in self._data:
            raise UnknownCategoryError(f"Category '{category}' not found in registry")
        return self._data[category]


def checksum_address(address: object, label: str) -> str:
    """
    Validate an address and return its EIP-55 checksummed form.

    All-lowercase and all-uppercase hex is accepted as-is. Mixed-case hex
    must already carry a correct checksum.

    Args:
        address: Candidate address
        label: "category.name" used in the error message

    Raises:
        InvalidAddressError: If address is not a valid on-chain address
    """
    if not isinstance(address, str) or not Web3.is_address(address):
        raise InvalidAddressError(f"Invalid address for '{label}': {address!r}")
    digits = address[2:] if address[:2].lower() == "0x" else address
    if digits not in (digits.lower(), digits.upper()) and not Web3.is_checksum_address(address):
        raise InvalidAddressError(f"Bad checksum for '{label}': {address!r}")
    return Web3.to_checksum_address(address)


def load_registry(
    path: Union[Path, str], categories: Iterable[str] = KNOWN_CATEGORIES
) -> DeploymentRegistry:
    """
    Load a registry file, or return an empty registry if it doesn't exist.

    Args:
        path: Path to the registry JSON file
        categories: Categories that always exist, even when empty

    Returns:
        DeploymentRegistry bound to path

    Raises:
        RegistryFormatError: If the file is not valid registry JSON
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.info("No registry at %s, starting empty", path)
        return DeploymentRegistry(path=path, categories=categories)
    except json.JSONDecodeError as e:
        raise RegistryFormatError(f"Malformed registry file {path}: {e}") from e

    if not isinstance(data, dict):
        raise RegistryFormatError(f"Registry file {path} must contain a JSON object")
    for category, contracts in data.items():
        if not isinstance(contracts, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in contracts.items()
        ):
            raise RegistryFormatError(
                f"Category '{category}' in {path} must map names to address strings"
            )
        for name, address in contracts.items():
            try:
                contracts[name] = checksum_address(address, f"{category}.{name}")
            except InvalidAddressError as e:
                raise RegistryFormatError(f"Invalid entry in {path}: {e}") from e

    return DeploymentRegistry(data, path=path, categories=categories)


def save_registry(registry: DeploymentRegistry, path: Union[Path, str]) -> None:
    """
    Save a registry to disk atomically.

    The JSON is written to a temporary file in the target directory and
    renamed over the target, so readers see either the old or the new file.

    Args:
        registry: Registry to save
        path: Path to the registry JSON file

    Creates parent directories if they don't exist.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(registry.to_dict(), f, indent=2)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates 0600; keep the mode readers of the registry expect
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
    except BaseException:
        # Leave no stray temp file next to the registry
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.debug("Saved registry to %s", path)


def _file_mode(path: Path) -> int:
    """Mode of the existing file, else the umask default for a new file."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
