"""Data types and dataclasses for calabi-deployments."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Sequence, Tuple, Union

from .constants import DEFAULT_DECIMALS

# Deploys a contract by name with constructor args and returns its address
DeployCapability = Callable[[str, Sequence[Any]], str]


@dataclass(frozen=True)
class Value:
    """A literal constructor argument, passed through unchanged."""

    value: Any


@dataclass(frozen=True)
class RegistryRef:
    """A constructor argument read from the registry."""

    category: str  # e.g. "tokens"
    name: str  # e.g. "wFIL"


@dataclass(frozen=True)
class ZeroAddress:
    """The zero address."""


@dataclass(frozen=True)
class DeployerAddress:
    """The address of the account signing the deployment."""


@dataclass(frozen=True)
class Amount:
    """A token amount, converted to fixed-point before deployment."""

    value: Union[int, float, Decimal, str]
    decimals: int = DEFAULT_DECIMALS


ArgSource = Union[Value, RegistryRef, ZeroAddress, DeployerAddress, Amount]


@dataclass(frozen=True)
class DeploymentStep:
    """One contract to deploy."""

    name: str  # Contract name, also the registry key
    category: str  # Registry category the address is written to
    args: Tuple[ArgSource, ...] = field(default_factory=tuple)

    def references(self) -> Tuple[RegistryRef, ...]:
        """Registry entries this step reads."""
        return tuple(a for a in self.args if isinstance(a, RegistryRef))
