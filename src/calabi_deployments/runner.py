"""Deployment step runner for calabi-deployments."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from .constants import ZERO_ADDRESS
from .exceptions import (
    DeploymentError,
    DeploymentFailedError,
    MissingEntryError,
    UnknownCategoryError,
    UnresolvedDependencyError,
)
from .formatting import format_amount
from .pacing import Pacer
from .registry import DeploymentRegistry
from .types import (
    Amount,
    DeployCapability,
    DeployerAddress,
    DeploymentStep,
    RegistryRef,
    Value,
    ZeroAddress,
)

logger = logging.getLogger(__name__)


def resolve_args(
    step: DeploymentStep,
    registry: DeploymentRegistry,
    deployer_address: Optional[str] = None,
) -> List[Any]:
    """
    Resolve the constructor arguments of a step, in order.

    Args:
        step: Step whose arguments are resolved
        registry: Registry to read references from
        deployer_address: Address substituted for DeployerAddress sources

    Returns:
        List of concrete constructor arguments

    Raises:
        UnresolvedDependencyError: If a reference is missing from the registry,
            or a DeployerAddress is needed but not given
        InvalidAmountError: If an Amount cannot be formatted
    """
    resolved: List[Any] = []
    for source in step.args:
        if isinstance(source, Value):
            resolved.append(source.value)
        elif isinstance(source, RegistryRef):
            try:
                resolved.append(registry.get(source.category, source.name))
            except (UnknownCategoryError, MissingEntryError) as e:
                raise UnresolvedDependencyError(
                    f"Step '{step.name}' needs {source.category}.{source.name}: {e}",
                    step=step.name,
                    category=source.category,
                    name=source.name,
                ) from e
        elif isinstance(source, ZeroAddress):
            resolved.append(ZERO_ADDRESS)
        elif isinstance(source, DeployerAddress):
            if deployer_address is None:
                raise UnresolvedDependencyError(
                    f"Step '{step.name}' needs the deployer address but none was given",
                    step=step.name,
                )
            resolved.append(deployer_address)
        elif isinstance(source, Amount):
            resolved.append(int(format_amount(source.value, source.decimals)))
        else:
            raise TypeError(f"Unsupported argument source in step '{step.name}': {source!r}")
    return resolved


def run_step(
    step: DeploymentStep,
    registry: DeploymentRegistry,
    deploy: DeployCapability,
    deployer_address: Optional[str] = None,
) -> str:
    """
    Deploy one contract and record its address.

    The address is written to the registry and saved before returning,
    so a later failure never loses it.

    Args:
        step: Step to run
        registry: Registry to resolve arguments from and record into
        deploy: Capability deploying a contract by name, returning its address
        deployer_address: Address substituted for DeployerAddress sources

    Returns:
        Address of the deployed contract

    Raises:
        UnresolvedDependencyError: If an argument cannot be resolved, or the
            step's category is not defined in the registry
        DeploymentFailedError: If the capability fails
        InvalidAddressError: If the capability returns a non-address
    """
    if step.category not in registry.categories():
        raise UnresolvedDependencyError(
            f"Step '{step.name}' writes to undefined category '{step.category}'",
            step=step.name,
            category=step.category,
        )
    args = resolve_args(step, registry, deployer_address)
    logger.info("Deploying %s with args %s", step.name, args)

    try:
        address = deploy(step.name, args)
    except DeploymentError:
        raise
    except Exception as e:
        raise DeploymentFailedError(
            f"Deployment of '{step.name}' failed: {e}", step=step.name
        ) from e

    logger.info("%s returned address %r", step.name, address)
    registry.set(step.category, step.name, address)
    registry.save()

    address = registry.get(step.category, step.name)
    logger.info("Deployed %s at %s", step.name, address)
    return address


def run_plan(
    plan: Sequence[DeploymentStep],
    registry: DeploymentRegistry,
    deploy: DeployCapability,
    deployer_address: Optional[str] = None,
    pacer: Optional[Pacer] = None,
    skip_existing: bool = False,
) -> Dict[str, str]:
    """
    Run every step of a plan in order, stopping at the first failure.

    Steps are never reordered: a step that reads an address must come after
    the step that records it.

    Args:
        plan: Ordered steps
        registry: Registry shared by all steps
        deploy: Deploy capability
        deployer_address: Address substituted for DeployerAddress sources
        pacer: If given, waited on between steps
        skip_existing: Skip steps whose entry is already in the registry
                       (default re-deploys every step)

    Returns:
        Dictionary mapping step name -> address, including skipped steps
    """
    addresses: Dict[str, str] = {}
    deployed_any = False

    for index, step in enumerate(plan, start=1):
        if skip_existing and registry.has(step.category, step.name):
            addresses[step.name] = registry.get(step.category, step.name)
            logger.info(
                "[%d/%d] Skipping %s, already at %s",
                index,
                len(plan),
                step.name,
                addresses[step.name],
            )
            continue

        if pacer is not None and deployed_any:
            pacer.wait()

        logger.info("[%d/%d] %s -> %s", index, len(plan), step.name, step.category)
        addresses[step.name] = run_step(step, registry, deploy, deployer_address)
        deployed_any = True

    return addresses


def check_plan(plan: Sequence[DeploymentStep], registry: DeploymentRegistry) -> None:
    """
    Check that every reference in a plan can be satisfied, without deploying.

    A reference is satisfied if the registry already holds it or an earlier
    step of the plan records it.

    Raises:
        UnresolvedDependencyError: For the first unsatisfied reference
    """
    produced: Set[Tuple[str, str]] = set()
    known_categories = set(registry.categories())

    for step in plan:
        for ref in step.references():
            if (ref.category, ref.name) in produced or registry.has(ref.category, ref.name):
                continue
            if ref.category not in known_categories:
                reason = f"category '{ref.category}' is not defined"
            else:
                reason = "no earlier step deploys it and it is not in the registry"
            raise UnresolvedDependencyError(
                f"Step '{step.name}' needs {ref.category}.{ref.name}: {reason}",
                step=step.name,
                category=ref.category,
                name=ref.name,
            )
        if step.category not in known_categories:
            raise UnresolvedDependencyError(
                f"Step '{step.name}' writes to undefined category '{step.category}'",
                step=step.name,
                category=step.category,
            )
        produced.add((step.category, step.name))
