"""Deployment plans for the Calabi contracts."""

from typing import Dict, Tuple

from .types import DeployerAddress, DeploymentStep, RegistryRef

# The factory takes the fee setter; the router needs the factory and wrapped FIL.
# wFIL is recorded under "tokens" by the token deployment, which runs first.
SWAP_PLAN: Tuple[DeploymentStep, ...] = (
    DeploymentStep("CalabiFactory", "swap", (DeployerAddress(),)),
    DeploymentStep(
        "CalabiRouter02",
        "swap",
        (RegistryRef("swap", "CalabiFactory"), RegistryRef("tokens", "wFIL")),
    ),
)

PLANS: Dict[str, Tuple[DeploymentStep, ...]] = {
    "swap": SWAP_PLAN,
}
