"""Integration tests against a live node (requires a local Hardhat or Anvil node)."""

import os
from pathlib import Path

import pytest

from calabi_deployments import load_registry, run_plan
from calabi_deployments.deployer import Web3Deployer
from calabi_deployments.plans import SWAP_PLAN
from calabi_deployments.rpc import get_chain_id

from deploy_helpers import DEPLOYER, DEPLOYER_KEY, WFIL


@pytest.fixture
def live_rpc_url() -> str:
    rpc_url = os.environ.get("HARDHAT_RPC_URL")
    if not rpc_url:
        pytest.skip("HARDHAT_RPC_URL not configured in environment")
    try:
        get_chain_id(rpc_url)
    except RuntimeError as e:
        pytest.skip(f"Node not reachable: {e}")
    return rpc_url


class TestLiveSwapPlan:
    """Deploy the fixture artifacts through a real node."""

    def test_deploys_swap_plan(self, live_rpc_url: str, artifacts_dir: Path, tmp_path: Path):
        """Test that both swap contracts land on chain and in the registry."""
        path = tmp_path / "hardhat.json"
        registry = load_registry(path)
        registry.set("tokens", "wFIL", WFIL)

        deployer = Web3Deployer.from_rpc(
            live_rpc_url, DEPLOYER_KEY, artifacts_dir, confirmation_timeout=60
        )
        assert deployer.address == DEPLOYER

        addresses = run_plan(SWAP_PLAN, registry, deployer, deployer_address=deployer.address)

        assert set(addresses) == {"CalabiFactory", "CalabiRouter02"}
        assert addresses["CalabiFactory"] != addresses["CalabiRouter02"]
        assert load_registry(path).contracts("swap") == addresses
