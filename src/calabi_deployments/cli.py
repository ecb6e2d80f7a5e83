"""Command-line entry point for calabi-deployments."""

import argparse
import logging
import os
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .constants import (
    DEFAULT_CONFIRMATION_TIMEOUT,
    DEFAULT_NETWORK,
    DEFAULT_WAIT_SECONDS,
    NETWORK_CONFIG,
    PRIVATE_KEY_ENV,
)
from .deployer import Web3Deployer
from .pacing import Pacer
from .paths import get_default_artifacts_dir, get_registry_path
from .plans import PLANS
from .registry import load_registry
from .rpc import check_chain_id
from .runner import check_plan, run_plan

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calabi-deploy",
        description="Deploy the Calabi contracts and record their addresses.",
    )
    parser.add_argument(
        "--network",
        choices=sorted(NETWORK_CONFIG),
        default=DEFAULT_NETWORK,
        help=f"Target network (default: {DEFAULT_NETWORK})",
    )
    parser.add_argument(
        "--plan",
        choices=sorted(PLANS),
        default="swap",
        help="Deployment plan to run (default: swap)",
    )
    parser.add_argument("--rpc-url", help="RPC endpoint (default: from network config)")
    parser.add_argument(
        "--registry-dir",
        help="Directory holding {network}.json registries (default: ./deployments)",
    )
    parser.add_argument(
        "--artifacts-dir",
        help="Compiled artifacts directory (default: ./artifacts)",
    )
    parser.add_argument(
        "--wait",
        type=float,
        nargs="?",
        const=DEFAULT_WAIT_SECONDS,
        default=None,
        metavar="SECONDS",
        help=f"Pause between steps (default when given: {DEFAULT_WAIT_SECONDS}s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_CONFIRMATION_TIMEOUT,
        help="Seconds to wait for each deployment receipt",
    )
    parser.add_argument(
        "--skip-existing",
        action="store_true",
        help="Skip steps whose contract is already in the registry",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only check that the plan's references can be satisfied",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def resolve_rpc_url(network: str, rpc_url: Optional[str] = None) -> str:
    """
    Get the RPC URL for a network.

    Args:
        network: Network name from NETWORK_CONFIG
        rpc_url: Explicit URL, used as-is when given

    Returns:
        rpc_url, else ${NETWORK}_RPC_URL, else the configured default
    """
    if rpc_url:
        return rpc_url
    config = NETWORK_CONFIG[network]
    return os.environ.get(config["default_rpc_env"]) or config["default_rpc_url"]


def run(args: argparse.Namespace) -> int:
    registry = load_registry(get_registry_path(args.network, args.registry_dir))
    plan = PLANS[args.plan]

    if args.check:
        check_plan(plan, registry)
        logger.info("Plan '%s' is satisfiable on %s", args.plan, args.network)
        return 0

    rpc_url = resolve_rpc_url(args.network, args.rpc_url)
    chain_id = check_chain_id(rpc_url, args.network)

    deployer = Web3Deployer.from_rpc(
        rpc_url,
        os.environ.get(PRIVATE_KEY_ENV),
        args.artifacts_dir or get_default_artifacts_dir(),
        chain_id=chain_id,
        confirmation_timeout=args.timeout,
    )
    logger.info("Deploying from %s", deployer.address)

    pacer = Pacer(args.wait) if args.wait is not None else None
    addresses = run_plan(
        plan,
        registry,
        deployer,
        deployer_address=deployer.address,
        pacer=pacer,
        skip_existing=args.skip_existing,
    )

    for name, address in addresses.items():
        logger.info("%s: %s", name, address)
    logger.info("Registry saved to %s", registry.path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run a deployment plan.

    Returns:
        Process exit status: 0 on success, 1 on any failure
    """
    load_dotenv(find_dotenv(usecwd=True))
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        return run(args)
    except Exception:
        logger.exception("Deployment failed")
        return 1
