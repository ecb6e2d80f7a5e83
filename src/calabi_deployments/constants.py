"""Configuration constants for calabi-deployments."""

# Registry categories, in the order they are written to disk
KNOWN_CATEGORIES = ("tokens", "swap")

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Fixed-point precision used when a caller does not give one
DEFAULT_DECIMALS = 18

# Pause between paced steps, in seconds
DEFAULT_WAIT_SECONDS = 4.5

# Upper bound on waiting for a deployment receipt, in seconds
DEFAULT_CONFIRMATION_TIMEOUT = 1800

DEFAULT_NETWORK = "hardhat"

PRIVATE_KEY_ENV = "PRIVATE_KEY"
REGISTRY_DIR_ENV = "CALABI_REGISTRY_DIR"
ARTIFACTS_DIR_ENV = "CALABI_ARTIFACTS_DIR"

# Networks the swap is deployed to
# default_rpc_env overrides default_rpc_url when set
NETWORK_CONFIG = {
    "hardhat": {
        "chain_id": 31337,
        "chain_name": "Hardhat Network",
        "default_rpc_url": "http://127.0.0.1:8545",
        "default_rpc_env": "HARDHAT_RPC_URL",
    },
    "fvm": {
        "chain_id": 314,
        "chain_name": "Filecoin - Mainnet",
        "default_rpc_url": "https://api.node.glif.io",
        "default_rpc_env": "FVM_RPC_URL",
    },
}
