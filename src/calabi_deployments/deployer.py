"""Contract deployment over JSON-RPC with web3.py."""

import logging
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from eth_account import Account
from web3 import Web3

from .artifacts import load_artifact
from .constants import DEFAULT_CONFIRMATION_TIMEOUT
from .exceptions import ConfigurationError, DeploymentError, DeploymentFailedError

logger = logging.getLogger(__name__)


class Web3Deployer:
    """
    Deploys compiled contracts from a single signing account.

    Instances are deploy capabilities: calling one with a contract name and
    constructor args deploys the contract and returns its address once the
    creation transaction is mined.
    """

    def __init__(
        self,
        w3: Web3,
        account: Any,
        artifacts_dir: Union[Path, str],
        chain_id: Optional[int] = None,
        confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
    ):
        """
        Initialize the deployer.

        Args:
            w3: Connected Web3 client
            account: eth-account LocalAccount used to sign transactions
            artifacts_dir: Root of compiled contract artifacts
            chain_id: Chain ID to sign for (defaults to the node's)
            confirmation_timeout: Seconds to wait for each receipt
        """
        self.w3 = w3
        self.account = account
        self.artifacts_dir = Path(artifacts_dir)
        self.chain_id = chain_id
        self.confirmation_timeout = confirmation_timeout

    @classmethod
    def from_rpc(
        cls,
        rpc_url: str,
        private_key: Optional[str],
        artifacts_dir: Union[Path, str],
        chain_id: Optional[int] = None,
        confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
    ) -> "Web3Deployer":
        """
        Build a deployer for an RPC endpoint and private key.

        Raises:
            ConfigurationError: If private_key is missing
        """
        if not private_key:
            raise ConfigurationError(
                "Private key required: set $PRIVATE_KEY in the environment or .env"
            )
        w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": 60}))
        account = Account.from_key(private_key)
        return cls(w3, account, artifacts_dir, chain_id, confirmation_timeout)

    @property
    def address(self) -> str:
        """Address of the signing account."""
        return self.account.address

    def __call__(self, contract_name: str, args: Sequence[Any]) -> str:
        """
        Deploy a contract and wait for confirmation.

        Args:
            contract_name: Artifact name, e.g. "CalabiRouter02"
            args: Constructor arguments

        Returns:
            Checksummed address of the new contract

        Raises:
            ArtifactNotFoundError: If the contract has not been compiled
            DeploymentFailedError: If broadcasting fails, the transaction
                reverts, or no receipt arrives in time
        """
        artifact = load_artifact(self.artifacts_dir, contract_name)
        factory = self.w3.eth.contract(abi=artifact["abi"], bytecode=artifact["bytecode"])

        try:
            tx_params = {
                "from": self.address,
                "nonce": self.w3.eth.get_transaction_count(self.address, "pending"),
            }
            if self.chain_id is not None:
                tx_params["chainId"] = self.chain_id

            tx = factory.constructor(*args).build_transaction(tx_params)
            signed = self.account.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
            logger.info("%s creation sent: %s", contract_name, Web3.to_hex(tx_hash))

            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.confirmation_timeout
            )
        except DeploymentError:
            raise
        except Exception as e:
            raise DeploymentFailedError(
                f"Deployment of '{contract_name}' failed: {e}", step=contract_name
            ) from e

        if receipt["status"] != 1:
            raise DeploymentFailedError(
                f"Deployment of '{contract_name}' reverted in block {receipt['blockNumber']}",
                step=contract_name,
            )

        contract_address = receipt.get("contractAddress")
        if not contract_address:
            raise DeploymentFailedError(
                f"Receipt for '{contract_name}' has no contract address", step=contract_name
            )

        logger.debug("%s mined in block %s", contract_name, receipt["blockNumber"])
        return Web3.to_checksum_address(contract_address)
