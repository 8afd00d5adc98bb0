"""
Web3 Contract Client
====================

JSON-RPC implementation of ContractClient on top of web3.py's AsyncWeb3.

Transactions are signed locally with the configured private key.
Gas and fee fields are left to web3's defaults unless a gas limit is configured.

Version: 0.1.0
"""

import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from eth_utils import ValidationError as EthValidationError
from web3 import AsyncWeb3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception

from zkcall.blockchain.artifacts import ContractArtifact, load_artifact
from zkcall.blockchain.client import (
    ContractClient,
    DeploymentReceipt,
    TransactionConfirmation,
)
from zkcall.blockchain.errors import (
    ContractClientError,
    NotConnectedError,
    TransactionRevertedError,
)
from zkcall.config import NetworkMode, NetworkSettings
from zkcall.logging import get_logger

logger = get_logger(__name__)

_INT_TYPE_RE = re.compile(r"^u?int\d*$")


def _coerce_arg(abi_type: str, value: Any) -> Any:
    """Convert hex/decimal strings to ints wherever the ABI expects an integer."""
    if isinstance(value, (list, tuple)):
        element_type = abi_type[: abi_type.rindex("[")] if abi_type.endswith("]") else abi_type
        return [_coerce_arg(element_type, item) for item in value]

    if isinstance(value, str) and _INT_TYPE_RE.match(abi_type):
        try:
            return int(value, 16) if value.lower().startswith("0x") else int(value)
        except ValueError as e:
            raise ContractClientError(f"Cannot pass {value!r} as {abi_type}") from e

    return value


def normalize_args(function_abi: dict[str, Any], args: Sequence[Any]) -> list[Any]:
    """
    Adapt positional arguments to web3's encoder.

    web3 only accepts Python ints for integer parameters, while calldata
    carries 0x-prefixed hex strings.
    """
    inputs = function_abi.get("inputs", [])
    if len(inputs) != len(args):
        raise ContractClientError(
            f"{function_abi.get('name')} takes {len(inputs)} arguments, got {len(args)}"
        )
    return [_coerce_arg(spec["type"], value) for spec, value in zip(inputs, args)]


class Web3ContractClient(ContractClient):
    """
    Contract client for an Ethereum JSON-RPC endpoint.

    Usage:
        async with Web3ContractClient(settings.network, "artifacts") as client:
            receipt = await client.deploy("Groth16Verifier")
    """

    def __init__(
        self,
        network: NetworkSettings,
        artifacts_dir: str | Path = "artifacts",
        w3: AsyncWeb3 | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            network: Network settings (RPC URL, signing key, timeouts)
            artifacts_dir: Directory holding compiled contract artifacts
            w3: Preconfigured AsyncWeb3 instance (defaults to HTTP on network.rpc_url)
        """
        self.network = network
        self.artifacts_dir = Path(artifacts_dir)
        self._w3 = w3
        self._account = None
        self._chain_id: int | None = network.chain_id
        self._artifacts: dict[str, ContractArtifact] = {}

    @property
    def mode(self) -> NetworkMode:
        return NetworkMode.RPC

    @property
    def w3(self) -> AsyncWeb3:
        if self._w3 is None:
            raise NotConnectedError("Web3 client is not connected")
        return self._w3

    async def connect(self) -> None:
        """Open the RPC connection and load the signing account."""
        if self._w3 is None:
            if not self.network.rpc_url:
                raise NotConnectedError("No RPC URL configured (NETWORK_RPC_URL / SEPOLIA_RPC_URL)")
            self._w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(self.network.rpc_url))

        if not await self._w3.is_connected():
            raise NotConnectedError(f"Cannot reach {self.network.name} RPC endpoint")

        if not self.network.has_signer:
            raise NotConnectedError("No signing key configured (NETWORK_PRIVATE_KEY / PRIVATE_KEY)")
        try:
            self._account = self._w3.eth.account.from_key(self.network.private_key.get_secret_value())
        except (ValueError, EthValidationError) as e:
            raise NotConnectedError("Signing key is not a valid 32-byte hex private key") from e

        if self._chain_id is None:
            self._chain_id = await self._w3.eth.chain_id

        logger.info(
            "web3_connected",
            network=self.network.name,
            chain_id=self._chain_id,
            account=self._account.address,
        )

    async def disconnect(self) -> None:
        """Close the RPC connection."""
        if self._w3 is not None:
            await self._w3.provider.disconnect()
        logger.info("web3_disconnected", network=self.network.name)

    async def health_check(self) -> dict[str, Any]:
        """Check RPC endpoint health."""
        try:
            block_number = await self.w3.eth.block_number
        except (NotConnectedError, Web3Exception, OSError) as e:
            return {
                "status": "unhealthy",
                "mode": self.mode.value,
                "network": self.network.name,
                "error": str(e),
            }
        return {
            "status": "healthy",
            "mode": self.mode.value,
            "network": self.network.name,
            "chain_id": self._chain_id,
            "block_number": block_number,
        }

    def _artifact(self, contract_name: str) -> ContractArtifact:
        if contract_name not in self._artifacts:
            self._artifacts[contract_name] = load_artifact(self.artifacts_dir, contract_name)
        return self._artifacts[contract_name]

    async def _transact(self, tx_builder: Any, label: str) -> tuple[str, Any]:
        """Build, sign and send a transaction, then wait for its receipt."""
        if self._account is None:
            raise NotConnectedError("Web3 client is not connected")

        params: dict[str, Any] = {
            "from": self._account.address,
            "chainId": self._chain_id,
            "nonce": await self.w3.eth.get_transaction_count(self._account.address, "pending"),
        }
        if self.network.gas_limit:
            params["gas"] = self.network.gas_limit

        try:
            tx = await tx_builder.build_transaction(params)
        except ContractLogicError as e:
            raise ContractClientError(f"{label} would revert: {e}") from e

        signed = self._account.sign_transaction(tx)
        tx_hash = AsyncWeb3.to_hex(await self.w3.eth.send_raw_transaction(signed.raw_transaction))

        logger.info("transaction_sent", label=label, tx_hash=tx_hash)

        try:
            receipt = await self.w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.network.receipt_timeout_seconds,
            )
        except TimeExhausted as e:
            raise ContractClientError(
                f"Transaction {tx_hash} not mined within {self.network.receipt_timeout_seconds}s"
            ) from e

        if receipt["status"] != 1:
            raise TransactionRevertedError(tx_hash, label)

        return tx_hash, receipt

    async def deploy(
        self,
        contract_name: str,
        *constructor_args: Any,
    ) -> DeploymentReceipt:
        """Deploy a compiled contract."""
        artifact = self._artifact(contract_name)
        if not artifact.bytecode or artifact.bytecode == "0x":
            raise ContractClientError(f"Contract '{contract_name}' has no creation bytecode")

        factory = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        try:
            tx_hash, receipt = await self._transact(
                factory.constructor(*constructor_args),
                f"{contract_name}.constructor",
            )
        except Web3Exception as e:
            raise ContractClientError(f"Deployment of {contract_name} failed: {e}") from e

        deployment = DeploymentReceipt(
            contract_name=contract_name,
            address=receipt["contractAddress"],
            tx_hash=tx_hash,
            block_number=receipt["blockNumber"],
        )

        logger.info(
            "contract_deployed",
            contract=contract_name,
            address=deployment.address,
            tx_hash=tx_hash,
        )

        return deployment

    async def call(
        self,
        contract_name: str,
        address: str,
        method: str,
        args: Sequence[Any],
    ) -> TransactionConfirmation:
        """Submit a contract method call as a transaction."""
        artifact = self._artifact(contract_name)
        function_abi = artifact.function_abi(method, len(args))
        call_args = normalize_args(function_abi, args)

        try:
            checksum_address = AsyncWeb3.to_checksum_address(address)
        except ValueError as e:
            raise ContractClientError(f"Invalid contract address {address!r}") from e

        contract = self.w3.eth.contract(address=checksum_address, abi=artifact.abi)
        try:
            tx_hash, receipt = await self._transact(
                contract.functions[method](*call_args),
                f"{contract_name}.{method}",
            )
        except Web3Exception as e:
            raise ContractClientError(f"Call to {contract_name}.{method} failed: {e}") from e

        return TransactionConfirmation(
            tx_hash=tx_hash,
            contract_address=address,
            method=method,
            block_number=receipt["blockNumber"],
            status=receipt["status"],
            gas_used=receipt.get("gasUsed"),
        )
