"""
Contract Client Interface
=========================

Abstract base class and models for deploying and calling contracts.

Clients are passed explicitly to the workflows that need them; there is
no process-wide chain context.

Version: 0.1.0
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from zkcall.config import NetworkMode, Settings
from zkcall.logging import get_logger

logger = get_logger(__name__)


class DeploymentReceipt(BaseModel):
    """Result of a contract deployment."""

    contract_name: str
    address: str = Field(..., description="Deployed contract address")
    tx_hash: str = Field(..., description="Deployment transaction hash")
    block_number: int | None = None
    deployed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class TransactionConfirmation(BaseModel):
    """A mined contract call transaction."""

    tx_hash: str = Field(..., description="Transaction hash")
    contract_address: str
    method: str
    block_number: int | None = None
    status: int = Field(default=1, description="Receipt status (1 = success)")
    gas_used: int | None = None
    confirmed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def succeeded(self) -> bool:
        """Check if the receipt reports success."""
        return self.status == 1


class ContractClient(ABC):
    """
    Abstract base class for contract clients.

    Implements the Strategy pattern for different network modes.
    """

    @property
    @abstractmethod
    def mode(self) -> NetworkMode:
        """Get the network mode."""
        ...

    @abstractmethod
    async def connect(self) -> None:
        """Connect to the network."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Disconnect from the network."""
        ...

    @abstractmethod
    async def health_check(self) -> dict[str, Any]:
        """Check network health."""
        ...

    @abstractmethod
    async def deploy(
        self,
        contract_name: str,
        *constructor_args: Any,
    ) -> DeploymentReceipt:
        """
        Deploy a compiled contract and wait for it to be mined.

        Args:
            contract_name: Name of the compiled contract (e.g. "Groth16Verifier")
            constructor_args: Constructor arguments

        Returns:
            DeploymentReceipt with the contract address
        """
        ...

    @abstractmethod
    async def call(
        self,
        contract_name: str,
        address: str,
        method: str,
        args: Sequence[Any],
    ) -> TransactionConfirmation:
        """
        Submit a transaction calling a contract method and await confirmation.

        Args:
            contract_name: Compiled contract name (selects the ABI)
            address: Deployed contract address
            method: Method name (e.g. "verifyProof")
            args: Positional method arguments

        Returns:
            TransactionConfirmation of the mined transaction

        Raises:
            TransactionRevertedError: If the transaction was mined but failed
        """
        ...

    async def __aenter__(self) -> "ContractClient":
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.disconnect()


def create_contract_client(settings: Settings) -> ContractClient:
    """
    Build the contract client selected by configuration.

    Args:
        settings: Application settings

    Returns:
        ContractClient instance based on `settings.network.mode`
    """
    mode = settings.network.mode

    if mode == NetworkMode.MOCK:
        from zkcall.blockchain.mock import MockContractClient

        client: ContractClient = MockContractClient()
    elif mode == NetworkMode.RPC:
        from zkcall.blockchain.web3_client import Web3ContractClient

        client = Web3ContractClient(
            network=settings.network,
            artifacts_dir=settings.verifier.artifacts_dir,
        )
    else:
        raise ValueError(f"Unknown network mode: {mode}")

    logger.info(
        "contract_client_initialized",
        mode=mode.value,
        network=settings.network.name,
    )

    return client
