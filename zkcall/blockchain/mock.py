"""
Mock Contract Client
====================

In-memory mock implementation for development and testing.

Version: 0.1.0
"""

import copy
import hashlib
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

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
from zkcall.config import NetworkMode
from zkcall.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CallRecord:
    """A contract call captured by the mock."""

    contract_name: str
    address: str
    method: str
    args: list[Any]
    tx_hash: str
    block_number: int
    status: int = 1


class MockContractClient(ContractClient):
    """
    In-memory mock contract client.

    Simulates deployment and transaction submission without
    requiring a node. Data is stored in memory and lost on restart.
    """

    def __init__(self, reverting_methods: Iterable[str] = ()) -> None:
        """
        Initialize mock client with in-memory storage.

        Args:
            reverting_methods: Method names whose transactions are mined
                with a failure status
        """
        self._connected = False
        self._block_number = 1000
        self.reverting_methods = set(reverting_methods)

        # In-memory storage
        self._deployments: dict[str, DeploymentReceipt] = {}
        self._calls: list[CallRecord] = []

        logger.debug("mock_contract_client_initialized")

    @property
    def mode(self) -> NetworkMode:
        return NetworkMode.MOCK

    async def connect(self) -> None:
        """Simulate connection."""
        self._connected = True
        logger.info("mock_network_connected")

    async def disconnect(self) -> None:
        """Simulate disconnection."""
        self._connected = False
        logger.info("mock_network_disconnected")

    async def health_check(self) -> dict[str, Any]:
        """Check mock network health."""
        return {
            "status": "healthy",
            "mode": self.mode.value,
            "connected": self._connected,
            "block_number": self._block_number,
            "deployments": len(self._deployments),
            "calls": len(self._calls),
        }

    def _require_connection(self) -> None:
        if not self._connected:
            raise NotConnectedError("Mock network is not connected")

    def _generate_tx_hash(self) -> str:
        """Generate a mock transaction hash."""
        return "0x" + hashlib.sha256(uuid.uuid4().bytes).hexdigest()

    def _generate_address(self) -> str:
        """Generate a mock contract address."""
        return "0x" + hashlib.sha256(uuid.uuid4().bytes).hexdigest()[:40]

    def _next_block(self) -> int:
        """Get next block number."""
        self._block_number += 1
        return self._block_number

    async def deploy(
        self,
        contract_name: str,
        *constructor_args: Any,
    ) -> DeploymentReceipt:
        """Simulate a deployment."""
        self._require_connection()
        receipt = DeploymentReceipt(
            contract_name=contract_name,
            address=self._generate_address(),
            tx_hash=self._generate_tx_hash(),
            block_number=self._next_block(),
        )
        self._deployments[receipt.address.lower()] = receipt

        logger.debug(
            "mock_contract_deployed",
            contract=contract_name,
            address=receipt.address,
            tx_hash=receipt.tx_hash,
        )

        return receipt

    async def call(
        self,
        contract_name: str,
        address: str,
        method: str,
        args: Sequence[Any],
    ) -> TransactionConfirmation:
        """Simulate a contract call transaction."""
        self._require_connection()
        deployment = self._deployments.get(address.lower())
        if deployment is None:
            raise ContractClientError(f"No contract deployed at {address}")
        if deployment.contract_name != contract_name:
            raise ContractClientError(
                f"Contract at {address} is {deployment.contract_name}, not {contract_name}"
            )

        tx_hash = self._generate_tx_hash()
        block_number = self._next_block()
        status = 0 if method in self.reverting_methods else 1

        self._calls.append(
            CallRecord(
                contract_name=contract_name,
                address=address,
                method=method,
                args=copy.deepcopy(list(args)),
                tx_hash=tx_hash,
                block_number=block_number,
                status=status,
            )
        )

        logger.debug(
            "mock_contract_called",
            contract=contract_name,
            method=method,
            tx_hash=tx_hash,
            status=status,
        )

        if status != 1:
            raise TransactionRevertedError(tx_hash, method, "mock revert")

        return TransactionConfirmation(
            tx_hash=tx_hash,
            contract_address=address,
            method=method,
            block_number=block_number,
            status=status,
            gas_used=21000 + 1000 * len(args),
        )

    # =========================================================================
    # Test Utilities
    # =========================================================================

    @property
    def calls(self) -> list[CallRecord]:
        """Calls recorded so far, oldest first."""
        return list(self._calls)

    def clear_all(self) -> None:
        """Clear all mock data (for testing)."""
        self._deployments.clear()
        self._calls.clear()
        self._block_number = 1000
        logger.debug("mock_contract_client_cleared")

    def get_stats(self) -> dict[str, int]:
        """Get storage statistics."""
        return {
            "deployments": len(self._deployments),
            "calls": len(self._calls),
            "block_number": self._block_number,
        }
