"""
Blockchain Module
=================

Contract client abstraction for deploying verifiers and submitting proofs.

Supports:
- Mock (development/testing)
- RPC (any Ethereum JSON-RPC endpoint via web3.py)

Usage:
    from zkcall.blockchain import create_contract_client
    from zkcall.config import get_settings

    async with create_contract_client(get_settings()) as client:
        receipt = await client.deploy("Groth16Verifier")
        confirmation = await client.call(
            "Groth16Verifier", receipt.address, "verifyProof", calldata.as_args()
        )
"""

from zkcall.blockchain.artifacts import ContractArtifact, load_artifact
from zkcall.blockchain.client import (
    ContractClient,
    DeploymentReceipt,
    TransactionConfirmation,
    create_contract_client,
)
from zkcall.blockchain.errors import (
    ArtifactNotFoundError,
    ContractClientError,
    NotConnectedError,
    TransactionRevertedError,
)
from zkcall.blockchain.mock import MockContractClient

__all__ = [
    # Client
    "ContractClient",
    "create_contract_client",
    # Models
    "DeploymentReceipt",
    "TransactionConfirmation",
    "ContractArtifact",
    "load_artifact",
    # Errors
    "ContractClientError",
    "ArtifactNotFoundError",
    "NotConnectedError",
    "TransactionRevertedError",
    # Implementations
    "MockContractClient",
]
