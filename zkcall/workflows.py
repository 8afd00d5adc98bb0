"""
Verifier Workflows
==================

Deploy a Groth16 verifier and submit proofs to it through an explicitly
supplied ContractClient.

Version: 0.1.0
"""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from zkcall.blockchain import ContractClient, DeploymentReceipt, TransactionConfirmation
from zkcall.logging import get_logger
from zkcall.zk import (
    Proof,
    PublicSignals,
    encode_calldata,
    load_proof,
    load_public_signals,
)

logger = get_logger(__name__)

VERIFY_METHOD = "verifyProof"


async def deploy_verifier(
    client: ContractClient,
    contract_name: str = "Groth16Verifier",
) -> DeploymentReceipt:
    """
    Deploy a verifier contract.

    Args:
        client: Connected contract client
        contract_name: Compiled verifier contract name

    Returns:
        DeploymentReceipt with the verifier address
    """
    receipt = await client.deploy(contract_name)

    logger.info(
        "verifier_deployed",
        contract=contract_name,
        address=receipt.address,
        tx_hash=receipt.tx_hash,
    )

    return receipt


async def submit_proof(
    client: ContractClient,
    contract_name: str,
    address: str,
    proof: Proof | Mapping[str, Any],
    public_signals: PublicSignals | Sequence[Any],
    strict: bool = False,
) -> TransactionConfirmation:
    """
    Encode a proof and send it to the verifier's `verifyProof`.

    The proof is fully encoded before anything is sent; encoding errors
    propagate without touching the network.

    Args:
        client: Connected contract client
        contract_name: Verifier contract name (selects the ABI)
        address: Deployed verifier address
        proof: Proof model or raw proof document
        public_signals: PublicSignals model or raw JSON array
        strict: Reject values outside the BN254 fields

    Returns:
        TransactionConfirmation of the mined transaction
    """
    calldata = encode_calldata(proof, public_signals, strict=strict)

    confirmation = await client.call(
        contract_name,
        address,
        VERIFY_METHOD,
        calldata.as_args(),
    )

    logger.info(
        "proof_submitted",
        contract=contract_name,
        address=address,
        public_inputs=len(calldata.input),
        tx_hash=confirmation.tx_hash,
        block_number=confirmation.block_number,
    )

    return confirmation


async def submit_proof_files(
    client: ContractClient,
    contract_name: str,
    address: str,
    proof_path: str | Path = "proof.json",
    public_path: str | Path = "public.json",
    strict: bool = False,
) -> TransactionConfirmation:
    """Load proof/public-signal documents from disk and submit them."""
    proof = load_proof(proof_path)
    public_signals = load_public_signals(public_path)

    return await submit_proof(
        client,
        contract_name,
        address,
        proof,
        public_signals,
        strict=strict,
    )
