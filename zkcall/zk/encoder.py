"""
Groth16 Calldata Encoder
========================

Reshapes a snarkjs proof and its public signals into the argument tuple
expected by a Solidity Groth16 verifier's `verifyProof`.

Pure and stateless: the same input always yields identical calldata.

Version: 0.1.0
"""

from collections.abc import Mapping, Sequence
from typing import Any

from zkcall.logging import get_logger
from zkcall.zk.fields import (
    BN254_BASE_FIELD_MODULUS,
    BN254_SCALAR_FIELD_MODULUS,
    check_field_range,
)
from zkcall.zk.models import Calldata, Proof, PublicSignals

logger = get_logger(__name__)


def _check_ranges(proof: Proof, public_signals: PublicSignals) -> None:
    """Require coordinates in Fq and public signals in Fr."""
    coordinates = {
        "pi_a[0]": proof.pi_a.x,
        "pi_a[1]": proof.pi_a.y,
        "pi_b[0][0]": proof.pi_b.x[0],
        "pi_b[0][1]": proof.pi_b.x[1],
        "pi_b[1][0]": proof.pi_b.y[0],
        "pi_b[1][1]": proof.pi_b.y[1],
        "pi_c[0]": proof.pi_c.x,
        "pi_c[1]": proof.pi_c.y,
    }
    for path, value in coordinates.items():
        check_field_range(value, BN254_BASE_FIELD_MODULUS, path)

    for i, value in enumerate(public_signals.signals):
        check_field_range(value, BN254_SCALAR_FIELD_MODULUS, f"publicSignals[{i}]")


def encode_calldata(
    proof: Proof | Mapping[str, Any],
    public_signals: PublicSignals | Sequence[Any],
    *,
    strict: bool = False,
) -> Calldata:
    """
    Build verifier calldata from a proof and its public signals.

    Args:
        proof: Validated Proof or a raw proof JSON document
        public_signals: Validated PublicSignals or a raw JSON array
        strict: Also reject values outside the BN254 fields

    Returns:
        Calldata ready to be passed to `verifyProof`

    Raises:
        MalformedProofShape: If the proof or signals have the wrong shape
        InvalidFieldElement: If any leaf is not a valid field element
    """
    if not isinstance(proof, Proof):
        proof = Proof.from_document(proof)
    if not isinstance(public_signals, PublicSignals):
        public_signals = PublicSignals.from_document(public_signals)

    if strict:
        _check_ranges(proof, public_signals)

    b = proof.pi_b
    calldata = Calldata(
        a=(hex(proof.pi_a.x), hex(proof.pi_a.y)),
        # The verifier takes each Fp2 coordinate as (c1, c0); snarkjs emits (c0, c1)
        b=(
            (hex(b.x[1]), hex(b.x[0])),
            (hex(b.y[1]), hex(b.y[0])),
        ),
        c=(hex(proof.pi_c.x), hex(proof.pi_c.y)),
        input=tuple(hex(signal) for signal in public_signals.signals),
    )

    logger.debug(
        "calldata_encoded",
        public_inputs=len(calldata.input),
        strict=strict,
    )

    return calldata
