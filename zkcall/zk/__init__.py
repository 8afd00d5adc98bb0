"""
ZK-SNARK Calldata Module
========================

Turn snarkjs Groth16 artifacts into verifier calldata.

Usage:
    from zkcall.zk import encode_calldata, load_proof, load_public_signals

    calldata = encode_calldata(load_proof("proof.json"), load_public_signals("public.json"))
    a, b, c, inputs = calldata.as_args()

Version: 0.1.0
"""

from zkcall.zk.documents import load_json_document, load_proof, load_public_signals
from zkcall.zk.encoder import encode_calldata
from zkcall.zk.errors import (
    CalldataError,
    DocumentError,
    InvalidFieldElement,
    MalformedProofShape,
)
from zkcall.zk.fields import (
    BN254_BASE_FIELD_MODULUS,
    BN254_SCALAR_FIELD_MODULUS,
    decimal_to_hex,
    parse_field_element,
)
from zkcall.zk.models import Calldata, G1Point, G2Point, Proof, PublicSignals


__all__ = [
    # Encoder
    "encode_calldata",
    "decimal_to_hex",
    "parse_field_element",
    "BN254_BASE_FIELD_MODULUS",
    "BN254_SCALAR_FIELD_MODULUS",
    # Documents
    "load_json_document",
    "load_proof",
    "load_public_signals",
    # Models
    "Proof",
    "G1Point",
    "G2Point",
    "PublicSignals",
    "Calldata",
    # Errors
    "CalldataError",
    "InvalidFieldElement",
    "MalformedProofShape",
    "DocumentError",
]
