"""
zkcall
======

Prepare Groth16 proofs for on-chain verifier contracts.

Modules:
    - zk: proof models and the calldata encoder
    - blockchain: contract client interface (mock / web3 RPC)
    - workflows: deploy a verifier, submit a proof
    - config: configuration management with Pydantic Settings
    - logging: structured logging with structlog

Version: 0.1.0
"""

__version__ = "0.1.0"

from zkcall.logging import get_logger, setup_logging
from zkcall.zk import Calldata, encode_calldata

__all__ = [
    "Calldata",
    "encode_calldata",
    "get_logger",
    "setup_logging",
    "__version__",
]
