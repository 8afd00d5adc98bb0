"""
Proof Document Loading
======================

Read snarkjs `proof.json` / `public.json` artifacts from disk.
"""

import json
from pathlib import Path
from typing import Any

from zkcall.logging import get_logger
from zkcall.zk.errors import DocumentError
from zkcall.zk.models import Proof, PublicSignals

logger = get_logger(__name__)

DEFAULT_PROOF_PATH = Path("proof.json")
DEFAULT_PUBLIC_PATH = Path("public.json")


def load_json_document(path: str | Path) -> Any:
    """
    Read and parse a JSON document.

    Raises:
        DocumentError: If the file is missing, unreadable or not valid JSON
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except FileNotFoundError as e:
        raise DocumentError(str(path), "file not found") from e
    except json.JSONDecodeError as e:
        raise DocumentError(str(path), f"invalid JSON ({e.msg} at line {e.lineno})") from e
    except OSError as e:
        raise DocumentError(str(path), e.strerror or str(e)) from e

    logger.debug("json_document_loaded", path=str(path))
    return document


def load_proof(path: str | Path = DEFAULT_PROOF_PATH) -> Proof:
    """Load and validate a Groth16 proof document."""
    return Proof.from_document(load_json_document(path))


def load_public_signals(path: str | Path = DEFAULT_PUBLIC_PATH) -> PublicSignals:
    """Load and validate a public signals document."""
    return PublicSignals.from_document(load_json_document(path))
