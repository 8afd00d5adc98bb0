"""
Compiled Contract Artifacts
===========================

Locate ABI and bytecode for a contract by name in a Hardhat
(`artifacts/contracts/<File>.sol/<Name>.json`) or Foundry
(`out/<File>.sol/<Name>.json`) build directory.

Version: 0.1.0
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from zkcall.blockchain.errors import ArtifactNotFoundError, ContractClientError
from zkcall.logging import get_logger

logger = get_logger(__name__)


class ContractArtifact(BaseModel):
    """ABI and creation bytecode of a compiled contract."""

    contract_name: str
    abi: list[dict[str, Any]] = Field(default_factory=list)
    bytecode: str = ""
    source_path: Path | None = None

    def function_abi(self, method: str, argc: int | None = None) -> dict[str, Any]:
        """
        Find a function entry in the ABI.

        Args:
            method: Function name
            argc: Number of arguments, to pick between overloads

        Raises:
            ContractClientError: If no matching function exists
        """
        for entry in self.abi:
            if entry.get("type") != "function" or entry.get("name") != method:
                continue
            if argc is None or len(entry.get("inputs", [])) == argc:
                return entry
        raise ContractClientError(
            f"Contract '{self.contract_name}' has no function {method}"
            + (f" taking {argc} arguments" if argc is not None else "")
        )


def _bytecode_of(data: dict[str, Any]) -> str:
    bytecode = data.get("bytecode", "")
    # Foundry nests the hex under "object"
    if isinstance(bytecode, dict):
        bytecode = bytecode.get("object", "")
    if bytecode and not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    return bytecode


def load_artifact(artifacts_dir: str | Path, contract_name: str) -> ContractArtifact:
    """
    Load the compiled artifact of a contract.

    Args:
        artifacts_dir: Build output directory to search recursively
        contract_name: Contract name (file stem of the artifact JSON)

    Returns:
        ContractArtifact with ABI and bytecode

    Raises:
        ArtifactNotFoundError: If no artifact with that name exists
    """
    artifacts_dir = Path(artifacts_dir)
    candidates = sorted(
        p for p in artifacts_dir.rglob(f"{contract_name}.json")
        if "build-info" not in p.parts
    )

    if not candidates:
        raise ArtifactNotFoundError(contract_name, str(artifacts_dir))

    if len(candidates) > 1:
        logger.warning(
            "multiple_artifacts_found",
            contract=contract_name,
            using=str(candidates[0]),
            count=len(candidates),
        )

    path = candidates[0]
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ContractClientError(f"Cannot read artifact {path}: {e}") from e

    if not isinstance(data, dict) or "abi" not in data:
        raise ContractClientError(f"Artifact {path} has no ABI")

    return ContractArtifact(
        contract_name=data.get("contractName", contract_name),
        abi=data["abi"],
        bytecode=_bytecode_of(data),
        source_path=path,
    )
