"""
Test Configuration
==================

Pytest fixtures for zkcall tests.
"""

import json
import os
from collections.abc import AsyncIterator, Iterator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

from zkcall.blockchain import MockContractClient
from zkcall.config import get_settings

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["NETWORK_MODE"] = "mock"


# snarkjs-shaped Groth16 proof (bn128) with homogeneous coordinates
SNARKJS_PROOF: dict[str, Any] = {
    "pi_a": [
        "4375086649624565624390916098826633458917016787302936617339431330012457624785",
        "12698437367108315393399618290219839282530958722698453024451736017462622400585",
        "1",
    ],
    "pi_b": [
        [
            "15406829101633408617498062296449296738113458390016389451549001541580155591585",
            "8839467993862898563003024606346916993925898466497223127372087530018522549097",
        ],
        [
            "4359297431010768539098451282364489812617221024812003049418116102513307806404",
            "20542539219862113521427426768396734811155484219089389669993853087604436154217",
        ],
        ["1", "0"],
    ],
    "pi_c": [
        "9961609612542463447398862453616440656478395632713580102934838946339616546096",
        "2201617766064413545618893961738773549939787151045929062393396848098233939582",
        "1",
    ],
    "protocol": "groth16",
    "curve": "bn128",
}

SNARKJS_PUBLIC: list[str] = [
    "1",
    "17744324452969507964952966931655538206777558023197549666337974697819074895989",
]


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Re-read settings from the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_proof() -> dict[str, Any]:
    """Raw snarkjs proof document."""
    return json.loads(json.dumps(SNARKJS_PROOF))


@pytest.fixture
def sample_public_signals() -> list[str]:
    """Raw snarkjs public signals document."""
    return list(SNARKJS_PUBLIC)


@pytest.fixture
def small_proof() -> dict[str, Any]:
    """Proof with small coordinates, handy for exact assertions."""
    return {
        "pi_a": ["10", "20", "1"],
        "pi_b": [["1", "2"], ["3", "4"], ["1", "0"]],
        "pi_c": ["5", "6", "1"],
    }


@pytest.fixture
def proof_files(
    tmp_path: Path,
    sample_proof: dict[str, Any],
    sample_public_signals: list[str],
) -> tuple[Path, Path]:
    """proof.json / public.json written to a temp directory."""
    proof_path = tmp_path / "proof.json"
    public_path = tmp_path / "public.json"
    proof_path.write_text(json.dumps(sample_proof))
    public_path.write_text(json.dumps(sample_public_signals))
    return proof_path, public_path


@pytest_asyncio.fixture
async def mock_client() -> AsyncIterator[MockContractClient]:
    """Connected mock client, fresh for each test."""
    client = MockContractClient()
    await client.connect()
    yield client
    await client.disconnect()
