"""
ZK-SNARK Data Models
====================

Pydantic models for Groth16 proofs, public signals and verifier calldata.

Version: 0.1.0
"""

import json
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from zkcall.zk.errors import MalformedProofShape
from zkcall.zk.fields import parse_field_element


G1_SHAPE = "array of 2 field elements"
G2_SHAPE = "array of 2 arrays of 2 field elements"

_MISSING = object()


def _describe(value: Any) -> str:
    """Short description of a JSON value for shape errors."""
    if value is _MISSING:
        return "nothing"
    if isinstance(value, (list, tuple)):
        return f"array of length {len(value)}"
    if isinstance(value, Mapping):
        return "object"
    return f"{type(value).__name__} {value!r}"


def _pair(container: Any, path: str, expected: str) -> tuple[Any, Any]:
    """Return the first two elements of an array, ignoring any extras."""
    if not isinstance(container, (list, tuple)) or len(container) < 2:
        raise MalformedProofShape(path, expected, _describe(container))
    return container[0], container[1]


def _leaf(value: Any, path: str) -> int:
    """Parse a leaf, rejecting arrays/objects nested one level too deep."""
    if isinstance(value, (list, tuple, Mapping)):
        raise MalformedProofShape(path, "a field element", _describe(value))
    return parse_field_element(value, path)


class G1Point(BaseModel):
    """Affine G1 point (x, y)."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int

    @classmethod
    def from_document(cls, value: Any, path: str) -> "G1Point":
        """Build from `[x, y]` or `[x, y, z]` (z is ignored)."""
        x, y = _pair(value, path, G1_SHAPE)
        return cls(x=_leaf(x, f"{path}[0]"), y=_leaf(y, f"{path}[1]"))


class G2Point(BaseModel):
    """
    Affine G2 point.

    Each coordinate is an Fp2 element kept in the prover's order,
    i.e. `(c0, c1)` exactly as it appears in the proof JSON.
    """

    model_config = ConfigDict(frozen=True)

    x: tuple[int, int]
    y: tuple[int, int]

    @classmethod
    def from_document(cls, value: Any, path: str) -> "G2Point":
        """Build from `[[x0, x1], [y0, y1]]`; a third row is ignored."""
        rows = _pair(value, path, G2_SHAPE)
        coords = []
        for i, row in enumerate(rows):
            row_path = f"{path}[{i}]"
            c0, c1 = _pair(row, row_path, G1_SHAPE)
            coords.append((_leaf(c0, f"{row_path}[0]"), _leaf(c1, f"{row_path}[1]")))
        return cls(x=coords[0], y=coords[1])


class Proof(BaseModel):
    """
    A Groth16 proof.

    Compatible with the snarkjs `proof.json` format.
    """

    model_config = ConfigDict(frozen=True)

    pi_a: G1Point = Field(..., description="Proof point A (G1)")
    pi_b: G2Point = Field(..., description="Proof point B (G2)")
    pi_c: G1Point = Field(..., description="Proof point C (G1)")

    # Protocol info
    protocol: str = Field(default="groth16")
    curve: str = Field(default="bn128")

    @classmethod
    def from_document(cls, document: Any) -> "Proof":
        """
        Validate a raw proof JSON document.

        Raises:
            MalformedProofShape: If a point is missing or has the wrong shape
            InvalidFieldElement: If a coordinate is not a non-negative integer
        """
        if not isinstance(document, Mapping):
            raise MalformedProofShape("proof", "object with pi_a, pi_b, pi_c", _describe(document))

        return cls(
            pi_a=G1Point.from_document(document.get("pi_a", _MISSING), "pi_a"),
            pi_b=G2Point.from_document(document.get("pi_b", _MISSING), "pi_b"),
            pi_c=G1Point.from_document(document.get("pi_c", _MISSING), "pi_c"),
            protocol=str(document.get("protocol", "groth16")),
            curve=str(document.get("curve", "bn128")),
        )


class PublicSignals(BaseModel):
    """Public inputs of a proof, in the circuit's declared order."""

    model_config = ConfigDict(frozen=True)

    signals: tuple[int, ...] = Field(default=(), description="Public signals")

    def __len__(self) -> int:
        return len(self.signals)

    @classmethod
    def from_document(cls, document: Any) -> "PublicSignals":
        """Validate a raw `public.json` document (a flat array)."""
        if isinstance(document, (str, bytes, Mapping)) or not isinstance(document, Sequence):
            raise MalformedProofShape("publicSignals", "flat array of field elements", _describe(document))

        return cls(
            signals=tuple(
                _leaf(value, f"publicSignals[{i}]") for i, value in enumerate(document)
            )
        )


HexPair = tuple[str, str]


class Calldata(BaseModel):
    """
    Arguments for a Groth16 verifier's `verifyProof(a, b, c, input)`.

    Every leaf is a 0x-prefixed lowercase hex string without padding.
    """

    model_config = ConfigDict(frozen=True)

    a: HexPair
    b: tuple[HexPair, HexPair]
    c: HexPair
    input: tuple[str, ...]

    def as_args(self) -> list[Any]:
        """Positional arguments `[a, b, c, input]` as nested lists."""
        return [
            list(self.a),
            [list(row) for row in self.b],
            list(self.c),
            list(self.input),
        ]

    def to_json(self) -> str:
        """Serialize the argument list as a JSON array."""
        return json.dumps(self.as_args())
