"""
Field Element Conversion
========================

Parsing of decimal field elements (as emitted by snarkjs) and their
hexadecimal rendering for verifier calldata.

Values are Python ints throughout, so 254-bit coordinates never lose precision.

Version: 0.1.0
"""

import re
from typing import Any

from zkcall.zk.errors import InvalidFieldElement


# BN254 (alt_bn128 / snarkjs "bn128") moduli
BN254_BASE_FIELD_MODULUS = 21888242871839275222246405745257275088696311157297823662689037894645226208583
BN254_SCALAR_FIELD_MODULUS = 21888242871839275222246405745257275088548364400416034343698204186575808495617

_DECIMAL_RE = re.compile(r"[0-9]+")


def parse_field_element(value: Any, path: str = "value") -> int:
    """
    Parse a non-negative decimal field element.

    Args:
        value: Decimal string (surrounding whitespace allowed) or int
        path: Field path reported on failure (e.g. "pi_b[1][0]")

    Returns:
        The value as an arbitrary-precision int

    Raises:
        InvalidFieldElement: If the value is not a non-negative integer
    """
    # bool is an int subclass
    if isinstance(value, bool):
        raise InvalidFieldElement(path, value, "booleans are not field elements")

    if isinstance(value, int):
        if value < 0:
            raise InvalidFieldElement(path, value, "negative value")
        return value

    if isinstance(value, str):
        text = value.strip()
        if text.startswith("-") and _DECIMAL_RE.fullmatch(text[1:]):
            raise InvalidFieldElement(path, value, "negative value")
        if not _DECIMAL_RE.fullmatch(text):
            raise InvalidFieldElement(path, value, "not a decimal integer")
        try:
            return int(text)
        except ValueError as e:
            # e.g. exceeds the interpreter's int string conversion limit
            raise InvalidFieldElement(path, value, str(e)) from e

    raise InvalidFieldElement(path, value, f"unsupported type {type(value).__name__}")


def decimal_to_hex(value: Any, path: str = "value") -> str:
    """
    Convert a decimal field element to 0x-prefixed lowercase hex.

    No padding is applied: "255" -> "0xff", "0" -> "0x0".
    """
    return hex(parse_field_element(value, path))


def check_field_range(value: int, modulus: int, path: str) -> int:
    """Raise InvalidFieldElement unless 0 <= value < modulus."""
    if value >= modulus:
        raise InvalidFieldElement(path, value, "not below the field modulus")
    return value
