"""
Calldata Encoding Errors
========================

Raised synchronously by the encoder; never retried.
"""

from typing import Any


class CalldataError(ValueError):
    """Base class for proof/public-signal encoding failures."""


class InvalidFieldElement(CalldataError):
    """A leaf value is not a parseable non-negative integer."""

    def __init__(self, path: str, value: Any, reason: str = "not a non-negative integer") -> None:
        self.path = path
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid field element at {path}: {value!r} ({reason})")


class MalformedProofShape(CalldataError):
    """The proof (or public signals) does not have the expected array shape."""

    def __init__(self, path: str, expected: str, found: str) -> None:
        self.path = path
        self.expected = expected
        self.found = found
        super().__init__(f"Malformed proof at {path}: expected {expected}, found {found}")


class DocumentError(Exception):
    """An input JSON document could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load {path}: {reason}")
