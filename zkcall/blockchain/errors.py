"""
Contract Client Errors
======================
"""


class ContractClientError(Exception):
    """Base error for contract client operations."""


class NotConnectedError(ContractClientError):
    """The client is not connected to a network."""


class ArtifactNotFoundError(ContractClientError):
    """No compiled artifact (ABI/bytecode) exists for a contract name."""

    def __init__(self, contract_name: str, location: str) -> None:
        self.contract_name = contract_name
        self.location = location
        super().__init__(f"No artifact for contract '{contract_name}' under {location}")


class TransactionRevertedError(ContractClientError):
    """A submitted transaction was mined with a failure status."""

    def __init__(self, tx_hash: str, method: str, reason: str | None = None) -> None:
        self.tx_hash = tx_hash
        self.method = method
        self.reason = reason
        message = f"Transaction {tx_hash} calling {method} reverted"
        if reason:
            message += f": {reason}"
        super().__init__(message)
