"""Asset Ledger Error Taxonomy.

This module defines the error hierarchy for the asset ledger, providing
structured error handling with specific error codes and context information.

Codes follow the ``ledger:<area>/<kind>`` pattern so that callers (the
gateway, the CLI, or a remote invoker) can surface them without parsing
messages.
"""
from __future__ import annotations

from typing import Any


class LedgerError(Exception):
    """Base exception for all asset ledger errors.

    Attributes:
        code: Error code following the ledger:<area>/<kind> pattern
        message: Human-readable error message
        details: Optional additional error context
    """

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{code, message, details}`` dict."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class AssetNotFoundError(LedgerError):
    """Raised when the target asset key is absent from the world state.

    Attributes:
        asset_id: The asset identifier that was looked up
    """

    def __init__(self, asset_id: str, details: dict[str, Any] | None = None) -> None:
        message = f"The asset {asset_id} does not exist"
        super().__init__(
            code="ledger:asset/not_found",
            message=message,
            details={"asset_id": asset_id, **(details or {})},
        )
        self.asset_id = asset_id


class AssetAlreadyExistsError(LedgerError):
    """Raised when creating an asset on a key that is already occupied."""

    def __init__(self, asset_id: str, details: dict[str, Any] | None = None) -> None:
        message = f"The asset {asset_id} already exists"
        super().__init__(
            code="ledger:asset/already_exists",
            message=message,
            details={"asset_id": asset_id, **(details or {})},
        )
        self.asset_id = asset_id


class StoreFailureError(LedgerError):
    """Raised when a call on the state access port itself fails.

    Attributes:
        operation: The port call that failed (get, put, delete, range)
        key: The key involved, if any
    """

    def __init__(
        self,
        operation: str,
        reason: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        target = f" for key {key!r}" if key is not None else ""
        message = f"Failed to {operation} world state{target}: {reason}"
        details_dict: dict[str, Any] = {"operation": operation, "reason": reason}
        if key is not None:
            details_dict["key"] = key
        if details:
            details_dict.update(details)
        super().__init__(
            code="ledger:state/store_failure",
            message=message,
            details=details_dict,
        )
        self.operation = operation
        self.key = key
        self.reason = reason


class DecodeFailureError(LedgerError):
    """Raised when stored bytes do not parse into the asset shape."""

    def __init__(self, key: str, reason: str, details: dict[str, Any] | None = None) -> None:
        message = f"Failed to decode record {key!r}: {reason}"
        super().__init__(
            code="ledger:state/decode_failure",
            message=message,
            details={"key": key, "reason": reason, **(details or {})},
        )
        self.key = key
        self.reason = reason


class OperationNotFoundError(LedgerError):
    """Raised when an invocation names an operation that is not registered.

    Attributes:
        operation: The requested operation name
    """

    def __init__(self, operation: str, details: dict[str, Any] | None = None) -> None:
        message = f"No operation registered with name: {operation}"
        super().__init__(
            code="ledger:contract/operation_not_found",
            message=message,
            details={"operation": operation, **(details or {})},
        )
        self.operation = operation


class InvalidArgumentsError(LedgerError):
    """Raised when invocation arguments do not match the operation signature."""

    def __init__(
        self, operation: str, reason: str, details: dict[str, Any] | None = None
    ) -> None:
        message = f"Invalid arguments for {operation}: {reason}"
        super().__init__(
            code="ledger:contract/invalid_arguments",
            message=message,
            details={"operation": operation, "reason": reason, **(details or {})},
        )
        self.operation = operation
        self.reason = reason


class TransactionClosedError(LedgerError):
    """Raised when a transaction context is used after commit or abort."""

    def __init__(self, tx_id: str, details: dict[str, Any] | None = None) -> None:
        message = f"Transaction {tx_id} is already closed"
        super().__init__(
            code="ledger:state/transaction_closed",
            message=message,
            details={"tx_id": tx_id, **(details or {})},
        )
        self.tx_id = tx_id


class MVCCConflictError(LedgerError):
    """Raised at commit when a key read by the transaction changed underneath it.

    Attributes:
        tx_id: The transaction being committed
        key: The first key whose version no longer matches
        read_version: Version observed when the key was read
        current_version: Version in the world state at commit time
    """

    def __init__(
        self,
        tx_id: str,
        key: str,
        read_version: int,
        current_version: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = (
            f"Transaction {tx_id} read {key!r} at version {read_version}, "
            f"but the world state is at version {current_version}"
        )
        super().__init__(
            code="ledger:state/mvcc_conflict",
            message=message,
            details={
                "tx_id": tx_id,
                "key": key,
                "read_version": read_version,
                "current_version": current_version,
                **(details or {}),
            },
        )
        self.tx_id = tx_id
        self.key = key
        self.read_version = read_version
        self.current_version = current_version
