"""Operation registry for named contract invocations.

Invocations arrive as an operation name plus positional arguments (usually
strings from a CLI or wire request). The registry maps names to plain
handler functions taking ``(ctx, *args)``, coerces each argument to the
handler's annotated parameter type, and calls the handler.

Thread Safety:
    Registration and lookup are protected by an RLock. Handler execution is
    not; handlers hold no state of their own.

Example:
    >>> registry = create_contract_registry()
    >>> registry.invoke(ctx, "CreateAsset", ["asset3", "desc", "Org2", "0", "0", "0"])
    >>> registry.invoke(ctx, "AssetExists", ["asset3"])
    True
"""

from __future__ import annotations

import inspect
import time
import typing
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from threading import RLock
from typing import Any

from pydantic import TypeAdapter, ValidationError

from assetledger.contract.approval import approve_first, approve_second
from assetledger.contract.query import get_all_assets
from assetledger.contract.registry import (
    asset_exists,
    create_asset,
    delete_asset,
    read_asset,
    transfer_asset,
    update_asset,
)
from assetledger.contract.seed import init_ledger
from assetledger.errors import InvalidArgumentsError, OperationNotFoundError
from assetledger.observability import get_logger
from assetledger.state.context import TransactionContext

logger = get_logger(__name__)

CONTRACT_NAME = "asset-ledger"
METADATA_OPERATION = "GetMetadata"

Handler = Callable[..., Any]


@dataclass(frozen=True)
class Parameter:
    """One positional parameter of an operation (after the context)."""

    name: str
    annotation: Any
    adapter: TypeAdapter[Any] = field(repr=False, compare=False)

    @property
    def type_name(self) -> str:
        return getattr(self.annotation, "__name__", str(self.annotation))


@dataclass(frozen=True)
class Operation:
    """A registered contract operation."""

    name: str
    handler: Handler
    parameters: tuple[Parameter, ...]
    read_only: bool = False
    aliases: tuple[str, ...] = ()
    returns: str = "None"

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "aliases": list(self.aliases),
            "parameters": [{"name": p.name, "type": p.type_name} for p in self.parameters],
            "returns": self.returns,
            "read_only": self.read_only,
        }


def _inspect_handler(name: str, handler: Handler) -> tuple[tuple[Parameter, ...], str]:
    """Build the parameter list of a handler from its signature and type hints.

    Raises:
        TypeError: If handler is not callable or does not take a context first.
    """
    if not callable(handler):
        raise TypeError(f"Handler for {name} must be callable")
    try:
        sig = inspect.signature(handler)
        hints = typing.get_type_hints(handler)
    except (ValueError, TypeError, NameError):
        raise TypeError(f"Handler signature for {name} could not be inspected") from None
    params = list(sig.parameters.values())
    if not params:
        raise TypeError(f"Handler for {name} must accept a transaction context first")
    parameters = []
    for param in params[1:]:
        if param.kind not in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            raise TypeError(
                f"Handler for {name} must take positional parameters only; got {param.name}"
            )
        annotation = hints.get(param.name, str)
        parameters.append(Parameter(param.name, annotation, TypeAdapter(annotation)))
    return_hint = hints.get("return", type(None))
    returns = "None" if return_hint is type(None) else getattr(
        return_hint, "__name__", str(return_hint)
    )
    return tuple(parameters), returns


class OperationRegistry:
    """Registry mapping operation names (and aliases) to handlers.

    Attributes:
        name: Contract name reported by describe().
    """

    def __init__(self, name: str = CONTRACT_NAME) -> None:
        self.name = name
        self._operations: dict[str, Operation] = {}
        self._aliases: dict[str, str] = {}
        self._lock = RLock()

    def register(
        self,
        name: str,
        handler: Handler,
        *,
        aliases: Sequence[str] = (),
        read_only: bool = False,
    ) -> Operation:
        parameters, returns = _inspect_handler(name, handler)
        operation = Operation(
            name=name,
            handler=handler,
            parameters=parameters,
            read_only=read_only,
            aliases=tuple(aliases),
            returns=returns,
        )
        with self._lock:
            is_override = name in self._operations
            self._operations[name] = operation
            for alias in operation.aliases:
                self._aliases[alias] = name
            logger.debug(
                "ledger.operation.registered",
                operation=name,
                aliases=list(operation.aliases),
                is_override=is_override,
            )
        return operation

    def get(self, name: str) -> Operation:
        """Look up an operation by name or alias.

        Raises:
            OperationNotFoundError: If nothing is registered under name.
        """
        with self._lock:
            canonical = self._aliases.get(name, name)
            operation = self._operations.get(canonical)
        if operation is None:
            raise OperationNotFoundError(name)
        return operation

    def has_operation(self, name: str) -> bool:
        with self._lock:
            return name in self._operations or name in self._aliases

    def list_operations(self) -> list[str]:
        with self._lock:
            return sorted(self._operations)

    def coerce_arguments(self, operation: Operation, args: Sequence[Any]) -> list[Any]:
        """Convert positional arguments to the operation's parameter types.

        Raises:
            InvalidArgumentsError: On an arity mismatch or a value that does
                not convert.
        """
        expected = len(operation.parameters)
        if len(args) != expected:
            raise InvalidArgumentsError(
                operation.name,
                f"expected {expected} argument(s), got {len(args)}",
                details={"expected": [p.name for p in operation.parameters]},
            )
        coerced = []
        for param, value in zip(operation.parameters, args):
            try:
                coerced.append(param.adapter.validate_python(value))
            except ValidationError as exc:
                message = exc.errors()[0]["msg"] if exc.errors() else str(exc)
                raise InvalidArgumentsError(
                    operation.name,
                    f"{param.name}: {message}",
                    details={"parameter": param.name, "expected_type": param.type_name},
                ) from exc
        return coerced

    def invoke(self, ctx: TransactionContext, name: str, args: Sequence[Any] = ()) -> Any:
        """Dispatch one invocation to its handler.

        Args:
            ctx: Transaction context of the current invocation.
            name: Operation name or alias.
            args: Positional arguments, excluding the context.

        Returns:
            Whatever the handler returns (None for write operations).

        Raises:
            OperationNotFoundError: If name is not registered.
            InvalidArgumentsError: If args do not fit the signature.
            LedgerError: Any domain error raised by the handler.
        """
        operation = self.get(name)
        coerced = self.coerce_arguments(operation, args)
        start_time = time.perf_counter()
        logger.debug("ledger.operation.dispatch", operation=operation.name, tx_id=ctx.tx_id)
        result = operation.handler(ctx, *coerced)
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            "ledger.operation.completed",
            operation=operation.name,
            tx_id=ctx.tx_id,
            duration_ms=round(duration_ms, 2),
        )
        return result

    def describe(self) -> dict[str, Any]:
        """Return contract metadata: every operation with its parameters."""
        with self._lock:
            operations = [self._operations[name].describe() for name in sorted(self._operations)]
        return {"contract": self.name, "operations": operations}


def to_wire(result: Any) -> Any:
    """Convert an operation result to a JSON-compatible value."""
    if hasattr(result, "to_wire"):
        return result.to_wire()
    if isinstance(result, (list, tuple)):
        return [to_wire(item) for item in result]
    return result


def create_contract_registry() -> OperationRegistry:
    """Create a registry holding every asset contract operation.

    Operation names match the invocation names clients already use;
    ApproveFirst and ApproveSecond are accepted as aliases for the two
    approval steps.
    """
    registry = OperationRegistry()
    registry.register("InitLedger", init_ledger)
    registry.register("CreateAsset", create_asset)
    registry.register("ReadAsset", read_asset, read_only=True)
    registry.register("UpdateAsset", update_asset)
    registry.register("DeleteAsset", delete_asset)
    registry.register("AssetExists", asset_exists, read_only=True)
    registry.register("TransferAsset", transfer_asset)
    registry.register("ApproveRequestOne", approve_first, aliases=("ApproveFirst",))
    registry.register("ApproveRequestTwo", approve_second, aliases=("ApproveSecond",))
    registry.register("GetAllAssets", get_all_assets, read_only=True)

    def get_metadata(ctx: TransactionContext) -> dict[str, Any]:
        return registry.describe()

    registry.register(METADATA_OPERATION, get_metadata, read_only=True)
    return registry


__all__ = [
    "CONTRACT_NAME",
    "METADATA_OPERATION",
    "Operation",
    "OperationRegistry",
    "Parameter",
    "create_contract_registry",
    "to_wire",
]
