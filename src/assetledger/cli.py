"""Command-line interface for the asset ledger.

Each command runs one contract invocation through the gateway against the
configured world state. Results are printed as JSON on stdout; ledger
errors are printed as ``{code, message, details}`` JSON on stderr with exit
code 1.

Example:
    >>> # From terminal:
    >>> # assetledger --version
    >>> # assetledger init
    >>> # assetledger create asset3 desc Org2
    >>> # assetledger approve-first asset3
    >>> # assetledger list
    >>> # assetledger invoke TransferAsset asset3 Org1
    >>> # assetledger --backend memory operations
"""

import json
import os
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from pydantic import ValidationError

from assetledger import __version__
from assetledger.config import LEDGER_STORAGE_BACKEND_ENV, LedgerConfig
from assetledger.contract.dispatch import METADATA_OPERATION, to_wire
from assetledger.errors import LedgerError
from assetledger.gateway import Gateway
from assetledger.observability import configure_logging
from assetledger.observability.logging import ENV_LOG_LEVEL
from assetledger.state.stores import create_world_state

app = typer.Typer(help="Asset Ledger CLI.")

# Persistent state is the useful default for a CLI; memory lasts one command.
CLI_DEFAULT_BACKEND = "sqlite"
CLI_DEFAULT_LOG_LEVEL = "WARNING"


def _version_callback(value: bool) -> None:
    """Print the version and exit when requested."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


VERSION_OPTION = typer.Option(
    False,
    "--version",
    help="Show Asset Ledger version and exit.",
    callback=_version_callback,
    is_eager=True,
)


def _build_config(
    backend: Optional[str], db_path: Optional[Path], log_level: Optional[str]
) -> LedgerConfig:
    config = LedgerConfig.from_env()
    values: dict[str, Any] = config.model_dump()
    if backend is not None:
        values["storage_backend"] = backend.strip().lower()
    elif LEDGER_STORAGE_BACKEND_ENV not in os.environ:
        values["storage_backend"] = CLI_DEFAULT_BACKEND
    if db_path is not None:
        values["storage_path"] = db_path
    if log_level is not None:
        values["log_level"] = log_level.strip().upper()
    elif ENV_LOG_LEVEL not in os.environ:
        values["log_level"] = CLI_DEFAULT_LOG_LEVEL
    try:
        return LedgerConfig.model_validate(values)
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid configuration: {exc}") from exc


@app.callback()
def cli(
    ctx: typer.Context,
    version: bool = VERSION_OPTION,
    backend: Annotated[
        Optional[str],
        typer.Option(
            "--backend",
            "-b",
            help="World state backend: memory or sqlite (default: sqlite, or LEDGER_STORAGE_BACKEND).",
        ),
    ] = None,
    db_path: Annotated[
        Optional[Path],
        typer.Option("--db-path", help="SQLite database file (default: LEDGER_STORAGE_PATH)."),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Minimum log level written to stderr (default: WARNING, or LEDGER_LOG_LEVEL).",
        ),
    ] = None,
) -> None:
    """Asset Ledger CLI entrypoint."""
    config = _build_config(backend, db_path, log_level)
    configure_logging(
        log_format=config.log_format,
        log_level=config.log_level,
        service_name=config.service_name,
        force=True,
    )
    ctx.obj = Gateway(create_world_state(config))


def _execute(ctx: typer.Context, operation: str, *args: Any, evaluate: bool = False) -> None:
    gateway: Gateway = ctx.obj
    try:
        if evaluate:
            result = gateway.evaluate(operation, *args)
        else:
            result = gateway.submit(operation, *args)
    except LedgerError as exc:
        typer.echo(json.dumps(exc.to_dict(), indent=2), err=True)
        raise typer.Exit(1) from exc
    if result is None:
        result = {"operation": operation, "status": "ok"}
    typer.echo(json.dumps(to_wire(result), indent=2))


@app.command("init")
def init(ctx: typer.Context) -> None:
    """Seed asset1 and asset2 (overwrites them if present)."""
    _execute(ctx, "InitLedger")


@app.command("create")
def create(
    ctx: typer.Context,
    asset_id: Annotated[str, typer.Argument(help="New asset ID.")],
    description: Annotated[str, typer.Argument(help="Free-text description.")],
    owner: Annotated[str, typer.Argument(help="Owning party, e.g. Org1.")],
    approval_one: Annotated[int, typer.Option("--approval-one", help="First approval flag.")] = 0,
    approval_two: Annotated[int, typer.Option("--approval-two", help="Second approval flag.")] = 0,
    registered: Annotated[int, typer.Option("--registered", help="Registered flag.")] = 0,
) -> None:
    """Create a new asset; fails if the ID is taken."""
    _execute(
        ctx, "CreateAsset", asset_id, description, owner, approval_one, approval_two, registered
    )


@app.command("read")
def read(
    ctx: typer.Context,
    asset_id: Annotated[str, typer.Argument(help="Asset ID.")],
) -> None:
    """Show one asset."""
    _execute(ctx, "ReadAsset", asset_id, evaluate=True)


@app.command("update")
def update(
    ctx: typer.Context,
    asset_id: Annotated[str, typer.Argument(help="Asset ID.")],
    description: Annotated[str, typer.Argument(help="Description.")],
    owner: Annotated[str, typer.Argument(help="Owner.")],
    approval_one: Annotated[int, typer.Argument(help="First approval flag.")],
    approval_two: Annotated[int, typer.Argument(help="Second approval flag.")],
    registered: Annotated[int, typer.Argument(help="Registered flag.")],
) -> None:
    """Overwrite every field of an existing asset (no merge)."""
    _execute(
        ctx, "UpdateAsset", asset_id, description, owner, approval_one, approval_two, registered
    )


@app.command("delete")
def delete(
    ctx: typer.Context,
    asset_id: Annotated[str, typer.Argument(help="Asset ID.")],
) -> None:
    """Delete an asset."""
    _execute(ctx, "DeleteAsset", asset_id)


@app.command("exists")
def exists(
    ctx: typer.Context,
    asset_id: Annotated[str, typer.Argument(help="Asset ID.")],
) -> None:
    """Print true if the asset exists, false otherwise."""
    _execute(ctx, "AssetExists", asset_id, evaluate=True)


@app.command("transfer")
def transfer(
    ctx: typer.Context,
    asset_id: Annotated[str, typer.Argument(help="Asset ID.")],
    new_owner: Annotated[str, typer.Argument(help="New owner.")],
) -> None:
    """Change an asset's owner."""
    _execute(ctx, "TransferAsset", asset_id, new_owner)


@app.command("approve-first")
def approve_first(
    ctx: typer.Context,
    asset_id: Annotated[str, typer.Argument(help="Asset ID.")],
) -> None:
    """Record the first approval."""
    _execute(ctx, "ApproveRequestOne", asset_id)


@app.command("approve-second")
def approve_second(
    ctx: typer.Context,
    asset_id: Annotated[str, typer.Argument(help="Asset ID.")],
) -> None:
    """Record the second approval and mark the asset registered."""
    _execute(ctx, "ApproveRequestTwo", asset_id)


@app.command("list")
def list_assets(ctx: typer.Context) -> None:
    """List every asset as {Key, Record} pairs."""
    _execute(ctx, "GetAllAssets", evaluate=True)


@app.command("invoke")
def invoke(
    ctx: typer.Context,
    operation: Annotated[str, typer.Argument(help="Operation name, e.g. CreateAsset.")],
    args: Annotated[
        Optional[list[str]],
        typer.Argument(help="Positional arguments passed to the operation."),
    ] = None,
    evaluate: Annotated[
        bool,
        typer.Option("--evaluate", help="Run without committing (query)."),
    ] = False,
) -> None:
    """Invoke any operation by name with positional string arguments."""
    _execute(ctx, operation, *(args or []), evaluate=evaluate)


@app.command("operations")
def operations(ctx: typer.Context) -> None:
    """Show contract metadata: operations and their parameters."""
    _execute(ctx, METADATA_OPERATION, evaluate=True)


def main() -> None:
    """Run the Asset Ledger CLI."""
    app()


if __name__ == "__main__":
    main()
