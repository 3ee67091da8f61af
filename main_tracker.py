"""Mini README: Entry point CLI for the banking transaction tracker.

This script exposes a Typer CLI with two commands: ``run`` starts the
FastAPI service under uvicorn, and ``summary`` prints the balance and
statistics of the stored ledger without starting a server. Both read
defaults from ``BANK_TRACKER_*`` settings.
"""

from __future__ import annotations

import typer
import uvicorn

from bank_tracker.configuration import get_settings
from bank_tracker.ledger import Ledger
from bank_tracker.logging_utils import configure_root_logger
from bank_tracker.persistence import JsonFileStore

cli = typer.Typer(help="Run and inspect the banking transaction tracker.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 / :: wildcard addresses directly.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting tracker on {effective_host}:{effective_port}.\n"
        f"Ledger endpoint: http://{browser_host}:{effective_port}/ledger"
    )
    uvicorn.run(
        "bank_tracker.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary() -> None:
    """Print the stored ledger's balance and statistics."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    store = JsonFileStore(settings.data_directory, settings.storage_key)
    ledger = Ledger.hydrate(store, max_amount=settings.max_transaction_amount)
    stats = ledger.statistics()
    typer.echo(f"Snapshot: {store.describe()['path']}")
    typer.echo(f"Balance: {stats.balance:.2f}")
    typer.echo(
        f"Transactions: {stats.count} "
        f"({stats.deposit_count} deposits totalling {stats.total_deposits:.2f}, "
        f"{stats.withdrawal_count} withdrawals totalling {stats.total_withdrawals:.2f})"
    )
    if ledger.customer:
        typer.echo(f"Customer: {ledger.customer.name} <{ledger.customer.email}>")
    if ledger.last_persistence_error is not None:
        typer.echo(f"Warning: {ledger.last_persistence_error}", err=True)


if __name__ == "__main__":
    cli()
