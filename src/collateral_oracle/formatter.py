"""Rich console tables for CLI output."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .msg import CollateralInfoResponse, CollateralPriceResponse


def _revoked_text(is_revoked: bool) -> Text:
    return Text("revoked", style="bold red") if is_revoked else Text("active", style="green")


def format_asset_infos_table(infos: list[CollateralInfoResponse], console: Console | None = None) -> None:
    """Print registered collateral assets as a table."""
    console = console or Console()
    table = Table(title="Collateral Assets", show_lines=False)
    table.add_column("Asset", style="cyan", no_wrap=True)
    table.add_column("Source", style="magenta")
    table.add_column("Multiplier", justify="right")
    table.add_column("Status")

    for info in infos:
        table.add_row(
            info.asset,
            info.source_type,
            str(info.multiplier),
            _revoked_text(info.is_revoked),
        )

    if not infos:
        console.print("[dim]No collateral assets registered[/dim]")
        return
    console.print(table)


def format_price_table(price: CollateralPriceResponse, console: Console | None = None) -> None:
    """Print a resolved collateral price."""
    console = console or Console()
    table = Table(title=f"Collateral Price: {price.asset}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Rate", str(price.rate))
    table.add_row("Last updated", str(price.last_updated))
    table.add_row("Multiplier", str(price.multiplier))
    table.add_row("Status", _revoked_text(price.is_revoked))
    console.print(table)
