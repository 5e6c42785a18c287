"""CLI entrypoint for the collateral oracle."""

from __future__ import annotations

import json
import os
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Callable, Optional

import typer
from pydantic import BaseModel

from .errors import OracleError
from .formatter import format_asset_infos_table, format_price_table
from .logger import setup_logging
from .service import OracleService
from .settings import CONFIG_ENV_VAR, OracleSettings
from .state import AppState


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    add_help_option=True,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
    rich_markup_mode="rich",
    help="Collateral asset registry and price oracle.",
)


class OutputFormat(str, Enum):
    JSON = "json"
    TABLE = "table"


def _echo_json(data: Any) -> None:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    typer.echo(json.dumps(data, indent=2))


def _run(ctx: typer.Context, operation: Callable[[OracleService], Any]) -> Any:
    """Run ``operation`` against the service, turning oracle errors into exit code 1."""
    state: AppState = ctx.obj
    try:
        return operation(OracleService(state))
    except OracleError as e:
        state.logger.error("%s: %s", type(e).__name__, e)
        typer.echo(f"Error ({type(e).__name__}): {e}", err=True)
        raise typer.Exit(code=1) from e


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Path to a TOML config file (can include [collateral_oracle] table).",
        ),
    ] = None,
    state_path: Annotated[
        Optional[Path],
        typer.Option("--state", help="JSON file holding the oracle config and registry."),
    ] = None,
    lcd_endpoint: Annotated[
        Optional[str],
        typer.Option("--lcd-endpoint", help="LCD REST endpoint used for price queries."),
    ] = None,
    query_timeout: Annotated[
        Optional[float],
        typer.Option("--query-timeout", help="Upstream query timeout in seconds."),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Override logging verbosity (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
        ),
    ] = None,
    show_config: Annotated[
        bool,
        typer.Option("--show-config", help="Print effective settings and exit."),
    ] = False,
):
    """Load settings, configure logging and open the state store."""
    if config_path:
        os.environ[CONFIG_ENV_VAR] = str(config_path)

    init_kwargs: dict[str, Any] = {}
    if state_path is not None:
        init_kwargs["state_path"] = state_path
    if lcd_endpoint is not None:
        init_kwargs["lcd_endpoint"] = lcd_endpoint
    if query_timeout is not None:
        init_kwargs["query_timeout"] = query_timeout
    if log_level is not None:
        init_kwargs["log_level"] = log_level.upper()

    settings = OracleSettings(**init_kwargs)
    setup_logging(settings.log_level)

    if show_config:
        _echo_json(settings.as_safe_dict())
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    if settings.state_path is None:
        raise typer.BadParameter(
            "state_path must be configured",
            param_hint=["--state", "COLLATERAL_ORACLE_STATE_PATH"],
        )

    state = AppState.from_settings(settings)
    ctx.obj = state


# --- mutations ---

@app.command()
def init(
    ctx: typer.Context,
    owner: Annotated[str, typer.Argument(help="Owner identity.")],
    mint_contract: Annotated[str, typer.Argument(help="Mint contract identity.")],
    base_denom: Annotated[str, typer.Argument(help="Denomination prices are quoted in.")],
    reference_oracle: Annotated[str, typer.Argument(help="Reference oracle address.")],
):
    """Create the oracle config."""
    config = _run(
        ctx,
        lambda svc: svc.instantiate(owner, mint_contract, base_denom, reference_oracle),
    )
    _echo_json(config)


@app.command("update-config")
def update_config(
    ctx: typer.Context,
    owner: Annotated[Optional[str], typer.Option("--owner")] = None,
    mint_contract: Annotated[Optional[str], typer.Option("--mint-contract")] = None,
    base_denom: Annotated[Optional[str], typer.Option("--base-denom")] = None,
    reference_oracle: Annotated[Optional[str], typer.Option("--reference-oracle")] = None,
):
    """Update only the provided config fields."""
    config = _run(
        ctx,
        lambda svc: svc.update_config(
            owner=owner,
            mint_contract=mint_contract,
            base_denom=base_denom,
            reference_oracle=reference_oracle,
        ),
    )
    _echo_json(config)


@app.command()
def register(
    ctx: typer.Context,
    asset: Annotated[str, typer.Argument(help="Asset identity (denom or contract address).")],
    multiplier: Annotated[str, typer.Option("--multiplier", "-m", help="Risk multiplier.")],
    source: Annotated[
        str,
        typer.Option(
            "--source",
            "-s",
            help="Price source: reference_oracle or band_oracle:<oracle address>.",
        ),
    ] = "reference_oracle",
):
    """Register a collateral asset."""
    info = _run(ctx, lambda svc: svc.register_collateral_asset(asset, source, multiplier))
    _echo_json(info)


@app.command()
def revoke(
    ctx: typer.Context,
    asset: Annotated[str, typer.Argument(help="Asset identity.")],
):
    """Flag a collateral asset as revoked."""
    _echo_json(_run(ctx, lambda svc: svc.revoke_collateral_asset(asset)))


@app.command("update-source")
def update_source(
    ctx: typer.Context,
    asset: Annotated[str, typer.Argument(help="Asset identity.")],
    source: Annotated[
        str, typer.Argument(help="reference_oracle or band_oracle:<oracle address>.")
    ],
):
    """Replace the price source of a collateral asset."""
    _echo_json(_run(ctx, lambda svc: svc.update_collateral_price_source(asset, source)))


@app.command("update-multiplier")
def update_multiplier(
    ctx: typer.Context,
    asset: Annotated[str, typer.Argument(help="Asset identity.")],
    multiplier: Annotated[str, typer.Argument(help="New risk multiplier.")],
):
    """Replace the multiplier of a collateral asset."""
    _echo_json(_run(ctx, lambda svc: svc.update_collateral_multiplier(asset, multiplier)))


# --- queries ---

@app.command("config")
def show_oracle_config(ctx: typer.Context):
    """Print the oracle config."""
    _echo_json(_run(ctx, lambda svc: svc.get_config()))


@app.command()
def price(
    ctx: typer.Context,
    asset: Annotated[str, typer.Argument(help="Asset identity.")],
    block_height: Annotated[
        Optional[int], typer.Option("--block-height", help="Accepted but not used.")
    ] = None,
    output: Annotated[OutputFormat, typer.Option("--format", "-f")] = OutputFormat.JSON,
):
    """Resolve the current price of a collateral asset."""
    state: AppState = ctx.obj
    if state.querier is None and not state.settings.lcd_endpoint:
        raise typer.BadParameter(
            "lcd_endpoint must be configured",
            param_hint=["--lcd-endpoint", "COLLATERAL_ORACLE_LCD_ENDPOINT"],
        )
    result = _run(ctx, lambda svc: svc.get_price(asset, block_height))
    if output == OutputFormat.TABLE:
        format_price_table(result)
    else:
        _echo_json(result)


@app.command("asset-info")
def asset_info(
    ctx: typer.Context,
    asset: Annotated[str, typer.Argument(help="Asset identity.")],
):
    """Print the registry entry of a collateral asset."""
    _echo_json(_run(ctx, lambda svc: svc.get_asset_info(asset)))


@app.command("asset-infos")
def asset_infos(
    ctx: typer.Context,
    output: Annotated[OutputFormat, typer.Option("--format", "-f")] = OutputFormat.JSON,
):
    """List every collateral asset ordered by identity."""
    infos = _run(ctx, lambda svc: svc.list_asset_infos())
    if output == OutputFormat.TABLE:
        format_asset_infos_table(infos)
    else:
        _echo_json({"collaterals": [info.model_dump(mode="json") for info in infos]})


def run() -> None:
    """Entrypoint used by the console script."""
    app()

if __name__ == "__main__":
    run()
