from pathlib import Path

import click
import pydantic

from shipscan.infrastructure.cli.scan_commands import finalize, orders, scan, status
from shipscan.infrastructure.cli.shipment_commands import shipment_list, shipment_show
from shipscan.infrastructure.config import Settings
from shipscan.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the JSON store (overrides SHIPSCAN_DATA_DIR).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (overrides SHIPSCAN_LOG_LEVEL).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, log_level: str | None) -> None:
    """shipscan — shipment scan-matching and finalization"""
    overrides = {}
    if data_dir is not None:
        overrides["data_dir"] = data_dir
    if log_level is not None:
        overrides["log_level"] = log_level
    try:
        settings = Settings(**overrides)
    except pydantic.ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")

    configure_logging(level=settings.log_level, fmt=settings.log_format)
    ctx.obj = settings


@cli.group()
def shipments() -> None:
    """Browse shipment history."""


# Register subcommands
cli.add_command(scan)
cli.add_command(status)
cli.add_command(finalize)
cli.add_command(orders)
shipments.add_command(shipment_list)
shipments.add_command(shipment_show)
