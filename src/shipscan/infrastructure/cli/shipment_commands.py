"""CLI commands for shipment history."""

from __future__ import annotations

import click

from shipscan.application.shipment_history import (
    ShipmentHistoryHandler,
    ShowShipmentHandler,
)
from shipscan.domain.exceptions import DomainException
from shipscan.infrastructure.bootstrap import unit_of_work
from shipscan.infrastructure.cli.errors import to_click_exception


@click.command("list")
@click.option("--search", default=None, help="Filter by order number or customer.")
@click.pass_obj
def shipment_list(settings, search: str | None) -> None:
    """List finalized shipments, newest first."""
    try:
        shipments = ShipmentHistoryHandler(unit_of_work(settings)).handle(search=search)
    except DomainException as exc:
        raise to_click_exception(exc)

    if not shipments:
        click.echo("No shipments found.")
        return

    click.echo(f"{'ID':<6} {'Order No':<14} {'Customer':<24} {'Units':>6}  {'Shipped'}")
    click.echo("-" * 72)
    for s in shipments:
        click.echo(
            f"{s.id:<6} {s.order_no:<14} {s.customer_name:<24} {len(s.lines):>6}  {s.created_at}"
        )


@click.command("show")
@click.option("--id", "shipment_id", required=True, type=int, help="Shipment ID.")
@click.pass_obj
def shipment_show(settings, shipment_id: int) -> None:
    """Show one shipment and the units it carried."""
    try:
        dto = ShowShipmentHandler(unit_of_work(settings)).handle(shipment_id)
    except DomainException as exc:
        raise to_click_exception(exc)

    click.echo(f"Shipment #{dto.id}  order {dto.order_no}")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Shipped:  {dto.created_at}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()
    click.echo(f"  {'Item':<10} {'Unit':<12} {'Barcode'}")
    click.echo(f"  {'-'*40}")
    for line in dto.lines:
        click.echo(f"  {line.order_item_id:<10} {line.unit_id or '-':<12} {line.barcode}")
