"""CLI commands for scanning and finalizing orders."""

from __future__ import annotations

import click

from shipscan.application.finalize_shipment import FinalizeShipmentHandler
from shipscan.application.list_open_orders import ListOpenOrdersHandler
from shipscan.application.show_scan_status import ShowScanStatusHandler
from shipscan.application.submit_scan import SubmitScanHandler
from shipscan.domain.exceptions import DomainException
from shipscan.domain.model.scan import (
    Accepted,
    AlreadyScanned,
    NoMatch,
    QuantityExceeded,
    UnitNotEligible,
)
from shipscan.infrastructure.bootstrap import unit_of_work
from shipscan.infrastructure.cli.errors import to_click_exception


def _describe(barcode: str, result) -> str:
    if isinstance(result, Accepted):
        text = (
            f"{barcode}: accepted for item {result.order_item_id} "
            f"({result.new_count} scanned, {result.remaining} remaining)"
        )
        if result.needs_review:
            text += f"  [{result.match_kind.value.lower()} match, review]"
        return text
    if isinstance(result, AlreadyScanned):
        return f"{barcode}: already scanned for item {result.order_item_id}"
    if isinstance(result, QuantityExceeded):
        return (
            f"{barcode}: rejected, item {result.order_item_id} "
            f"already has all {result.quantity} units"
        )
    if isinstance(result, (NoMatch, UnitNotEligible)):
        return f"{barcode}: rejected, {result.reason}"
    return f"{barcode}: {result.status}"


@click.command("scan")
@click.option("--order", "order_id", required=True, type=int, help="Order ID being scanned.")
@click.argument("barcodes", nargs=-1, required=True)
@click.pass_obj
def scan(settings, order_id: int, barcodes: tuple[str, ...]) -> None:
    """Submit one or more barcode scans for an order."""
    handler = SubmitScanHandler(unit_of_work(settings))

    rejected = 0
    for barcode in barcodes:
        try:
            result = handler.handle(order_id, barcode)
        except DomainException as exc:
            raise to_click_exception(exc)
        if not result.accepted:
            rejected += 1
        click.echo(_describe(barcode, result))

    if rejected:
        raise SystemExit(2)


@click.command("status")
@click.option("--order", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def status(settings, order_id: int) -> None:
    """Show scan progress for an order."""
    handler = ShowScanStatusHandler(unit_of_work(settings))

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise to_click_exception(exc)

    click.echo(f"Order {dto.order_no}  (id={dto.order_id}, status={dto.status})")
    click.echo()
    click.echo(f"  {'Item':<10} {'Type':<20} {'Qty':>5} {'Scanned':>8} {'Remaining':>10}")
    click.echo(f"  {'-'*57}")
    for item in dto.items:
        click.echo(
            f"  {item.order_item_id:<10} {item.type_tag:<20} {item.quantity:>5} "
            f"{item.scanned_count:>8} {item.remaining:>10}"
        )
        for barcode in item.scanned_barcodes:
            flag = "  (review)" if barcode in item.review_barcodes else ""
            click.echo(f"      {barcode}{flag}")
    click.echo(f"  {'-'*57}")
    click.echo(f"  {'Scanned':<36} {dto.scanned_total:>5} / {dto.required_total}")
    if dto.ready:
        click.echo("  Ready to finalize.")


@click.command("finalize")
@click.option("--order", "order_id", required=True, type=int, help="Order ID to ship.")
@click.option("--notes", default=None, help="Free-text shipment notes.")
@click.pass_obj
def finalize(settings, order_id: int, notes: str | None) -> None:
    """Close a fully scanned order as shipped."""
    handler = FinalizeShipmentHandler(unit_of_work(settings))

    try:
        dto = handler.handle(order_id, notes=notes)
    except DomainException as exc:
        raise to_click_exception(exc)

    click.echo(
        f"Order {dto.order_no} shipped as shipment #{dto.id}, {len(dto.lines)} units."
    )


@click.command("orders")
@click.pass_obj
def orders(settings) -> None:
    """List orders awaiting shipment."""
    try:
        lines = ListOpenOrdersHandler(unit_of_work(settings)).handle()
    except DomainException as exc:
        raise to_click_exception(exc)

    if not lines:
        click.echo("No open orders.")
        return

    click.echo(f"{'ID':<6} {'Order No':<14} {'Customer':<24} {'Scanned':>10}")
    click.echo("-" * 57)
    for o in lines:
        progress = f"{o.scanned_total}/{o.required_total}"
        click.echo(f"{o.id:<6} {o.order_no:<14} {o.customer_name:<24} {progress:>10}")
