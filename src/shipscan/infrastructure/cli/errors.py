"""Turns domain errors into user-facing click errors."""

from __future__ import annotations

import click

from shipscan.domain.exceptions import DomainException


def to_click_exception(exc: DomainException) -> click.ClickException:
    if exc.retryable:
        return click.ClickException(f"{exc} (temporary, retry the same command)")
    return click.ClickException(str(exc))
