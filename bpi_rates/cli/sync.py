"""CLI commands for manual rate sync and reference seeding."""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

from bpi_rates.services import RateSynchronizer, seed_reference_currencies


@click.command("sync-rates")
@with_appcontext
def sync_rates() -> None:
    """Run one rate sync pass against the configured source."""

    synchronizer: RateSynchronizer = current_app.extensions["rate_synchronizer"]
    synchronizer.sync_once()

    report = synchronizer.get_last_report()
    if report is None:
        click.echo("Sync finished without a report.")
        return
    if report.status == "synced":
        click.echo(
            f"Synced {len(report.currencies)} currencies "
            f"({', '.join(report.currencies) or 'none'}) as of {report.updated_at:%Y/%m/%d %H:%M:%S}."
        )
    else:
        click.echo(f"Sync {report.status}: {report.reason or 'no details'}")


@click.command("seed-currencies")
@with_appcontext
def seed_currencies() -> None:
    """Insert the default reference currencies that are missing."""

    result = seed_reference_currencies()
    click.echo(
        f"Created {len(result.created)} currencies ({', '.join(result.created) or 'none'}); "
        f"{len(result.skipped)} already present."
    )
