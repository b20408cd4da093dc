"""CLI entry points."""

from __future__ import annotations

from flask import Flask

from .sync import seed_currencies, sync_rates


def register_cli(app: Flask) -> None:
    """Register CLI commands on the given Flask app."""

    app.cli.add_command(sync_rates)
    app.cli.add_command(seed_currencies)
