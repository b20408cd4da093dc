"""Rates blueprint listing the synced rate table."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("Rates", __name__, description="Synced exchange rates")

from . import routes  # noqa: E402,F401
