"""CoinDesk blueprint exposing the raw, converted and sync operations."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("CoinDesk", __name__, description="Price index fetch, conversion and sync")

from . import routes  # noqa: E402,F401
