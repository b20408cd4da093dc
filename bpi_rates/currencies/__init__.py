"""Currencies blueprint providing reference-table CRUD endpoints."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("Currencies", __name__, description="Reference currency endpoints")

from . import routes  # noqa: E402,F401
