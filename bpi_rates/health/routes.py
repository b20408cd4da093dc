"""Route handlers for health checks."""

from __future__ import annotations

from dataclasses import asdict

from flask import current_app
from flask.views import MethodView

from bpi_rates.schemas import HealthStatusSchema, HealthSyncSchema
from bpi_rates.services import RateSynchronizer
from bpi_rates.services.scheduler import SCHEDULER_EXT_KEY

from . import blp


@blp.route("")
class HealthStatus(MethodView):
    @blp.response(200, HealthStatusSchema())
    def get(self):
        return {
            "status": "ok",
            "app": current_app.config.get("APP_NAME", "bpi-rates-service"),
        }


@blp.route("/sync")
class HealthSync(MethodView):
    @blp.response(200, HealthSyncSchema())
    def get(self):
        synchronizer: RateSynchronizer | None = current_app.extensions.get("rate_synchronizer")
        report = synchronizer.get_last_report() if synchronizer else None
        source = current_app.extensions.get("bpi_source")
        scheduler = current_app.extensions.get(SCHEDULER_EXT_KEY)

        return {
            "status": report.status if report is not None else "uninitialized",
            "source": getattr(source, "name", None),
            "scheduler_running": bool(getattr(scheduler, "running", False)),
            "last_sync": asdict(report) if report is not None else None,
        }
