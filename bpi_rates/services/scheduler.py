"""Scheduler setup for the periodic rate sync."""

from __future__ import annotations

import atexit
import logging
from typing import cast

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

from bpi_rates.services.rate_sync import RateSynchronizer

logger = logging.getLogger(__name__)

SCHEDULER_EXT_KEY = "apscheduler"
SYNC_JOB_ID = "sync_rates"
DEFAULT_SYNC_CRON = "*/10 * * * *"


def _run_sync(app: Flask) -> None:
    with app.app_context():
        synchronizer = cast(
            RateSynchronizer | None,
            app.extensions.get("rate_synchronizer"),
        )
        if synchronizer is None:
            logger.warning("No rate synchronizer configured; skipping scheduled sync.")
            return

        try:
            synchronizer.sync_once()
        except SQLAlchemyError:
            logger.exception("Scheduled rate sync failed while writing to the rate store")


def init_scheduler(app: Flask) -> BackgroundScheduler | None:
    """Start APScheduler with the periodic sync job if enabled."""

    if not app.config.get("SCHEDULER_ENABLED", True):
        logger.info("Scheduler disabled via configuration.")
        return None

    existing = app.extensions.get(SCHEDULER_EXT_KEY)
    if existing is not None:
        return existing

    scheduler = BackgroundScheduler(timezone=app.config.get("SCHEDULER_TIMEZONE", "UTC"))
    cron_expr = app.config.get("RATES_SYNC_CRON", DEFAULT_SYNC_CRON)
    trigger = CronTrigger.from_crontab(cron_expr)
    scheduler.add_job(
        _run_sync,
        trigger=trigger,
        args=[app],
        id=SYNC_JOB_ID,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()

    app.extensions[SCHEDULER_EXT_KEY] = scheduler
    atexit.register(shutdown_scheduler, app)

    logger.info("APScheduler started with cron '%s'", cron_expr)
    return scheduler


def shutdown_scheduler(app: Flask, wait: bool = False) -> None:
    """Stop the periodic sync job; safe to call more than once."""

    scheduler = app.extensions.pop(SCHEDULER_EXT_KEY, None)
    if scheduler is not None and getattr(scheduler, "running", False):
        scheduler.shutdown(wait=wait)
        logger.info("APScheduler stopped")
