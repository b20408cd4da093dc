from __future__ import annotations

from unittest.mock import MagicMock, patch

from apscheduler.triggers.cron import CronTrigger
from flask import Flask
from sqlalchemy.exc import OperationalError

from bpi_rates.services import scheduler as scheduler_module
from bpi_rates.services.scheduler import (
    SCHEDULER_EXT_KEY,
    SYNC_JOB_ID,
    _run_sync,
    init_scheduler,
    shutdown_scheduler,
)


def _make_app(**config) -> Flask:
    app = Flask(__name__)
    app.config.update(config)
    return app


def test_scheduler_disabled_returns_none():
    app = _make_app(SCHEDULER_ENABLED=False)

    assert init_scheduler(app) is None
    assert SCHEDULER_EXT_KEY not in app.extensions


def test_scheduler_registers_single_cron_job():
    app = _make_app(SCHEDULER_ENABLED=True, RATES_SYNC_CRON="*/10 * * * *")

    with patch.object(scheduler_module.atexit, "register"):
        scheduler = init_scheduler(app)
    try:
        assert scheduler is not None
        assert scheduler.running
        assert app.extensions[SCHEDULER_EXT_KEY] is scheduler
        jobs = scheduler.get_jobs()
        assert [job.id for job in jobs] == [SYNC_JOB_ID]
        job = jobs[0]
        assert isinstance(job.trigger, CronTrigger)
        assert str(job.trigger.fields[6]) == "*/10"
        assert job.max_instances == 1
        assert init_scheduler(app) is scheduler
    finally:
        shutdown_scheduler(app)

    assert SCHEDULER_EXT_KEY not in app.extensions
    assert not scheduler.running
    shutdown_scheduler(app)


def test_run_sync_invokes_synchronizer_inside_app_context():
    app = _make_app()
    synchronizer = MagicMock()
    app.extensions["rate_synchronizer"] = synchronizer

    _run_sync(app)

    synchronizer.sync_once.assert_called_once_with()


def test_run_sync_logs_store_failures_without_raising():
    app = _make_app()
    synchronizer = MagicMock()
    synchronizer.sync_once.side_effect = OperationalError("UPDATE", {}, Exception("locked"))
    app.extensions["rate_synchronizer"] = synchronizer

    with patch.object(scheduler_module.logger, "exception") as mock_exception:
        _run_sync(app)

    mock_exception.assert_called_once()


def test_run_sync_without_synchronizer_warns():
    app = _make_app()

    with patch.object(scheduler_module.logger, "warning") as mock_warning:
        _run_sync(app)

    mock_warning.assert_called_once()
