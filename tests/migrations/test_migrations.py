"""Smoke tests for Alembic migrations."""

from __future__ import annotations

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

PROJECT_ROOT = Path(__file__).resolve().parents[2]
ALEMBIC_CONFIG_PATH = PROJECT_ROOT / "alembic.ini"


@pytest.fixture()
def alembic_config(tmp_path):
    """Provide an Alembic config pointing to a temporary SQLite database."""

    config = Config(str(ALEMBIC_CONFIG_PATH))
    config.set_main_option("sqlalchemy.url", f"sqlite:///{tmp_path / 'migrate.db'}")
    return config


def test_alembic_upgrade_and_downgrade(alembic_config):
    """Upgrade creates both rate tables; downgrade removes them again."""

    command.upgrade(alembic_config, "head")

    engine = create_engine(alembic_config.get_main_option("sqlalchemy.url"))
    tables = set(inspect(engine).get_table_names())
    assert {"currency", "exchange_rate"}.issubset(tables)

    columns = {column["name"] for column in inspect(engine).get_columns("exchange_rate")}
    assert columns == {"code", "rate", "updated_at"}
    pk = inspect(engine).get_pk_constraint("currency")
    assert pk["constrained_columns"] == ["code"]

    command.downgrade(alembic_config, "base")

    tables = set(inspect(engine).get_table_names())
    assert "currency" not in tables
    assert "exchange_rate" not in tables
    engine.dispose()
