"""Application configuration classes."""

from __future__ import annotations

import os

SUPPORTED_BPI_SOURCES = {"coindesk", "static", "offline"}
SOURCE_ALIASES = {"offline": "static"}


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


class BaseConfig:
    """Base configuration shared across environments."""

    SCHEDULER_ENABLED = _get_env("SCHEDULER_ENABLED", "true").lower() == "true"
    SCHEDULER_TIMEZONE = _get_env("SCHEDULER_TIMEZONE", "UTC")
    RATES_SYNC_CRON = _get_env("RATES_SYNC_CRON", "*/10 * * * *")
    RATES_SYNC_SINGLE_FLIGHT = _get_env("RATES_SYNC_SINGLE_FLIGHT", "false").lower() == "true"

    APP_NAME = "bpi-rates-service"
    SECRET_KEY = _get_env("SECRET_KEY", "change-me")
    SQLALCHEMY_DATABASE_URI = _get_env("DATABASE_URL", "sqlite:///bpi-rates.db")
    SEED_REFERENCE_CURRENCIES = _get_env("SEED_REFERENCE_CURRENCIES", "true").lower() == "true"
    BPI_SOURCE = _get_env("BPI_SOURCE", "coindesk")
    COINDESK_URL = _get_env("COINDESK_URL", "https://api.coindesk.com/v1/bpi/currentprice.json")
    REQUEST_TIMEOUT_SECONDS = float(_get_env("REQUEST_TIMEOUT_SECONDS", "10"))
    LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
    LOG_JSON_ENABLED = _get_env("LOG_JSON_ENABLED", "false").lower() == "true"
    LOG_FORMAT = _get_env("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")


class DevelopmentConfig(BaseConfig):
    """Configuration for local development."""

    DEBUG = True
    TESTING = False


class ProductionConfig(BaseConfig):
    """Configuration for production deployments."""

    DEBUG = False
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite: no network, no background jobs."""

    DEBUG = False
    TESTING = True
    SCHEDULER_ENABLED = False
    SEED_REFERENCE_CURRENCIES = False
    BPI_SOURCE = "static"


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(config_name: str | None = None) -> type[BaseConfig]:
    """Return the config class for the requested environment.

    Args:
        config_name: Optional explicit config identifier. If omitted, the
            APP_ENV environment variable is consulted.

    Raises:
        KeyError: If the requested configuration is not defined.
        ValueError: If the configured document source is not supported.
    """

    env_candidate = config_name if config_name is not None else os.getenv("APP_ENV", "development")
    env_name = (env_candidate or "development").lower()
    try:
        config_cls = CONFIG_BY_ENV[env_name]
    except KeyError as exc:
        raise KeyError(f"Unknown APP_ENV '{env_name}'") from exc

    _validate_source(config_cls)
    return config_cls


def _validate_source(config_cls: type[BaseConfig]) -> None:
    normalized = _normalize_source(config_cls.BPI_SOURCE)
    if normalized not in SUPPORTED_BPI_SOURCES:
        raise ValueError(
            f"Unsupported BPI_SOURCE '{config_cls.BPI_SOURCE}'. "
            f"Allowed values: {sorted(SUPPORTED_BPI_SOURCES)}"
        )
    config_cls.BPI_SOURCE = normalized


def _normalize_source(value: str | None) -> str:
    if not value:
        return ""
    normalized = value.strip().lower()
    return SOURCE_ALIASES.get(normalized, normalized)
