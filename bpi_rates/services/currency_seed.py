"""Seeding of the default reference currencies."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from bpi_rates.database import SessionLocal, get_session
from bpi_rates.models import Currency

logger = logging.getLogger(__name__)

DEFAULT_CURRENCIES: tuple[tuple[str, str], ...] = (
    ("USD", "美元"),
    ("GBP", "英鎊"),
    ("EUR", "歐元"),
)


@dataclass(frozen=True)
class SeedResult:
    created: list[str]
    skipped: list[str]


def seed_reference_currencies() -> SeedResult:
    """Insert each default currency that is not present yet; existing names are kept."""

    session = get_session()
    created: list[str] = []
    skipped: list[str] = []
    try:
        for code, name in DEFAULT_CURRENCIES:
            if session.get(Currency, code) is not None:
                skipped.append(code)
                continue
            session.add(Currency(code=code, localized_name=name))
            created.append(code)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise
    finally:
        SessionLocal.remove()

    return SeedResult(created=created, skipped=skipped)


def init_reference_seed(app) -> SeedResult | None:
    """Seed reference currencies at start-up when enabled."""

    if not app.config.get("SEED_REFERENCE_CURRENCIES", True):
        return None

    with app.app_context():
        try:
            result = seed_reference_currencies()
        except OperationalError as exc:
            # Migrations may not have created the table yet.
            logger.warning("Skipping reference currency seed: %s", exc)
            return None

    if result.created:
        logger.info("Seeded reference currencies: %s", ", ".join(result.created))
    return result
