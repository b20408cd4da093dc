"""Persistence of the latest synced rate per currency."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy import asc
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from bpi_rates.database import get_session
from bpi_rates.models import ExchangeRate


@dataclass(frozen=True)
class RateRecord:
    """Latest known rate for one currency code."""

    code: str
    rate: Decimal
    updated_at: datetime


class BaseRateStore(ABC):
    """Key-value store of :class:`RateRecord` keyed by currency code."""

    @abstractmethod
    def find_by_code(self, code: str) -> RateRecord | None:
        """Return the record for ``code`` or ``None``."""

    @abstractmethod
    def upsert(self, record: RateRecord) -> None:
        """Create the record, or overwrite rate and time of the existing one."""

    @abstractmethod
    def list_sorted(self) -> list[RateRecord]:
        """Return every record ordered by code."""

    @abstractmethod
    def exists(self, code: str) -> bool:
        ...

    @abstractmethod
    def delete(self, code: str) -> bool:
        """Remove the record; return whether one existed."""

    @abstractmethod
    def transaction(self):
        """Context manager making every write inside it all-or-nothing."""


class SqlRateStore(BaseRateStore):
    """Rate store backed by the ``exchange_rate`` table.

    Upserts are a single ``INSERT ... ON CONFLICT DO UPDATE`` so overlapping
    passes writing the same new code both succeed; the later commit wins.
    """

    def find_by_code(self, code: str) -> RateRecord | None:
        row = get_session().get(ExchangeRate, code.strip().upper(), populate_existing=True)
        return _to_record(row) if row is not None else None

    def upsert(self, record: RateRecord) -> None:
        session = get_session()
        insert = _dialect_insert(session.get_bind().dialect.name)
        stmt = insert(ExchangeRate).values(
            code=record.code, rate=record.rate, updated_at=record.updated_at
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[ExchangeRate.code],
            set_={"rate": stmt.excluded.rate, "updated_at": stmt.excluded.updated_at},
        )
        session.execute(stmt)

    def list_sorted(self) -> list[RateRecord]:
        rows = (
            get_session()
            .query(ExchangeRate)
            .populate_existing()
            .order_by(asc(ExchangeRate.code))
            .all()
        )
        return [_to_record(row) for row in rows]

    def exists(self, code: str) -> bool:
        return self.find_by_code(code) is not None

    def delete(self, code: str) -> bool:
        with self.transaction():
            session = get_session()
            row = session.get(ExchangeRate, code.strip().upper())
            if row is None:
                return False
            session.delete(row)
        return True

    @contextmanager
    def transaction(self) -> Iterator[None]:
        session = get_session()
        try:
            yield
            session.commit()
        except Exception:
            session.rollback()
            raise


def _to_record(row: ExchangeRate) -> RateRecord:
    return RateRecord(code=row.code, rate=Decimal(row.rate), updated_at=row.updated_at)


_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _dialect_insert(dialect_name: str):
    """Return the ``INSERT ... ON CONFLICT`` construct for the bound dialect."""

    try:
        return _UPSERT_INSERTS[dialect_name]
    except KeyError as exc:
        raise RuntimeError(f"Rate upserts are not supported on '{dialect_name}'") from exc
