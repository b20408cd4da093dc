"""Service layer abstraction for reference currency CRUD operations."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import asc
from sqlalchemy.exc import IntegrityError

from bpi_rates.database import get_session
from bpi_rates.errors import ConflictError, NotFoundError
from bpi_rates.models import Currency
from bpi_rates.validation import normalize_currency_code, normalize_localized_name


@dataclass(frozen=True)
class CurrencyDTO:
    """Immutable representation of a reference currency."""

    code: str
    localized_name: str


@dataclass(frozen=True)
class CurrencyCreateData:
    code: str
    localized_name: str


@dataclass(frozen=True)
class CurrencyUpdateData:
    localized_name: str


def list_currencies() -> list[CurrencyDTO]:
    """Return all reference currencies ordered by code."""

    session = get_session()
    rows = session.query(Currency).order_by(asc(Currency.code)).all()
    return [_to_dto(row) for row in rows]


def get_currency(code: str) -> CurrencyDTO:
    return _to_dto(_get_currency(normalize_currency_code(code)))


def create_currency(data: CurrencyCreateData) -> CurrencyDTO:
    """Create a reference currency; the code must not exist yet."""

    session = get_session()
    code = normalize_currency_code(data.code)
    name = normalize_localized_name(data.localized_name)

    if session.get(Currency, code) is not None:
        raise ConflictError(f"Currency '{code}' already exists.", payload={"field": "code"})

    currency = Currency(code=code, localized_name=name)
    session.add(currency)
    try:
        session.commit()
    except IntegrityError as exc:
        # Lost a race against a concurrent create of the same code.
        session.rollback()
        raise ConflictError(
            f"Currency '{code}' already exists.", payload={"field": "code"}
        ) from exc

    session.refresh(currency)
    return _to_dto(currency)


def update_currency(code: str, data: CurrencyUpdateData) -> CurrencyDTO:
    """Replace the localized name of an existing currency."""

    session = get_session()
    currency = _get_currency(normalize_currency_code(code))
    currency.localized_name = normalize_localized_name(data.localized_name)
    session.commit()
    session.refresh(currency)
    return _to_dto(currency)


def delete_currency(code: str) -> None:
    session = get_session()
    currency = _get_currency(normalize_currency_code(code))
    session.delete(currency)
    session.commit()


def _get_currency(code: str) -> Currency:
    currency = get_session().get(Currency, code)
    if currency is None:
        raise NotFoundError(f"Currency '{code}' not found.")
    return currency


def _to_dto(currency: Currency) -> CurrencyDTO:
    return CurrencyDTO(code=currency.code, localized_name=currency.localized_name)
