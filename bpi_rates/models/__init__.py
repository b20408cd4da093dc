"""SQLAlchemy ORM models for reference currencies and synced rates."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from bpi_rates.database import Base


class Currency(Base):
    """Reference entry mapping a currency code to its localized display name."""

    __tablename__ = "currency"

    code: Mapped[str] = mapped_column(String(10), primary_key=True)
    localized_name: Mapped[str] = mapped_column(String(50), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Currency code={self.code}>"


class ExchangeRate(Base):
    """Latest synced rate for a currency; one row per code, overwritten in place."""

    __tablename__ = "exchange_rate"

    code: Mapped[str] = mapped_column(String(30), primary_key=True)
    rate: Mapped[Decimal] = mapped_column(Numeric(18, 8), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<ExchangeRate {self.code} rate={self.rate} at={self.updated_at.isoformat()}>"
