"""Validation helpers for request payloads."""

from __future__ import annotations

import re

from bpi_rates.errors import ValidationError

CURRENCY_CODE_PATTERN = re.compile(r"^[A-Za-z]+$")
MAX_CODE_LENGTH = 10
MAX_NAME_LENGTH = 50


def normalize_currency_code(value: str | None, *, field: str = "code") -> str:
    """Trim and upper-case a currency code, rejecting anything but ASCII letters."""

    if value is None or not str(value).strip():
        raise ValidationError(f"'{field}' is required.", payload={"field": field})

    normalized = str(value).strip().upper()
    if len(normalized) > MAX_CODE_LENGTH:
        raise ValidationError(
            f"'{field}' must be at most {MAX_CODE_LENGTH} characters.",
            payload={"field": field, "code": normalized},
        )
    if not normalized.isascii() or not CURRENCY_CODE_PATTERN.match(normalized):
        raise ValidationError(
            f"Currency code '{normalized}' may only contain letters.",
            payload={"field": field, "code": normalized},
        )
    return normalized


def normalize_localized_name(value: str | None, *, field: str = "localized_name") -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"'{field}' cannot be blank.", payload={"field": field})

    normalized = str(value).strip()
    if len(normalized) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"'{field}' must be at most {MAX_NAME_LENGTH} characters.",
            payload={"field": field},
        )
    return normalized
