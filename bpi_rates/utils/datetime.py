"""Shared datetime helpers for local (offset-stripped) timestamps."""

from __future__ import annotations

from datetime import datetime

DISPLAY_FORMAT = "%Y/%m/%d %H:%M:%S"


def strip_offset(value: datetime) -> datetime:
    """Drop the UTC offset while keeping the wall-clock reading."""

    return value.replace(tzinfo=None)


def local_now() -> datetime:
    """Return the current naive local datetime."""

    return datetime.now()


def format_display(value: datetime) -> str:
    return value.strftime(DISPLAY_FORMAT)
