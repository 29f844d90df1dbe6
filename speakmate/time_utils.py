"""Utility helpers for timezone-aware calendar arithmetic."""

from __future__ import annotations

import calendar
from datetime import datetime, timedelta

from .config import TIMEZONE


def add_days(dt: datetime, days: int) -> datetime:
    return dt + timedelta(days=days)


def add_months(dt: datetime, months: int) -> datetime:
    """Shift a datetime by whole calendar months, clamping the day to the target month length."""
    month_index = dt.month - 1 + months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def add_years(dt: datetime, years: int) -> datetime:
    return add_months(dt, 12 * years)


def same_day(a: datetime, b: datetime) -> bool:
    """Return True when both datetimes fall on the same calendar day in the configured timezone."""
    return a.astimezone(TIMEZONE).date() == b.astimezone(TIMEZONE).date()


def same_month(a: datetime, b: datetime) -> bool:
    a_local = a.astimezone(TIMEZONE)
    b_local = b.astimezone(TIMEZONE)
    return (a_local.year, a_local.month) == (b_local.year, b_local.month)


def utc_now() -> datetime:
    """Return the current datetime in UTC."""
    return datetime.now(TIMEZONE)


def to_storage_iso(dt: datetime) -> str:
    """Fixed-width UTC ISO-8601 text, so stored timestamps compare correctly as strings."""
    return dt.astimezone(TIMEZONE).isoformat(timespec="microseconds")
