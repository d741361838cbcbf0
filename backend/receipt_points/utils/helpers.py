"""Miscellaneous parsing helpers used by the receipt normalizer."""

from __future__ import annotations

import datetime as dt
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_TIME_RE = re.compile(r"\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?", re.ASCII)


def parse_amount(value: str) -> Optional[Decimal]:
    """Parse a monetary amount such as ``" 35.35 "`` into a :class:`Decimal`.

    Surrounding whitespace is ignored. Returns ``None`` when the text is
    not a number or is not finite (``NaN``, ``Infinity``).
    """
    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def parse_date(value: str) -> Optional[dt.date]:
    """Parse a ``YYYY-MM-DD`` calendar date, ``None`` if it is not a real date."""
    value = value.strip()
    if not _DATE_RE.fullmatch(value):
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        return None


def parse_time(value: str) -> Optional[dt.time]:
    """Parse an ``HH:MM[:SS[.ffffff]]`` time of day.

    Compact forms (``1301``) and times carrying their own UTC offset are
    rejected: purchase times are always interpreted as UTC.
    """
    value = value.strip()
    if not _TIME_RE.fullmatch(value):
        return None
    try:
        return dt.time.fromisoformat(value)
    except ValueError:
        return None


def parse_purchase_instant(date_value: str, time_value: str) -> Optional[dt.datetime]:
    """Combine a date and a time of day into a single UTC instant.

    Both parts are parsed on their own so that locale or free-form date
    parsing never comes into play. Returns ``None`` if either part is
    invalid.
    """
    date = parse_date(date_value)
    clock = parse_time(time_value)
    if date is None or clock is None:
        return None
    return dt.datetime.combine(date, clock, tzinfo=dt.timezone.utc)
