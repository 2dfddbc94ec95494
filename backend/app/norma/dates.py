"""
Date normalization for transaction rows.

Two raw shapes are accepted:
  - ISO-8601 dates / datetimes ("2024-01-15", "2024-01-15T10:00:00Z")
  - the bank-notification token "MM月DD日HH:mm", which carries no year;
    the current year is assumed at parse time.

Parsing never raises. Invalid input yields None from parse_date() and the
literal INVALID_DATE from every label projection.

Token values outside the calendar roll over instead of being rejected:
"13月01日10:00" is January 1st of the following year, "02月30日" lands in
March. Hours and minutes roll the same way.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Any, Optional, Tuple

INVALID_DATE = "Invalid date"

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_CN_TOKEN = re.compile(r"(\d{2})月(\d{2})日(\d{2}):(\d{2})")

# extended ISO-8601 only; the same forms are accepted on every Python version
_ISO = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})"
    r"(?:[T ](\d{2}):(\d{2})(?::(\d{2})(?:[.,](\d{1,6}))?)?)?"
    r"(?:[Zz]|[+-]\d{2}(?::?\d{2})?)?$"
)


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now()


def _parse_iso(raw: str) -> Optional[datetime]:
    match = _ISO.match(raw.strip())
    if not match:
        return None
    year, month, day, hour, minute, second, fraction = match.groups()
    try:
        # the offset is matched but dropped: wall-clock fields are kept as written
        return datetime(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
            int((fraction or "0").ljust(6, "0")),
        )
    except ValueError:
        return None


def _parse_cn_token(raw: str, now: datetime) -> Optional[datetime]:
    match = _CN_TOKEN.search(raw)
    if not match:
        return None
    month, day, hour, minute = (int(g) for g in match.groups())

    year = now.year + (month - 1) // 12
    base = datetime(year, (month - 1) % 12 + 1, 1)
    try:
        return base + timedelta(days=day - 1, hours=hour, minutes=minute)
    except OverflowError:
        return None


def parse_date(raw: Any, now: Optional[datetime] = None) -> Optional[datetime]:
    """Return the canonical (naive) datetime for `raw`, or None if invalid."""
    if isinstance(raw, datetime):
        return raw.replace(tzinfo=None)
    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)
    if not isinstance(raw, str) or not raw:
        return None

    if "T" in raw or "-" in raw:
        parsed = _parse_iso(raw)
        if parsed is not None:
            return parsed

    return _parse_cn_token(raw, _now(now))


def is_valid_date(raw: Any, now: Optional[datetime] = None) -> bool:
    return parse_date(raw, now) is not None


def month_key(dt: datetime) -> Tuple[int, int]:
    return dt.year, dt.month


def format_month(dt: datetime) -> str:
    return f"{MONTH_ABBR[dt.month - 1]} {dt.year}"


def format_full(dt: datetime) -> str:
    return f"{MONTH_ABBR[dt.month - 1]} {dt.day}, {dt.year}"


def format_short(dt: datetime) -> str:
    return f"{MONTH_ABBR[dt.month - 1]} {dt.day}"


def month_label(raw: Any, now: Optional[datetime] = None) -> str:
    dt = parse_date(raw, now)
    return format_month(dt) if dt else INVALID_DATE


def full_label(raw: Any, now: Optional[datetime] = None) -> str:
    dt = parse_date(raw, now)
    return format_full(dt) if dt else INVALID_DATE


def short_label(raw: Any, now: Optional[datetime] = None) -> str:
    dt = parse_date(raw, now)
    return format_short(dt) if dt else INVALID_DATE


def relative_label(raw: Any, now: Optional[datetime] = None) -> str:
    """
    "Today" / "Yesterday" when the calendar day matches exactly,
    otherwise the short "Mon D" label.
    """
    current = _now(now)
    dt = parse_date(raw, current)
    if dt is None:
        return INVALID_DATE

    today = current.date()
    if dt.date() == today:
        return "Today"
    if dt.date() == today - timedelta(days=1):
        return "Yesterday"
    return format_short(dt)
