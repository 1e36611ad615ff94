"""Human-friendly formatting of timestamps."""

from __future__ import annotations

from datetime import datetime, timedelta

_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def _localize(moment: datetime) -> datetime:
    return moment.astimezone() if moment.tzinfo is not None else moment


def format_date(date: datetime, now: datetime | None = None) -> str:
    """Format ``date`` relative to ``now`` in the local time zone.

    Only the day of the month is compared when choosing the prefix.
    """
    local = _localize(date)
    current = _localize(now) if now is not None else datetime.now().astimezone()
    if current.day == local.day:
        prefix = "Today"
    elif current.day == (local - timedelta(days=1)).day:
        prefix = "Yesterday"
    else:
        prefix = f"{local.day:02d}. {_MONTHS[local.month - 1]} {local.year:04d}"
    return f"{prefix}, {local:%H:%M:%S}"