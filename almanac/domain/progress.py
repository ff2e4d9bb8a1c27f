"""Helpers de progression temporelle (pourcentages bornés, normalisation date/datetime)."""

from __future__ import annotations

from datetime import date, datetime, time


def as_date(moment: date | datetime) -> date:
    """Ramène un `datetime` à sa date ; une `date` est renvoyée telle quelle."""
    if isinstance(moment, datetime):
        return moment.date()
    return moment


def as_datetime(moment: date | datetime) -> datetime:
    """Ramène une `date` à minuit ; un `datetime` naïf est renvoyé tel quel."""
    if isinstance(moment, datetime):
        return moment.replace(tzinfo=None)
    return datetime.combine(moment, time())


def percent_elapsed(start: datetime, end: datetime, current: datetime) -> float:
    """Position de `current` dans `[start, end]`, en pourcentage borné à 0–100."""
    if current <= start:
        return 0.0
    if current >= end:
        return 100.0
    return (current - start) / (end - start) * 100
