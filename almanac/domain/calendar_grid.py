"""
Grille annuelle continue, alignée sur les semaines.

Une année est dépliée en une suite de cases (`CalendarDay`) regroupées par semaines de 7 jours,
du dimanche au samedi, avec des cases de remplissage en début et en fin de grille.

Règles:
- début: autant de cases empruntées au décembre précédent que le rang du 1er janvier dans la
  semaine (0 = dimanche), sauf si l'année commence un samedi (aucun remplissage)
- fin: complément jusqu'à un multiple de 7, libellé janvier (mois 0) avec des jours 1, 2, ...
"""

from __future__ import annotations

import calendar
from collections.abc import Sequence
from datetime import date

from almanac.domain.entities import DAYS_PER_WEEK, LEADING_PADDING_MONTH, CalendarDay, Week

WEEKDAY_LABELS: tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
SATURDAY = 6


def start_weekday(year: int) -> int:
    """Return the weekday of January 1st of `year` (0 = Sunday .. 6 = Saturday)."""
    # calendar.weekday is Monday-based and accepts years outside datetime's range
    return (calendar.weekday(year, 1, 1) + 1) % DAYS_PER_WEEK


def days_in_month(year: int, month_index: int) -> int:
    """Nombre de jours du mois `month_index` (0–11) de `year`, 29 février inclus si bissextile."""
    return calendar.monthrange(year, month_index + 1)[1]


def build_year_days(year: int) -> list[CalendarDay]:
    """Retourne la suite plate des cases de la grille de `year` (longueur multiple de 7)."""
    days: list[CalendarDay] = []

    first_weekday = start_weekday(year)
    if first_weekday < SATURDAY:
        december_length = days_in_month(year - 1, 11)
        for i in range(first_weekday):
            day = december_length - first_weekday + 1 + i
            days.append(
                CalendarDay(
                    month_index=LEADING_PADDING_MONTH,
                    day_of_month=day,
                    slot_key=f"padding-start-{day}",
                )
            )

    for month in range(12):
        for day in range(1, days_in_month(year, month) + 1):
            days.append(
                CalendarDay(month_index=month, day_of_month=day, slot_key=f"month-{month}-{day}")
            )

    remainder = len(days) % DAYS_PER_WEEK
    if remainder:
        for day in range(1, DAYS_PER_WEEK - remainder + 1):
            days.append(CalendarDay(month_index=0, day_of_month=day, slot_key=f"padding-end-{day}"))

    return days


def build_year_grid(year: int) -> list[Week]:
    """Déplie `year` en semaines de 7 cases.

    Args:
        year: Année grégorienne (proleptique), quelconque.

    Returns:
        list[Week]: semaines dans l'ordre chronologique.
    """
    days = build_year_days(year)
    return [
        Week(days=tuple(days[i : i + DAYS_PER_WEEK])) for i in range(0, len(days), DAYS_PER_WEEK)
    ]


def flatten(weeks: Sequence[Week]) -> list[CalendarDay]:
    return [day for week in weeks for day in week.days]


def is_new_month(days: Sequence[CalendarDay], index: int) -> bool:
    """True si la case `index` ouvre un nouveau mois (première case ou changement de mois)."""
    return index == 0 or days[index - 1].month_index != days[index].month_index


def is_today(day: CalendarDay, grid_year: int, today: date) -> bool:
    """Compare la date représentée par la case à `today` (année, mois et jour).

    Une case hors de la plage de `datetime` n'est jamais « aujourd'hui ».
    """
    actual = day.calendar_date(grid_year)
    return actual is not None and actual == today


def month_label(day: CalendarDay) -> str:
    """Nom du mois affiché pour une case ; le remplissage initial est libellé décembre."""
    if day.is_leading_padding:
        return MONTH_NAMES[11]
    return MONTH_NAMES[day.month_index]
