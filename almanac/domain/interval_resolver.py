"""
Résolution d'intervalles nommés (localisation d'un point dans une suite triée).

Objectif du module
------------------
- Trouver l'intervalle qui contient une date, en regardant d'abord le jeu de données de l'année
  de la date puis celui de l'année précédente (intervalle commencé en décembre et encore actif
  en janvier).
- Trouver le dernier intervalle commencé à une date donnée (libellé « actif » indépendamment de
  la fin de l'intervalle).

Les suites d'intervalles doivent être triées par date de début : une suite non triée est une
erreur de programmation de l'appelant et lève `AssertionError`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date

import structlog

from almanac.domain.entities import NamedInterval

log = structlog.get_logger(__name__)


def ensure_sorted(intervals: Sequence[NamedInterval]) -> None:
    """Lève `AssertionError` si `intervals` n'est pas trié par date de début croissante."""
    for previous, current in zip(intervals, intervals[1:]):
        if current.start_date < previous.start_date:
            raise AssertionError(
                f"intervals must be sorted by start date: {current.name!r} "
                f"({current.start_date}) follows {previous.name!r} ({previous.start_date})"
            )


def find_containing(intervals: Sequence[NamedInterval], day: date) -> NamedInterval | None:
    """Premier intervalle dont `[start_date, end_date]` contient `day`."""
    for interval in intervals:
        if interval.contains(day):
            return interval
    return None


def last_starting_on_or_before(
    intervals: Sequence[NamedInterval], day: date
) -> NamedInterval | None:
    """Intervalle de plus grande date de début `<= day`.

    Si le premier intervalle commence déjà après `day`, il est renvoyé quand même : le début du
    jeu de données est considéré comme déjà à l'intérieur du premier intervalle. Une suite vide
    donne None.
    """
    ensure_sorted(intervals)
    if not intervals:
        return None
    found = intervals[0]
    for interval in intervals:
        if interval.start_date <= day:
            found = interval
        else:
            # starts are monotonic
            break
    return found


class IntervalResolver:
    """Localisation d'une date dans des jeux d'intervalles indexés par année.

    Le résolveur ne modifie jamais ses données ; il peut être partagé entre appelants.
    """

    def __init__(self, datasets: Mapping[int, Sequence[NamedInterval]]):
        """
        Initialise le résolveur.

        Args:
            datasets: intervalles triés par date de début, indexés par année entière.
        """
        self._datasets: dict[int, tuple[NamedInterval, ...]] = {}
        for year, intervals in datasets.items():
            ordered = tuple(intervals)
            ensure_sorted(ordered)
            self._datasets[int(year)] = ordered

    @property
    def years(self) -> list[int]:
        return sorted(self._datasets)

    def intervals_for_year(self, year: int) -> tuple[NamedInterval, ...]:
        """Intervalles de `year` ; année absente → tuple vide (pas une erreur)."""
        return self._datasets.get(year, ())

    def active_interval(self, day: date) -> NamedInterval | None:
        """Intervalle contenant `day` (bornes incluses), année courante puis année précédente.

        Returns:
            NamedInterval | None: None si aucun jeu de données ne couvre la date.
        """
        for year in (day.year, day.year - 1):
            found = find_containing(self.intervals_for_year(year), day)
            if found is not None:
                return found
        log.debug("interval_not_found", day=day.isoformat(), years=self.years)
        return None

    def last_starting_on_or_before(self, day: date) -> NamedInterval | None:
        """Dernier intervalle commencé au plus tard le `day`, toutes années confondues."""
        flat = [interval for year in self.years for interval in self._datasets[year]]
        return last_starting_on_or_before(flat, day)
