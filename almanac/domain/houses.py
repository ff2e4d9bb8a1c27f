"""
Maisons lunaires (manazil) : projection annuelle et recherche par date.

Objectif du module
------------------
- Projeter la table fixe des maisons (début MM-DD, durée nominale) sur une année calendaire.
- Allonger d'un jour, les années bissextiles, la seule maison désignée pour absorber le
  29 février (`leap_absorbing_house_id`, 7 par défaut : Sa'd Bula').
- Retrouver la maison active à une date et la progression à l'intérieur de cette maison.

Le cycle commence début décembre et ne coïncide donc pas avec l'année civile : la recherche
projette les années `year - 1`, `year`, `year + 1` et parcourt au plus 3 × 28 maisons. Ce coût
borné est assumé plutôt qu'un index.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Iterator, Sequence
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta

import structlog

from almanac.core.errors import DatasetError
from almanac.domain.entities import ExpandedHouse, HouseInterval
from almanac.domain.progress import as_date, as_datetime, percent_elapsed

DEFAULT_LEAP_ABSORBING_HOUSE_ID = 7
NOMINAL_DURATIONS: frozenset[int] = frozenset({13, 14})
LEAP_HOUSE_NOMINAL_DURATION = 13

log = structlog.get_logger(__name__)


def effective_duration(
    house: HouseInterval, year: int, leap_absorbing_house_id: int | None
) -> int:
    """Durée de `house` pour `year` : nominale, +1 pour la maison désignée en année bissextile."""
    if leap_absorbing_house_id is not None and house.id == leap_absorbing_house_id:
        if calendar.isleap(year):
            return house.duration + 1
    return house.duration


def expand_house(
    house: HouseInterval, year: int, leap_absorbing_house_id: int | None
) -> ExpandedHouse:
    start = date(year, house.start_month, house.start_day)
    duration = effective_duration(house, year, leap_absorbing_house_id)
    data = house.model_dump()
    data.update(
        duration=duration,
        calculated_start_date=start,
        calculated_end_date=start + timedelta(days=duration - 1),
    )
    return ExpandedHouse(**data)


def expand_houses(
    year: int,
    house_table: Iterable[HouseInterval],
    leap_absorbing_house_id: int | None = DEFAULT_LEAP_ABSORBING_HOUSE_ID,
) -> list[ExpandedHouse]:
    """Projette chaque maison de `house_table` sur `year`, dans l'ordre de la table.

    Args:
        year: Année calendaire de projection.
        house_table: Définitions des maisons (début MM-DD, durée nominale).
        leap_absorbing_house_id: Maison allongée d'un jour si `year` est bissextile (None:
            aucune).

    Returns:
        list[ExpandedHouse]: maisons avec bornes inclusives calculées.
    """
    return [expand_house(house, year, leap_absorbing_house_id) for house in house_table]


def get_house_for_date(
    moment: date | datetime,
    house_table: Sequence[HouseInterval],
    leap_absorbing_house_id: int | None = DEFAULT_LEAP_ABSORBING_HOUSE_ID,
) -> ExpandedHouse | None:
    """Maison dont les bornes inclusives contiennent `moment`.

    Les années `year - 1`, `year` puis `year + 1` sont projetées dans cet ordre, et la première
    correspondance (ordre de la table) est renvoyée.
    """
    day = as_date(moment)
    for year in (day.year - 1, day.year, day.year + 1):
        if not MINYEAR <= year <= MAXYEAR:
            continue
        for definition in house_table:
            try:
                house = expand_house(definition, year, leap_absorbing_house_id)
            except OverflowError:
                # ends after 9999-12-31
                continue
            if house.contains(day):
                return house
    log.debug("house_not_found", day=day.isoformat(), table_size=len(house_table))
    return None


def get_house_progress(moment: date | datetime, house: ExpandedHouse) -> float:
    """Progression (0–100) dans la maison ; la journée de fin compte en entier.

    0 % au début de `calculated_start_date`, 100 % à la fin de `calculated_end_date`.
    """
    start = as_datetime(house.calculated_start_date)
    end = as_datetime(house.calculated_end_date + timedelta(days=1))
    return percent_elapsed(start, end, as_datetime(moment))


class HouseTable:
    """Table validée des maisons, avec la maison absorbant le jour bissextile.

    Contraintes vérifiées à la construction:
    - identifiants uniques
    - durées nominales de 13 ou 14 jours
    - maison bissextile présente dans la table et de 13 jours nominaux
    """

    def __init__(
        self,
        houses: Sequence[HouseInterval],
        leap_absorbing_house_id: int | None = DEFAULT_LEAP_ABSORBING_HOUSE_ID,
        source: str | None = None,
    ) -> None:
        self._houses: tuple[HouseInterval, ...] = tuple(houses)
        self.leap_absorbing_house_id = leap_absorbing_house_id
        self.source = source
        self._validate()

    def _validate(self) -> None:
        seen: set[int] = set()
        for house in self._houses:
            if house.id in seen:
                raise DatasetError(f"duplicate house id {house.id}", source=self.source)
            seen.add(house.id)
            if house.duration not in NOMINAL_DURATIONS:
                raise DatasetError(
                    f"house {house.id} has nominal duration {house.duration}, "
                    f"expected one of {sorted(NOMINAL_DURATIONS)}",
                    source=self.source,
                )
        leap_id = self.leap_absorbing_house_id
        if leap_id is not None:
            leap_house = self.get(leap_id)
            if leap_house is None:
                raise DatasetError(
                    f"leap-absorbing house {leap_id} not in table", source=self.source
                )
            if leap_house.duration != LEAP_HOUSE_NOMINAL_DURATION:
                raise DatasetError(
                    f"leap-absorbing house {leap_id} must last "
                    f"{LEAP_HOUSE_NOMINAL_DURATION} days nominally",
                    source=self.source,
                )

    def __iter__(self) -> Iterator[HouseInterval]:
        return iter(self._houses)

    def __len__(self) -> int:
        return len(self._houses)

    def __getitem__(self, index: int) -> HouseInterval:
        return self._houses[index]

    def get(self, house_id: int) -> HouseInterval | None:
        for house in self._houses:
            if house.id == house_id:
                return house
        return None

    def house_calendar(self, year: int) -> list[ExpandedHouse]:
        """Maisons projetées sur `year`."""
        return expand_houses(year, self._houses, self.leap_absorbing_house_id)

    def house_for_date(self, moment: date | datetime) -> ExpandedHouse | None:
        return get_house_for_date(moment, self._houses, self.leap_absorbing_house_id)

    def cycle_length(self, year: int) -> int:
        """Somme des durées effectives pour `year` (365 ou 366 pour une table complète)."""
        return sum(effective_duration(h, year, self.leap_absorbing_house_id) for h in self._houses)
