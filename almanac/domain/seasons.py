"""
Calendrier des saisons astronomiques.

Le jeu de données est stocké dans la convention de l'hémisphère nord (dates des équinoxes et
solstices) et indexé par année entière. Les étiquettes de l'hémisphère sud sont obtenues par
ré-étiquetage, les dates restant identiques.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from almanac.core.errors import DatasetError
from almanac.domain.entities import Hemisphere, NamedInterval
from almanac.domain.hemisphere import relabel_intervals
from almanac.domain.interval_resolver import IntervalResolver, last_starting_on_or_before
from almanac.domain.progress import as_datetime, percent_elapsed

SEASON_NAMES: tuple[str, ...] = ("spring", "summer", "autumn", "winter")
DEFAULT_SEASON = "spring"


class SeasonBadge(BaseModel):
    """Badge affiché sur le jour de début d'une saison."""

    model_config = ConfigDict(frozen=True)

    title: str
    season_name: str


def _validate_year(year: int, intervals: Sequence[NamedInterval], source: str | None) -> None:
    for interval in intervals:
        if interval.name not in SEASON_NAMES:
            raise DatasetError(f"unknown season {interval.name!r} in {year}", source=source)
        if interval.start_date.year != year:
            raise DatasetError(
                f"season {interval.name!r} starting {interval.start_date} filed under {year}",
                source=source,
            )
    for previous, current in zip(intervals, intervals[1:]):
        if current.start_date <= previous.end_date:
            raise DatasetError(
                f"seasons {previous.name!r} and {current.name!r} overlap or are unsorted in {year}",
                source=source,
            )


class SeasonCalendar:
    """Saisons indexées par année, validées à la construction.

    Chaque année est une suite triée d'intervalles contigus sans chevauchement. Les années
    peuvent manquer : les recherches renvoient alors un résultat vide.
    """

    def __init__(
        self, seasons: Mapping[int, Sequence[NamedInterval]], source: str | None = None
    ) -> None:
        self._seasons: dict[int, tuple[NamedInterval, ...]] = {}
        for year, intervals in sorted(seasons.items()):
            ordered = tuple(intervals)
            _validate_year(int(year), ordered, source)
            self._seasons[int(year)] = ordered
        self.source = source

    def __len__(self) -> int:
        return len(self._seasons)

    def __iter__(self) -> Iterator[int]:
        return iter(self._seasons)

    @property
    def years(self) -> list[int]:
        return list(self._seasons)

    def for_hemisphere(self, year: int, hemisphere: Hemisphere) -> tuple[NamedInterval, ...]:
        """Saisons de `(hemisphere, year)`, ré-étiquetées ; année absente → tuple vide."""
        return relabel_intervals(self._seasons.get(year, ()), hemisphere)

    def resolver(self, hemisphere: Hemisphere) -> IntervalResolver:
        """Résolveur générique sur toutes les années, étiquettes déjà converties."""
        return IntervalResolver({year: self.for_hemisphere(year, hemisphere) for year in self})

    def active_season(self, day: date, hemisphere: Hemisphere) -> NamedInterval | None:
        """Saison contenant `day` pour l'hémisphère donné (ou None si non couverte)."""
        resolver = IntervalResolver(
            {
                year: self.for_hemisphere(year, hemisphere)
                for year in (day.year, day.year - 1)
                if year in self._seasons
            }
        )
        return resolver.active_interval(day)

    def all_intervals(self, hemisphere: Hemisphere) -> list[NamedInterval]:
        return [interval for year in self for interval in self.for_hemisphere(year, hemisphere)]


def season_start_badges(
    seasons: SeasonCalendar, hemisphere: Hemisphere
) -> dict[date, SeasonBadge]:
    """Badges « <Saison> Starts » indexés par date de début."""
    badges: dict[date, SeasonBadge] = {}
    for interval in seasons.all_intervals(hemisphere):
        badges[interval.start_date] = SeasonBadge(
            title=f"{interval.name.capitalize()} Starts", season_name=interval.name
        )
    return badges


def season_for_day(seasons: SeasonCalendar, hemisphere: Hemisphere, day: date) -> str:
    """Étiquette de la saison commencée en dernier à `day` (coloration de la grille).

    Avant la première saison connue, la première saison est retenue ; sans données,
    "spring".
    """
    found = last_starting_on_or_before(seasons.all_intervals(hemisphere), day)
    if found is None:
        return DEFAULT_SEASON
    return found.name


def interval_progress(interval: NamedInterval, moment: date | datetime) -> float:
    """Progression (0–100) de `moment` entre le début et la date de fin de l'intervalle."""
    return percent_elapsed(
        as_datetime(interval.start_date), as_datetime(interval.end_date), as_datetime(moment)
    )

