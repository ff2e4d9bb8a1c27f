from __future__ import annotations

import calendar
from datetime import date as _date
from datetime import datetime, timedelta

import structlog

from almanac.domain.calendar_grid import build_year_days, is_new_month, is_today
from almanac.domain.entities import DAYS_PER_WEEK, Hemisphere
from almanac.domain.hemisphere import coerce_hemisphere
from almanac.domain.houses import HouseTable, get_house_progress
from almanac.domain.progress import as_date, as_datetime, percent_elapsed
from almanac.domain.seasons import (
    SeasonCalendar,
    interval_progress,
    season_for_day,
    season_start_badges,
)
from almanac.services.schemas import GridCell, HouseSummary, SeasonSummary, YearProgress


def days_remaining(end_date: _date, moment: _date | datetime) -> int:
    """Jours entre `moment` et `end_date` (0 si la date de fin est passée)."""
    return max(0, (end_date - as_date(moment)).days)


class DashboardService:
    """Service de composition pour le tableau de bord calendrier/saisons/maisons.

    Responsabilités:
    - Résoudre la saison active (avec ré-étiquetage d'hémisphère) et sa progression.
    - Résoudre la maison lunaire active et sa progression.
    - Annoter la grille annuelle (nouveau mois, aujourd'hui, saison, badges).

    L'instant courant est toujours fourni par l'appelant ; le service ne lit jamais l'horloge.
    """

    def __init__(
        self,
        seasons: SeasonCalendar,
        houses: HouseTable,
        default_hemisphere: Hemisphere = Hemisphere.NORTHERN,
    ):
        """Initialise le service avec ses jeux de données.

        Paramètres:
        - seasons: calendrier des saisons validé.
        - houses: table des maisons lunaires validée.
        - default_hemisphere: hémisphère utilisé quand l'appelant n'en précise pas.
        """
        self.seasons = seasons
        self.houses = houses
        self.default_hemisphere = default_hemisphere
        self._log = structlog.get_logger(__name__).bind(component="dashboard")

    def _hemisphere(self, hemisphere: Hemisphere | str | None) -> Hemisphere:
        return coerce_hemisphere(hemisphere, default=self.default_hemisphere)

    def current_season(
        self, moment: _date | datetime, hemisphere: Hemisphere | str | None = None
    ) -> SeasonSummary | None:
        """Saison active à `moment` ; None si aucune année du jeu de données ne la couvre."""
        hemi = self._hemisphere(hemisphere)
        season = self.seasons.active_season(as_date(moment), hemi)
        if season is None:
            self._log.info(
                "season_not_covered", day=as_date(moment).isoformat(), hemisphere=hemi.value
            )
            return None
        return SeasonSummary(
            hemisphere=hemi,
            season=season,
            progress=interval_progress(season, moment),
            days_remaining=days_remaining(season.end_date, moment),
        )

    def current_house(self, moment: _date | datetime) -> HouseSummary | None:
        """Maison lunaire active à `moment` ; None si la table ne couvre pas la date."""
        house = self.houses.house_for_date(moment)
        if house is None:
            self._log.info("house_not_covered", day=as_date(moment).isoformat())
            return None
        return HouseSummary(
            house=house,
            progress=get_house_progress(moment, house),
            days_remaining=days_remaining(house.calculated_end_date, moment),
        )

    @staticmethod
    def year_progress(moment: _date | datetime) -> YearProgress:
        """Avancement de `moment` dans son année civile."""
        year = as_date(moment).year
        start = _date(year, 1, 1)
        total_days = 366 if calendar.isleap(year) else 365
        days_passed = (as_date(moment) - start).days
        end = as_datetime(start) + timedelta(days=total_days)
        return YearProgress(
            year=year,
            progress=percent_elapsed(as_datetime(start), end, as_datetime(moment)),
            days_passed=days_passed,
            total_days=total_days,
            days_remaining=total_days - days_passed,
        )

    def annotated_grid(
        self, year: int, today: _date, hemisphere: Hemisphere | str | None = None
    ) -> list[list[GridCell]]:
        """Grille de `year` en semaines, chaque case annotée pour l'affichage."""
        hemi = self._hemisphere(hemisphere)
        badges = season_start_badges(self.seasons, hemi)
        days = build_year_days(year)
        cells: list[GridCell] = []
        for index, day in enumerate(days):
            actual = day.calendar_date(year)
            # padding beyond year 1 or 9999 takes the colour of the nearest real day
            anchor = actual or (
                _date(year, 1, 1) if day.is_leading_padding else _date(year, 12, 31)
            )
            badge = badges.get(actual) if actual else None
            cells.append(
                GridCell(
                    day=day,
                    calendar_date=actual,
                    is_new_month=is_new_month(days, index),
                    is_today=is_today(day, year, today),
                    season=season_for_day(self.seasons, hemi, anchor),
                    badge=badge.title if badge else None,
                )
            )
        return [cells[i : i + DAYS_PER_WEEK] for i in range(0, len(cells), DAYS_PER_WEEK)]
