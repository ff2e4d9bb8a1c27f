# Schémas Pydantic renvoyés par le service tableau de bord (résumés prêts à afficher).

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict

from almanac.domain.entities import CalendarDay, ExpandedHouse, Hemisphere, NamedInterval


class SeasonSummary(BaseModel):
    """Saison active pour un hémisphère.

    Champs:
    - hemisphere: hémisphère utilisé pour l'étiquetage
    - season: intervalle actif (étiquette déjà convertie)
    - progress: pourcentage écoulé entre le début et la date de fin (0–100)
    - days_remaining: jours avant la date de fin (>= 0)
    """

    model_config = ConfigDict(frozen=True)

    hemisphere: Hemisphere
    season: NamedInterval
    progress: float
    days_remaining: int


class HouseSummary(BaseModel):
    """Maison lunaire active.

    Champs:
    - house: maison projetée sur l'année qui la contient
    - progress: pourcentage écoulé, journée de fin incluse (0–100)
    - days_remaining: jours avant la date de fin (>= 0)
    """

    model_config = ConfigDict(frozen=True)

    house: ExpandedHouse
    progress: float
    days_remaining: int


class YearProgress(BaseModel):
    """Avancement dans l'année civile."""

    model_config = ConfigDict(frozen=True)

    year: int
    progress: float
    days_passed: int
    total_days: int
    days_remaining: int


class GridCell(BaseModel):
    """Case de grille annotée pour l'affichage.

    Champs:
    - day: case brute (`CalendarDay`)
    - calendar_date: date réelle représentée (None hors de la plage de `datetime`)
    - is_new_month: première case d'un mois dans la grille
    - is_today: case correspondant à la date fournie par l'appelant
    - season: étiquette de saison (coloration)
    - badge: titre « <Saison> Starts » le jour de début d'une saison, sinon None
    """

    model_config = ConfigDict(frozen=True)

    day: CalendarDay
    calendar_date: date | None
    is_new_month: bool
    is_today: bool
    season: str
    badge: str | None = None
