"""
Entités du domaine calendaire.

Ce module définit les valeurs immuables manipulées par le moteur : cases de la grille annuelle,
semaines, intervalles nommés (saisons) et maisons lunaires (manazil) avant et après projection
sur une année donnée.
"""

from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

LEADING_PADDING_MONTH = -1
DAYS_PER_WEEK = 7


class Hemisphere(str, Enum):
    """Classification d'hémisphère fournie par l'appelant.

    L'équateur est étiqueté comme l'hémisphère nord.
    """

    NORTHERN = "northern"
    SOUTHERN = "southern"
    EQUATOR = "equator"


class CalendarDay(BaseModel):
    """Case de la grille annuelle.

    - month_index: 0–11 pour un jour réel, -1 pour un jour emprunté au décembre précédent
    - day_of_month: numéro du jour affiché
    - slot_key: clé stable de la case (`month-<m>-<d>`, `padding-start-<d>`, `padding-end-<d>`)
    """

    model_config = ConfigDict(frozen=True)

    month_index: int
    day_of_month: int
    slot_key: str

    @property
    def is_leading_padding(self) -> bool:
        return self.month_index == LEADING_PADDING_MONTH

    @property
    def is_trailing_padding(self) -> bool:
        return self.slot_key.startswith("padding-end-")

    @property
    def is_padding(self) -> bool:
        return self.is_leading_padding or self.is_trailing_padding

    def calendar_date(self, grid_year: int) -> date | None:
        """Retourne la date réelle représentée par la case dans la grille de `grid_year`.

        Les cases de remplissage initiales appartiennent à décembre de l'année précédente, celles
        de fin à janvier de l'année suivante (le libellé de la grille reste celui du mois 0).
        None si cette date sort de la plage de `datetime` (décembre de l'an 0, janvier 10000).
        """
        if self.is_leading_padding:
            year, month = grid_year - 1, 12
        elif self.is_trailing_padding:
            year, month = grid_year + 1, 1
        else:
            year, month = grid_year, self.month_index + 1
        if not MINYEAR <= year <= MAXYEAR:
            return None
        return date(year, month, self.day_of_month)


class Week(BaseModel):
    """Semaine de la grille : exactement 7 cases, du dimanche au samedi."""

    model_config = ConfigDict(frozen=True)

    days: tuple[CalendarDay, ...] = Field(min_length=DAYS_PER_WEEK, max_length=DAYS_PER_WEEK)

    @property
    def first_key(self) -> str:
        return self.days[0].slot_key


class NamedInterval(BaseModel):
    """Intervalle nommé inclusif `[start_date, end_date]` (ex. une saison)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")

    @model_validator(mode="after")
    def _check_bounds(self) -> NamedInterval:
        if self.end_date < self.start_date:
            raise ValueError(f"interval {self.name!r} ends before it starts")
        return self

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    @property
    def length_days(self) -> int:
        return (self.end_date - self.start_date).days + 1


class HouseInterval(BaseModel):
    """Définition d'une maison lunaire, indépendante de toute année.

    Champs:
    - id: rang de la maison dans le cycle (1..28)
    - season / period / english_period: saison et période traditionnelles
    - house / english_name: nom arabe et nom anglais de la maison
    - start_date: début au format MM-DD
    - duration: durée nominale en jours
    - zodiac_sign / zodiac_sign_ar: signes du zodiaque recouverts
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(ge=1)
    season: str
    period: str = ""
    english_period: str = Field(default="", alias="englishPeriod")
    house: str = ""
    english_name: str = Field(alias="englishName")
    start_date: str = Field(alias="startDate", pattern=r"^\d{2}-\d{2}$")
    duration: int = Field(ge=1)
    description: str = ""
    zodiac_sign: tuple[str, ...] = Field(default=(), alias="zodiacSign")
    zodiac_sign_ar: tuple[str, ...] = Field(default=(), alias="zodiacSignAr")

    @field_validator("start_date")
    @classmethod
    def _check_month_day(cls, value: str) -> str:
        month, day = (int(part) for part in value.split("-"))
        # 2001 is not a leap year: a house cannot start on February 29
        try:
            date(2001, month, day)
        except ValueError as exc:
            raise ValueError(f"invalid month-day {value!r}") from exc
        return value

    @property
    def start_month(self) -> int:
        return int(self.start_date[:2])

    @property
    def start_day(self) -> int:
        return int(self.start_date[3:])


class ExpandedHouse(HouseInterval):
    """Maison projetée sur une année calendaire, bornes inclusives calculées."""

    calculated_start_date: date
    calculated_end_date: date

    def contains(self, day: date) -> bool:
        return self.calculated_start_date <= day <= self.calculated_end_date
