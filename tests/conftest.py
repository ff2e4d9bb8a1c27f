"""Configuration de test pour pytest avec gestion des chemins et jeux de données.

Ce module ajoute la racine du projet au sys.path pour résoudre les imports `almanac` et fournit
les jeux de données embarqués ainsi que de petits calendriers de saisons synthétiques.
"""

import os
import sys
from datetime import date

import pytest

# Ensure project root is on sys.path so that
# imports like `from almanac...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from almanac.core.settings import DATA_DIR  # noqa: E402
from almanac.domain.entities import NamedInterval  # noqa: E402
from almanac.domain.houses import HouseTable  # noqa: E402
from almanac.domain.seasons import SeasonCalendar  # noqa: E402
from almanac.infra.datasets import load_house_table, load_season_calendar  # noqa: E402

SEASONS_PATH = str(DATA_DIR / "seasons.json")
HOUSES_PATH = str(DATA_DIR / "manazil.json")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Retire les variables de configuration pouvant fuir de l'environnement local."""
    for key in [
        "ENV_FILE",
        "APP_ENV",
        "LOG_LEVEL",
        "DEFAULT_HEMISPHERE",
        "LEAP_ABSORBING_HOUSE_ID",
        "SEASONS_DATA_PATH",
        "HOUSES_DATA_PATH",
    ]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(scope="session")
def house_table() -> HouseTable:
    """Table des 28 maisons embarquée (maison 7 bissextile)."""
    return load_house_table(HOUSES_PATH)


@pytest.fixture(scope="session")
def season_calendar() -> SeasonCalendar:
    """Saisons embarquées 2024–2028."""
    return load_season_calendar(SEASONS_PATH)


def make_year(year: int) -> list[NamedInterval]:
    """Quatre saisons contiguës pour `year`, l'hiver débordant sur l'année suivante."""
    return [
        NamedInterval(name="spring", start_date=date(year, 3, 20), end_date=date(year, 6, 20)),
        NamedInterval(name="summer", start_date=date(year, 6, 21), end_date=date(year, 9, 22)),
        NamedInterval(name="autumn", start_date=date(year, 9, 23), end_date=date(year, 12, 20)),
        NamedInterval(
            name="winter", start_date=date(year, 12, 21), end_date=date(year + 1, 3, 19)
        ),
    ]


@pytest.fixture
def small_calendar() -> SeasonCalendar:
    """Calendrier synthétique sur deux années (2030, 2031)."""
    return SeasonCalendar({2030: make_year(2030), 2031: make_year(2031)})


@pytest.fixture
def season_year():
    """Fabrique d'années de saisons synthétiques (voir `make_year`)."""
    return make_year
