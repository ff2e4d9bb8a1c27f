"""Tests pour le conteneur de dépendances."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from almanac.core.container import Container, get_container
from almanac.core.errors import DatasetError
from almanac.core.settings import Settings
from almanac.domain.entities import Hemisphere


def test_container_loads_bundled_datasets() -> None:
    """Teste que le conteneur charge les jeux embarqués et construit le service."""
    container = Container(Settings())
    assert len(container.house_table) == 28
    assert container.season_calendar.years
    assert container.dashboard.default_hemisphere is Hemisphere.NORTHERN


def test_container_applies_settings() -> None:
    """Teste la prise en compte de l'hémisphère et de la maison bissextile configurés."""
    container = Container(Settings(DEFAULT_HEMISPHERE="southern", LEAP_ABSORBING_HOUSE_ID=None))
    assert container.dashboard.default_hemisphere is Hemisphere.SOUTHERN
    assert container.house_table.cycle_length(2028) == 365
    assert container.dashboard.current_season(date(2025, 7, 14)).season.name == "winter"


def test_container_bad_path(tmp_path: Path) -> None:
    """Teste qu'un chemin de jeu de données invalide lève `DatasetError`."""
    with pytest.raises(DatasetError):
        Container(Settings(SEASONS_DATA_PATH=str(tmp_path / "nope.json")))


def test_get_container_is_shared() -> None:
    """Teste que `get_container` renvoie une instance partagée."""
    get_container.cache_clear()
    try:
        assert get_container() is get_container()
    finally:
        get_container.cache_clear()
