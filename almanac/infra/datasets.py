"""Chargement des jeux de données (saisons, maisons lunaires) depuis des fichiers JSON.

Les fichiers sont validés une seule fois, au chargement : clés d'année converties en entiers,
intervalles typés par Pydantic, cohérence vérifiée par `SeasonCalendar` et `HouseTable`. Toute
anomalie lève `DatasetError` avec le chemin du fichier.

Formats acceptés pour les saisons:
- plat: `{"2025": [{"name", "startDate", "endDate"}, ...]}`
- imbriqué: `{"northern-hemisphere": {...}, "southern-hemisphere": {...}}` ; la section nord
  fait référence, la section sud n'est que contrôlée (ré-étiquetage de la section nord).
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError

from almanac.core.errors import DatasetError
from almanac.domain.entities import Hemisphere, HouseInterval, NamedInterval
from almanac.domain.hemisphere import relabel_intervals
from almanac.domain.houses import DEFAULT_LEAP_ABSORBING_HOUSE_ID, HouseTable
from almanac.domain.seasons import SeasonCalendar

NORTHERN_KEY = "northern-hemisphere"
SOUTHERN_KEY = "southern-hemisphere"

_INTERVALS = TypeAdapter(list[NamedInterval])
_HOUSES = TypeAdapter(list[HouseInterval])

log = structlog.get_logger(__name__)


def _read_json(path: str | Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as exc:
        log.error("dataset_unreadable", path=str(path), error=type(exc).__name__)
        raise DatasetError(f"cannot read dataset: {exc}", source=str(path)) from exc
    except json.JSONDecodeError as exc:
        log.error("dataset_invalid_json", path=str(path), line=exc.lineno)
        raise DatasetError(f"invalid JSON: {exc.msg}", source=str(path)) from exc


def _parse_years(raw: Any, source: str | None) -> dict[int, list[NamedInterval]]:
    if not isinstance(raw, Mapping):
        raise DatasetError("season dataset must map years to season lists", source=source)
    seasons: dict[int, list[NamedInterval]] = {}
    for key, entries in raw.items():
        try:
            year = int(key)
        except (TypeError, ValueError) as exc:
            raise DatasetError(f"invalid year key {key!r}", source=source) from exc
        try:
            seasons[year] = _INTERVALS.validate_python(entries)
        except ValidationError as exc:
            raise DatasetError(f"invalid seasons for {year}: {exc}", source=source) from exc
    return seasons


def parse_season_calendar(raw: Any, source: str | None = None) -> SeasonCalendar:
    """Construit un `SeasonCalendar` validé à partir d'un objet JSON déjà décodé."""
    if isinstance(raw, Mapping) and NORTHERN_KEY in raw:
        seasons = _parse_years(raw[NORTHERN_KEY], source)
        if SOUTHERN_KEY in raw:
            _check_southern_section(seasons, _parse_years(raw[SOUTHERN_KEY], source), source)
    else:
        seasons = _parse_years(raw, source)
    try:
        calendar = SeasonCalendar(seasons, source=source)
    except DatasetError as exc:
        log.error("season_dataset_invalid", source=source, error=str(exc))
        raise
    log.info("season_dataset_loaded", source=source, years=calendar.years)
    return calendar


def _check_southern_section(
    northern: Mapping[int, list[NamedInterval]],
    southern: Mapping[int, list[NamedInterval]],
    source: str | None,
) -> None:
    for year, intervals in southern.items():
        expected = relabel_intervals(northern.get(year, ()), Hemisphere.SOUTHERN)
        if tuple(intervals) != expected:
            log.warning("season_southern_section_mismatch", source=source, year=year)


def load_season_calendar(path: str | Path) -> SeasonCalendar:
    """Charge et valide le fichier de saisons `path`."""
    return parse_season_calendar(_read_json(path), source=str(path))


def parse_house_table(
    raw: Any,
    leap_absorbing_house_id: int | None = DEFAULT_LEAP_ABSORBING_HOUSE_ID,
    source: str | None = None,
) -> HouseTable:
    """Construit une `HouseTable` validée à partir d'une liste JSON déjà décodée."""
    try:
        houses = _HOUSES.validate_python(raw)
    except ValidationError as exc:
        raise DatasetError(f"invalid house table: {exc}", source=source) from exc
    try:
        table = HouseTable(houses, leap_absorbing_house_id=leap_absorbing_house_id, source=source)
    except DatasetError as exc:
        log.error("house_dataset_invalid", source=source, error=str(exc))
        raise
    log.info(
        "house_dataset_loaded",
        source=source,
        houses=len(table),
        leap_absorbing_house_id=leap_absorbing_house_id,
    )
    return table


def load_house_table(
    path: str | Path, leap_absorbing_house_id: int | None = DEFAULT_LEAP_ABSORBING_HOUSE_ID
) -> HouseTable:
    """Charge et valide le fichier de maisons `path`."""
    return parse_house_table(
        _read_json(path), leap_absorbing_house_id=leap_absorbing_house_id, source=str(path)
    )
