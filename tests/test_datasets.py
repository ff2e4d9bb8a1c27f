"""
Tests pour le chargement des jeux de données JSON.

Ce module teste les formats acceptés (plat, imbriqué par hémisphère), le contrôle de la section
sud et la conversion des anomalies de fichier en `DatasetError`.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from almanac.core.errors import DatasetError
from almanac.infra.datasets import (
    load_house_table,
    load_season_calendar,
    parse_house_table,
    parse_season_calendar,
)

FLAT_2030 = {
    "2030": [
        {"name": "spring", "startDate": "2030-03-20", "endDate": "2030-06-20"},
        {"name": "summer", "startDate": "2030-06-21", "endDate": "2030-09-22"},
        {"name": "autumn", "startDate": "2030-09-23", "endDate": "2030-12-20"},
        {"name": "winter", "startDate": "2030-12-21", "endDate": "2031-03-19"},
    ]
}


def _write(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_flat_format(tmp_path: Path) -> None:
    """Teste le format plat indexé par année."""
    calendar = load_season_calendar(_write(tmp_path / "seasons.json", FLAT_2030))
    assert calendar.years == [2030]
    assert calendar.source == str(tmp_path / "seasons.json")


def test_nested_format_with_consistent_southern_section() -> None:
    """Teste le format imbriqué : la section sud cohérente ne produit aucun avertissement."""
    southern = {
        "2030": [
            dict(entry, name=name)
            for entry, name in zip(FLAT_2030["2030"], ["autumn", "winter", "spring", "summer"])
        ]
    }
    with capture_logs() as logs:
        calendar = parse_season_calendar(
            {"northern-hemisphere": FLAT_2030, "southern-hemisphere": southern}
        )
    assert calendar.years == [2030]
    assert not [e for e in logs if e["event"] == "season_southern_section_mismatch"]
    assert [e for e in logs if e["event"] == "season_dataset_loaded"]


def test_nested_format_southern_mismatch_warns() -> None:
    """Teste qu'une section sud incohérente est signalée sans bloquer le chargement."""
    with capture_logs() as logs:
        calendar = parse_season_calendar(
            {"northern-hemisphere": FLAT_2030, "southern-hemisphere": FLAT_2030}
        )
    assert calendar.years == [2030]
    warnings = [e for e in logs if e["event"] == "season_southern_section_mismatch"]
    assert warnings
    assert warnings[0]["log_level"] == "warning"
    assert warnings[0]["year"] == 2030


def test_invalid_json(tmp_path: Path) -> None:
    """Teste qu'un JSON invalide lève `DatasetError` avec le chemin."""
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DatasetError, match="invalid JSON") as excinfo:
        load_season_calendar(path)
    assert excinfo.value.source == str(path)


def test_missing_file(tmp_path: Path) -> None:
    """Teste qu'un fichier absent lève `DatasetError`."""
    with pytest.raises(DatasetError, match="cannot read"):
        load_house_table(tmp_path / "missing.json")


@pytest.mark.parametrize(
    "payload",
    [
        ["not", "a", "mapping"],
        {"year-2030": FLAT_2030["2030"]},
        {"2030": [{"name": "spring", "startDate": "2030-03-20"}]},
        {"2030": [{"name": "spring", "startDate": "2030-06-20", "endDate": "2030-03-20"}]},
    ],
)
def test_invalid_season_payloads(payload) -> None:
    """Teste le refus de contenus de saisons mal formés."""
    with pytest.raises(DatasetError):
        parse_season_calendar(payload, source="inline")


def test_inconsistent_season_year_logged() -> None:
    """Teste qu'une incohérence de calendrier est journalisée puis propagée."""
    with capture_logs() as logs, pytest.raises(DatasetError):
        parse_season_calendar({"2031": FLAT_2030["2030"]}, source="inline")
    assert [e for e in logs if e["event"] == "season_dataset_invalid"]


def test_parse_house_table_errors() -> None:
    """Teste le refus d'une table de maisons mal formée ou incohérente."""
    with pytest.raises(DatasetError, match="invalid house table"):
        parse_house_table([{"id": 1}], source="inline")
    house = {"id": 1, "season": "Winter", "englishName": "A", "startDate": "01-01", "duration": 13}
    with pytest.raises(DatasetError, match="not in table"):
        parse_house_table([house], leap_absorbing_house_id=7)
    table = parse_house_table([house], leap_absorbing_house_id=None)
    assert len(table) == 1
