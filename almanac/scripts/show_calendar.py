"""Affichage en console de la grille annuelle, de la saison et de la maison lunaire actives.

Ce script compose les sorties du moteur pour une date fournie explicitement (ou la date du jour
lue ici, à la frontière de l'application).
"""

# ============================================================
# Script : almanac/scripts/show_calendar.py
# Objet  : Grille annuelle + saison/maison actives pour une date.
# Usage  : python -m almanac.scripts.show_calendar --year 2028 --today 2028-02-29 --lat -33.9
# Sortie : stdout (texte)
# ============================================================

from __future__ import annotations

import argparse
import sys
from datetime import MAXYEAR, MINYEAR, date
from pathlib import Path

# Allow running as a standalone script (python almanac/scripts/show_calendar.py)
SYS_ROOT = Path(__file__).resolve().parents[2]
if str(SYS_ROOT) not in sys.path:
    sys.path.append(str(SYS_ROOT))

from almanac.core.container import Container  # noqa: E402
from almanac.core.errors import AlmanacError  # noqa: E402
from almanac.core.logging import setup_logging  # noqa: E402
from almanac.core.settings import get_settings  # noqa: E402
from almanac.domain.calendar_grid import WEEKDAY_LABELS, month_label  # noqa: E402
from almanac.domain.entities import Hemisphere  # noqa: E402
from almanac.domain.hemisphere import hemisphere_from_latitude  # noqa: E402
from almanac.services.schemas import GridCell  # noqa: E402


def _format_cell(cell: GridCell) -> str:
    marker = "*" if cell.is_today else ("'" if cell.day.is_padding else " ")
    return f"{cell.day.day_of_month:>3}{marker}"


def render_grid(rows: list[list[GridCell]]) -> list[str]:
    """Lignes de texte de la grille ; le nom du mois est ajouté en fin de ligne quand il change."""
    lines = ["".join(f"{label:>4}" for label in WEEKDAY_LABELS)]
    for row in rows:
        line = "".join(_format_cell(cell) for cell in row)
        starts = [cell for cell in row if cell.is_new_month and not cell.day.is_padding]
        if starts:
            line += "  " + month_label(starts[0].day)
        badges = [cell.badge for cell in row if cell.badge]
        if badges:
            line += "  [" + ", ".join(badges) + "]"
        lines.append(line)
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--year", type=int, default=None, help="année de la grille")
    parser.add_argument("--today", type=date.fromisoformat, default=None, help="YYYY-MM-DD")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--hemisphere", choices=[h.value for h in Hemisphere], default=None)
    group.add_argument("--lat", type=str, default=None, help="latitude décimale")
    parser.add_argument("--seasons", type=str, default=None, help="fichier JSON des saisons")
    parser.add_argument("--houses", type=str, default=None, help="fichier JSON des maisons")
    parser.add_argument("--no-grid", action="store_true", help="n'affiche que les résumés")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Point d'entrée du script."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.year is not None and not MINYEAR <= args.year <= MAXYEAR:
        parser.error(f"--year must be between {MINYEAR} and {MAXYEAR}")
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    if args.seasons:
        settings.SEASONS_DATA_PATH = args.seasons
    if args.houses:
        settings.HOUSES_DATA_PATH = args.houses

    try:
        container = Container(settings)
        hemisphere = (
            hemisphere_from_latitude(args.lat) if args.lat is not None else args.hemisphere
        )
    except AlmanacError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    service = container.dashboard
    today = args.today or date.today()
    year = args.year or today.year

    if not args.no_grid:
        print(f"{year}")
        for line in render_grid(service.annotated_grid(year, today, hemisphere)):
            print(line)
        print()

    season = service.current_season(today, hemisphere)
    if season:
        print(
            f"Season: {season.season.name} ({season.hemisphere.value}) "
            f"{season.season.start_date} → {season.season.end_date} "
            f"{round(season.progress)}% - {season.days_remaining} days until transition"
        )
    else:
        print("Season: not covered by dataset")

    house = service.current_house(today)
    if house:
        h = house.house
        print(
            f"House {h.id}: {h.english_name} ({h.english_period}) "
            f"{h.calculated_start_date} → {h.calculated_end_date} [{h.duration} days] "
            f"{round(house.progress)}% - {house.days_remaining} days remaining"
        )
    else:
        print("House: not covered by table")

    progress = service.year_progress(today)
    print(
        f"Year {progress.year}: {round(progress.progress)}% "
        f"({progress.days_passed}/{progress.total_days} days, {progress.days_remaining} left)"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
