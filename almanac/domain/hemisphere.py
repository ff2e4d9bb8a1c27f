"""Hémisphère : ré-étiquetage des saisons et classification par latitude.

Les deux hémisphères partagent les mêmes dates astronomiques ; seules les étiquettes changent.
Au sud, printemps↔automne et été↔hiver sont échangés, les plages de dates restent intactes.
"""

from __future__ import annotations

from collections.abc import Iterable

from almanac.core.errors import InvalidLatitudeError
from almanac.domain.entities import Hemisphere, NamedInterval

SOUTHERN_SWAPS: dict[str, str] = {
    "spring": "autumn",
    "summer": "winter",
    "autumn": "spring",
    "winter": "summer",
}


def coerce_hemisphere(
    value: Hemisphere | str | None, default: Hemisphere = Hemisphere.NORTHERN
) -> Hemisphere:
    """Normalise une valeur d'hémisphère (enum, chaîne ou None → `default`)."""
    if value is None:
        return default
    if isinstance(value, Hemisphere):
        return value
    return Hemisphere(str(value).strip().lower())


def remap_season_name(name: str, hemisphere: Hemisphere) -> str:
    """Return the conventional season label for `hemisphere`.

    Northern and equator keep the dataset label; unknown labels pass through untouched.
    """
    if hemisphere is not Hemisphere.SOUTHERN:
        return name
    return SOUTHERN_SWAPS.get(name, name)


def relabel_intervals(
    intervals: Iterable[NamedInterval], hemisphere: Hemisphere
) -> tuple[NamedInterval, ...]:
    """Applique `remap_season_name` à chaque intervalle, sans toucher aux dates."""
    if hemisphere is not Hemisphere.SOUTHERN:
        return tuple(intervals)
    return tuple(
        interval.model_copy(update={"name": remap_season_name(interval.name, hemisphere)})
        for interval in intervals
    )


def hemisphere_from_latitude(latitude: str | float | int) -> Hemisphere:
    """Classe une latitude : positive → nord, négative → sud, zéro → équateur.

    Raises:
        InvalidLatitudeError: si la valeur n'est pas numérique.
    """
    try:
        lat = float(latitude)
    except (TypeError, ValueError) as exc:
        raise InvalidLatitudeError(f"Invalid latitude provided: {latitude!r}") from exc
    if lat != lat:  # NaN
        raise InvalidLatitudeError(f"Invalid latitude provided: {latitude!r}")
    if lat > 0:
        return Hemisphere.NORTHERN
    if lat < 0:
        return Hemisphere.SOUTHERN
    return Hemisphere.EQUATOR
