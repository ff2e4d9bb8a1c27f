"""
Conteneur d'injection de dépendances.

Charge une fois les jeux de données désignés par la configuration et expose le service tableau
de bord. `get_container()` renvoie une instance partagée ; les tests et scripts peuvent
construire leur propre `Container(settings)`.
"""

from functools import lru_cache

from almanac.core.settings import Settings, get_settings
from almanac.domain.entities import Hemisphere
from almanac.infra.datasets import load_house_table, load_season_calendar
from almanac.services.dashboard import DashboardService


class Container:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.season_calendar = load_season_calendar(self.settings.SEASONS_DATA_PATH)
        self.house_table = load_house_table(
            self.settings.HOUSES_DATA_PATH,
            leap_absorbing_house_id=self.settings.LEAP_ABSORBING_HOUSE_ID,
        )
        self.dashboard = DashboardService(
            self.season_calendar,
            self.house_table,
            default_hemisphere=Hemisphere(self.settings.DEFAULT_HEMISPHERE),
        )


@lru_cache(maxsize=1)
def get_container() -> Container:
    """Instance partagée, construite à la première demande."""
    return Container()
