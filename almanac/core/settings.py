"""Définition et chargement des paramètres de configuration du moteur.

Objectif du module
------------------
- Centraliser les paramètres (env/.env) via Pydantic Settings
- Résoudre le fichier `.env` à utiliser selon la stratégie: ENV_FILE > .env.{APP_ENV} > .env
- Pointer par défaut vers les jeux de données embarqués (`almanac/data`)
"""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Détermination du fichier .env à utiliser avec priorité:
# 1) ENV_FILE (chemin explicite)
# 2) .env.{APP_ENV} si présent
# 3) .env (défaut)
_cwd = Path.cwd()
_env_file_from_env = os.getenv("ENV_FILE")
if _env_file_from_env:
    _ENV_FILE_PATH = _env_file_from_env
else:
    _app_env = os.getenv("APP_ENV", "dev")
    _candidate_specific = _cwd / f".env.{_app_env}"
    _candidate_default = _cwd / ".env"
    if _candidate_specific.exists():
        _ENV_FILE_PATH = _candidate_specific
    else:
        _ENV_FILE_PATH = _candidate_default

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    """Modèle de configuration chargé depuis l'environnement et .env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
    )
    APP_NAME: str = "almanac-engine"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Hémisphère utilisé quand l'appelant n'en fournit pas
    DEFAULT_HEMISPHERE: Literal["northern", "southern", "equator"] = "northern"
    # Maison lunaire qui absorbe le 29 février (None = pas d'ajustement)
    LEAP_ABSORBING_HOUSE_ID: int | None = 7

    SEASONS_DATA_PATH: str = str(DATA_DIR / "seasons.json")
    HOUSES_DATA_PATH: str = str(DATA_DIR / "manazil.json")


def get_settings() -> Settings:
    """Construit et retourne la configuration de l'application."""
    return Settings()
