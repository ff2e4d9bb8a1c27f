"""Exceptions du moteur calendaire.

Le moteur lui-même n'échoue pas en fonctionnement normal : une année absente
d'un jeu de données donne un résultat vide. Les erreurs ci-dessous concernent
le chargement des données et les collaborateurs en amont.
"""

from __future__ import annotations


class AlmanacError(Exception):
    """Base de toutes les erreurs applicatives."""


class DatasetError(AlmanacError, ValueError):
    """Jeu de données (saisons ou maisons) illisible ou incohérent."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class InvalidLatitudeError(AlmanacError, ValueError):
    """Latitude non numérique fournie pour classer l'hémisphère."""
