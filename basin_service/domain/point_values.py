"""Contrat du collaborateur externe de valeurs ponctuelles.

Le collaborateur reçoit une coordonnée déjà arrondie et retourne, pour ce seul
point, la table brute des attributs amont (profondeurs par modèle, Vs30,
latitude/longitude retournées).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from basin_service.domain.coordinates import Coordinate
from basin_service.domain.errors import UpstreamEmptyError


@dataclass(frozen=True)
class PointValueResult:
    """Attributs bruts retournés pour un point.

    `basin_values` distingue une clé absente (erreur) d'une valeur présente mais
    nulle (`None`, "pas de donnée ici").
    """

    latitude: float | None
    longitude: float | None
    vs30: float | None
    basin_values: dict[str, float | None] = field(default_factory=dict)
    url: str | None = None

    def get(self, key: str) -> float | None:
        """Retourne la valeur brute de `key`.

        Raises:
            UpstreamEmptyError: si la clé est absente de la réponse amont.
        """
        if key not in self.basin_values:
            raise UpstreamEmptyError(
                f"Could not get [{key}] from the upstream service", url=self.url
            )
        return self.basin_values[key]


class PointValueClient(ABC):
    """Interface minimale d'un fournisseur de valeurs ponctuelles.

    Méthodes à implémenter :
      - lookup
    """

    @abstractmethod
    def lookup(self, coord: Coordinate) -> PointValueResult:
        """Retourne les attributs bruts au point `coord` (arrondi à 0.01°).

        Raises:
            UpstreamUnavailableError: service injoignable.
            UpstreamEmptyError: réponse sans enregistrement exploitable.
        """
        raise NotImplementedError
