"""Coordonnées géographiques et arrondi à la précision du service amont.

Les requêtes sont arrondies au 0.01° le plus proche avant toute recherche afin
de stabiliser les appels répétés et de rester dans la tolérance d'ArcGIS.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from basin_service.domain.errors import ValidationError

COORDINATE_SPACING = 0.01

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0


def round_to(value: float, spacing: float = COORDINATE_SPACING) -> float:
    """Arrondit `value` au multiple de `spacing` le plus proche (demi vers le haut).

    Le calcul passe par `Decimal` sur la représentation textuelle des flottants,
    de sorte que `round_to(round_to(x)) == round_to(x)`.
    """
    step = Decimal(str(spacing))
    units = (Decimal(str(value)) / step).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(units * step)


@dataclass(frozen=True)
class Coordinate:
    """Point (latitude, longitude) en degrés décimaux."""

    latitude: float
    longitude: float

    @classmethod
    def create(cls, latitude: float, longitude: float) -> Coordinate:
        """Construit une coordonnée après contrôle des bornes.

        Raises:
            ValidationError: valeur non finie ou hors des bornes WGS84.
        """
        latitude = float(latitude)
        longitude = float(longitude)
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            raise ValidationError("Latitude and longitude must be finite numbers")
        if not MIN_LATITUDE <= latitude <= MAX_LATITUDE:
            raise ValidationError(
                f"Latitude [{latitude}] not in range [{MIN_LATITUDE}, {MAX_LATITUDE}]"
            )
        if not MIN_LONGITUDE <= longitude <= MAX_LONGITUDE:
            raise ValidationError(
                f"Longitude [{longitude}] not in range [{MIN_LONGITUDE}, {MAX_LONGITUDE}]"
            )
        return cls(latitude, longitude)

    def rounded(self, spacing: float = COORDINATE_SPACING) -> Coordinate:
        """Retourne la coordonnée arrondie à `spacing` degrés."""
        return Coordinate(round_to(self.latitude, spacing), round_to(self.longitude, spacing))


def parse_coordinate_value(name: str, raw: str | None) -> float:
    """Lit une valeur de coordonnée issue de la query string.

    Raises:
        ValidationError: clé absente, vide ou non numérique.
    """
    if raw is None:
        raise ValidationError(f"Missing query key: {name}")
    raw = raw.strip()
    if not raw:
        raise ValidationError(f"Empty value for key: {name}")
    try:
        return float(raw)
    except ValueError as err:
        raise ValidationError(f"Invalid value for key {name}: [{raw}]") from err
