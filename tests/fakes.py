"""Données et doublures partagées par les tests."""

from __future__ import annotations

from basin_service.domain.coordinates import Coordinate
from basin_service.domain.errors import UpstreamUnavailableError
from basin_service.domain.point_values import PointValueClient, PointValueResult
from basin_service.infra.static_point_values import StaticPointValueClient

# Valeurs amont (mètres) utilisées par défaut dans les tests
RAW_VALUES = {
    "Z1p0cvms426m01": 1500.0,
    "Z2p5cvms426m01": 4000.0,
    "Z1p0bayarea": 250.0,
    "Z2p5bayarea": 1800.0,
    "Z1p0Wasatch": 600.0,
    "Z2p5Wasatch": None,
    "Z1p0Seattle": 9999.0,
    "Z2p5Seattle": 2000.0,
}

LOS_ANGELES = (34.05, -118.25)
SEATTLE = (47.6, -122.3)
SALT_LAKE_CITY = (40.75, -111.9)
SAN_FRANCISCO = (37.75, -122.4)
OPEN_OCEAN = (30.0, -140.0)


class UnreachablePointValueClient(PointValueClient):
    """Collaborateur simulant un service amont injoignable."""

    def __init__(self) -> None:
        self.calls = 0

    def lookup(self, coord: Coordinate) -> PointValueResult:
        self.calls += 1
        url = f"https://arcgis.test/identify?geometry={coord.longitude},{coord.latitude}"
        raise UpstreamUnavailableError(f"Could not reach: {url}", url=url)


class ClosablePointValueClient(StaticPointValueClient):
    """Collaborateur factice qui enregistre sa fermeture."""

    def __init__(self, basin_values=None) -> None:
        super().__init__(basin_values)
        self.closed = False

    def close(self) -> None:
        self.closed = True
