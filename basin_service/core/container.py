"""
Conteneur d'injection de dépendances du service de termes de bassin.

Instancie une fois, au démarrage, les composants partagés en lecture seule
(table des modèles, index des régions) et le collaborateur de valeurs
ponctuelles, puis les assemble dans le `BasinTermResolver`. Toute erreur de
configuration est fatale.
"""

from __future__ import annotations

import structlog

from basin_service.core.settings import Settings, get_settings
from basin_service.domain.basin_models import BasinModelTable
from basin_service.domain.basin_terms import BasinTermResolver
from basin_service.domain.errors import ConfigurationError
from basin_service.domain.point_values import PointValueClient
from basin_service.domain.regions import RegionIndex, load_region_index
from basin_service.domain.responses import ResponseAssembler
from basin_service.infra.arcgis_client import ArcGisPointClient
from basin_service.infra.csv_grid_point_values import CsvGridPointValueClient

log = structlog.get_logger(__name__)


def build_point_client(settings: Settings, regions: RegionIndex) -> PointValueClient:
    """Crée le collaborateur désigné par `POINT_VALUE_SOURCE`.

    Raises:
        ConfigurationError: source `csv_grid` sans `BASIN_DATA_DIR` ou données
            illisibles.
    """
    if settings.POINT_VALUE_SOURCE == "csv_grid":
        if not settings.BASIN_DATA_DIR:
            raise ConfigurationError("BASIN_DATA_DIR is required when POINT_VALUE_SOURCE=csv_grid")
        return CsvGridPointValueClient(settings.BASIN_DATA_DIR, regions)
    return ArcGisPointClient(settings.ARCGIS_HOST, timeout_s=settings.ARCGIS_TIMEOUT_S)


class Container:
    def __init__(
        self,
        settings: Settings | None = None,
        point_client: PointValueClient | None = None,
    ):
        """Construit les dépendances.

        Paramètres:
        - settings: configuration (par défaut `get_settings()`).
        - point_client: collaborateur amont (par défaut selon
          `POINT_VALUE_SOURCE`).

        Raises:
            ConfigurationError: régions illisibles, modèle par défaut inconnu
                ou source de valeurs invalide.
        """
        self.settings = settings or get_settings()
        self.models = BasinModelTable()
        self.regions = load_region_index(self.settings.BASINS_GEOJSON, self.models)
        if point_client is None:
            point_client = build_point_client(self.settings, self.regions)
        self.point_client = point_client
        self.resolver = BasinTermResolver(self.regions, self.models, self.point_client)
        self.responses = ResponseAssembler()
        log.info(
            "container_ready",
            regions=len(self.regions),
            models=len(self.models),
            point_client=type(self.point_client).__name__,
        )

    @property
    def upstream_host(self) -> str:
        return getattr(self.point_client, "host", type(self.point_client).__name__)

    def close(self) -> None:
        """Libère les ressources du collaborateur (connexions HTTP)."""
        close = getattr(self.point_client, "close", None)
        if close is not None:
            close()
            log.info("container_closed", point_client=type(self.point_client).__name__)
