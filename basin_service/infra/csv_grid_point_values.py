"""Collaborateur de valeurs ponctuelles lu depuis des grilles CSV locales.

Objectif du module
------------------
- Charger une fois, au démarrage, un fichier `<basin-id>.csv` par région de
  bassin (colonnes `lat,lon,z1p0,z2p5`, profondeurs en mètres).
- Répondre aux requêtes sans réseau: la coordonnée est ramenée au nœud de
  grille le plus proche (pas de 0.05°).
- Étiqueter les valeurs avec les clés du modèle par défaut de la région.
"""

from __future__ import annotations

import csv
import math
import re
from pathlib import Path

import structlog

from basin_service.domain.coordinates import Coordinate, round_to
from basin_service.domain.errors import ConfigurationError, UpstreamEmptyError
from basin_service.domain.point_values import PointValueClient, PointValueResult
from basin_service.domain.regions import BasinRegion, RegionIndex

log = structlog.get_logger(__name__)

BASIN_DATA_SPACING = 0.05

LAT_COLUMN = "lat"
LON_COLUMN = "lon"
Z1P0_COLUMN = "z1p0"
Z2P5_COLUMN = "z2p5"
SUPPORTED_COLUMNS = (LAT_COLUMN, LON_COLUMN, Z1P0_COLUMN, Z2P5_COLUMN)

GridNode = tuple[float, float]


def basin_file_name(region_id: str) -> str:
    """Nom du fichier de données d'une région: `losAngeles` -> `los-angeles.csv`."""
    return re.sub(r"(?<!^)(?=[A-Z])", "-", region_id).lower() + ".csv"


def grid_node(latitude: float, longitude: float) -> GridNode:
    """Nœud de grille (pas de 0.05°) le plus proche du point."""
    return round_to(latitude, BASIN_DATA_SPACING), round_to(longitude, BASIN_DATA_SPACING)


def _read_depth(raw: str) -> float | None:
    raw = raw.strip()
    if not raw or raw.lower() in ("null", "nan"):
        return None
    value = float(raw)
    return value if math.isfinite(value) else None


def read_basin_grid(path: Path) -> dict[GridNode, tuple[float | None, float | None]]:
    """Lit un fichier CSV de bassin en table nœud -> (z1p0, z2p5).

    Raises:
        ConfigurationError: fichier illisible, colonne non supportée ou valeur
            non numérique.
    """
    try:
        with path.open(encoding="utf-8", newline="") as handle:
            reader = csv.DictReader(handle)
            columns = reader.fieldnames or []
            for column in columns:
                if column not in SUPPORTED_COLUMNS:
                    raise ConfigurationError(f"Key [{column}] not supported in {path}")
            missing = [c for c in SUPPORTED_COLUMNS if c not in columns]
            if missing:
                raise ConfigurationError(f"Missing columns {missing} in {path}")

            grid: dict[GridNode, tuple[float | None, float | None]] = {}
            for line, row in enumerate(reader, start=2):
                try:
                    node = grid_node(float(row[LAT_COLUMN]), float(row[LON_COLUMN]))
                    grid[node] = (_read_depth(row[Z1P0_COLUMN]), _read_depth(row[Z2P5_COLUMN]))
                except (TypeError, ValueError) as err:
                    raise ConfigurationError(f"Invalid record at {path}:{line}") from err
    except OSError as err:
        raise ConfigurationError(f"Could not read basin data from [{path}]") from err
    return grid


class CsvGridPointValueClient(PointValueClient):
    """Fournisseur local de profondeurs de bassin, une grille par région.

    Args:
        data_dir: Répertoire contenant les fichiers `<basin-id>.csv`.
        regions: Index des régions; seules les régions ayant un fichier sont
            servies.
    """

    def __init__(self, data_dir: str | Path, regions: RegionIndex):
        self.data_dir = Path(data_dir)
        self.host = f"file://{self.data_dir}"
        self.regions = regions
        if not self.data_dir.is_dir():
            raise ConfigurationError(f"Basin data directory not found: [{self.data_dir}]")

        self._grids: dict[str, dict[GridNode, tuple[float | None, float | None]]] = {}
        for region in regions:
            path = self.data_dir / basin_file_name(region.id)
            if path.exists():
                self._grids[region.id] = read_basin_grid(path)
        if not self._grids:
            raise ConfigurationError(f"No basin data files found in [{self.data_dir}]")
        log.info(
            "basin_grids_loaded",
            data_dir=str(self.data_dir),
            basins=sorted(self._grids),
            nodes=sum(len(g) for g in self._grids.values()),
        )

    @property
    def basin_ids(self) -> tuple[str, ...]:
        return tuple(self._grids)

    def grid_values(
        self, region: BasinRegion, coord: Coordinate
    ) -> tuple[GridNode, tuple[float | None, float | None]]:
        """Retourne le nœud et les valeurs (z1p0, z2p5) au point dans `region`.

        Raises:
            UpstreamEmptyError: bassin sans données ou nœud absent de la grille.
        """
        grid = self._grids.get(region.id)
        if grid is None:
            raise UpstreamEmptyError(f"Basin [{region.id}] not supported", url=self.host)
        node = grid_node(coord.latitude, coord.longitude)
        values = grid.get(node)
        if values is None:
            raise UpstreamEmptyError(
                f"Location [{node[0]}, {node[1]}] not found in basin [{region.id}]",
                url=self.host,
            )
        return node, values

    def lookup(self, coord: Coordinate) -> PointValueResult:
        region = self.regions.find_region(coord)
        if region is None:
            raise UpstreamEmptyError(
                f"No basin region contains [{coord.latitude}, {coord.longitude}]", url=self.host
            )
        (lat, lon), (z1p0, z2p5) = self.grid_values(region, coord)
        model = region.default_model
        return PointValueResult(
            latitude=lat,
            longitude=lon,
            vs30=None,
            basin_values={model.z1p0: z1p0, model.z2p5: z2p5},
            url=f"{self.host}/{basin_file_name(region.id)}",
        )
