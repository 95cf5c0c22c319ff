"""Index des régions de bassin chargé depuis un fichier GeoJSON.

Objectif du module
------------------
- Charger une seule fois, au démarrage, les polygones des bassins d'intérêt et
  leur modèle par défaut.
- Répondre à la question "quelle région contient ce point ?".

Invariants
----------
- L'index est immuable après chargement; partageable sans verrou.
- L'ordre de chargement est conservé: la première région qui contient le point
  l'emporte.
- La frontière est incluse (un point sur un bord ou un sommet est contenu).
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
from shapely.geometry import Point, Polygon, shape
from shapely.prepared import prep

from basin_service.domain.basin_models import BasinModel, BasinModelTable
from basin_service.domain.coordinates import Coordinate
from basin_service.domain.errors import ConfigurationError, ModelNotFoundError

log = structlog.get_logger(__name__)

REQUIRED_PROPERTIES = ("title", "id", "defaultModel")


@dataclass(frozen=True)
class BasinRegion:
    """Région de bassin: titre, identifiant, modèle par défaut et frontière."""

    title: str
    id: str
    default_model: BasinModel
    boundary: Polygon

    def contains(self, coord: Coordinate) -> bool:
        # covers() inclut la frontière, contrairement à contains()
        return self.boundary.covers(Point(coord.longitude, coord.latitude))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "defaultModel": self.default_model.id,
            "boundary": [[lon, lat] for lon, lat in self.boundary.exterior.coords],
        }


class RegionIndex:
    """Collection ordonnée et immuable de `BasinRegion`."""

    def __init__(self, regions: list[BasinRegion], geojson: str | None = None):
        self._regions = tuple(regions)
        self._prepared = tuple(prep(r.boundary) for r in self._regions)
        self._by_id = {r.id: r for r in self._regions}
        self.geojson = geojson

    def find_region(self, coord: Coordinate) -> BasinRegion | None:
        """Retourne la première région (ordre de chargement) qui couvre `coord`."""
        point = Point(coord.longitude, coord.latitude)
        for region, prepared in zip(self._regions, self._prepared, strict=True):
            if prepared.covers(point):
                return region
        return None

    def all_regions(self) -> tuple[BasinRegion, ...]:
        return self._regions

    def get(self, region_id: str) -> BasinRegion | None:
        return self._by_id.get(region_id)

    def __iter__(self) -> Iterator[BasinRegion]:
        return iter(self._regions)

    def __len__(self) -> int:
        return len(self._regions)


def _region_from_feature(
    feature: dict[str, Any], position: int, models: BasinModelTable
) -> BasinRegion:
    properties = feature.get("properties") or {}
    missing = [k for k in REQUIRED_PROPERTIES if not properties.get(k)]
    if missing:
        raise ConfigurationError(
            f"Feature #{position} is missing properties: {', '.join(missing)}"
        )
    geometry = feature.get("geometry") or {}
    if geometry.get("type") != "Polygon":
        raise ConfigurationError(
            f"Region [{properties['id']}] must have a Polygon geometry, "
            f"got [{geometry.get('type')}]"
        )
    try:
        boundary = shape(geometry)
    except (ValueError, TypeError, IndexError) as err:
        raise ConfigurationError(f"Region [{properties['id']}] has an invalid polygon") from err
    if boundary.is_empty or not boundary.is_valid:
        raise ConfigurationError(f"Region [{properties['id']}] has an invalid polygon")
    try:
        default_model = models.from_id(properties["defaultModel"])
    except ModelNotFoundError as err:
        raise ConfigurationError(
            f"Region [{properties['id']}] references unknown model "
            f"[{properties['defaultModel']}]"
        ) from err
    return BasinRegion(
        title=properties["title"],
        id=properties["id"],
        default_model=default_model,
        boundary=boundary,
    )


def parse_region_index(text: str, models: BasinModelTable) -> RegionIndex:
    """Construit un `RegionIndex` depuis le texte d'une FeatureCollection GeoJSON.

    Raises:
        ConfigurationError: JSON invalide, géométrie non polygonale, propriété
            manquante, identifiant dupliqué ou modèle par défaut inconnu.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        raise ConfigurationError(f"Basin regions are not valid JSON: {err}") from err
    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        raise ConfigurationError("Basin regions must be a GeoJSON FeatureCollection")
    features = data.get("features")
    if not isinstance(features, list) or not features:
        raise ConfigurationError("Basin regions FeatureCollection has no features")

    regions: list[BasinRegion] = []
    seen: set[str] = set()
    for position, feature in enumerate(features):
        region = _region_from_feature(feature, position, models)
        if region.id in seen:
            raise ConfigurationError(f"Duplicate basin region id [{region.id}]")
        seen.add(region.id)
        regions.append(region)
    return RegionIndex(regions, geojson=text)


def load_region_index(source: str | Path, models: BasinModelTable) -> RegionIndex:
    """Lit le fichier GeoJSON `source` et retourne l'index des régions."""
    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as err:
        raise ConfigurationError(f"Could not read basin regions from [{path}]") from err
    index = parse_region_index(text, models)
    log.info("basin_regions_loaded", path=str(path), regions=[r.id for r in index])
    return index
