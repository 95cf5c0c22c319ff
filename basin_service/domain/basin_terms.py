"""Résolution des termes de bassin z1.0 et z2.5 pour une coordonnée.

Démarche (par requête, sans état persistant):
1. Arrondir la coordonnée à 0.01°.
2. Chercher la région de bassin qui contient le point.
3. Hors de toute région: termes nuls, le service amont n'est pas appelé.
4. Choisir le modèle: id explicite (validé) ou modèle par défaut de la région.
5. Interroger le collaborateur de valeurs ponctuelles.
6. Extraire les deux profondeurs du modèle, convertir m -> km, et appliquer la
   substitution de régression propre au Puget Lowland.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from basin_service.domain.basin_models import BasinModel, BasinModelTable
from basin_service.domain.coordinates import Coordinate
from basin_service.domain.point_values import PointValueClient, PointValueResult
from basin_service.domain.regions import BasinRegion, RegionIndex

log = structlog.get_logger(__name__)

METERS_PER_KILOMETER = 1000.0

PUGET_LOWLAND_ID = "pugetLowland"


def to_kilometers(value: float | None) -> float | None:
    """Convertit une profondeur amont (m) en km; `None` reste `None`."""
    if value is None:
        return None
    return value / METERS_PER_KILOMETER


def puget_lowland_z1p0(z2p5: float | None) -> float | None:
    """z1.0 (km) dérivé de z2.5 (km) par régression à deux branches pondérées 50/50."""
    if z2p5 is None:
        return None
    return 0.5 * (0.1146 * z2p5 + 0.2826) + 0.5 * (0.0933 * z2p5 + 0.1444)


@dataclass(frozen=True)
class BasinTerm:
    """Valeur d'un terme de bassin, étiquetée par la clé amont du modèle."""

    model: str
    value: float | None

    def to_dict(self) -> dict:
        return {"model": self.model, "value": self.value}


NULL_TERM = BasinTerm(model="", value=None)


@dataclass(frozen=True)
class BasinTermResult:
    """Résultat complet d'une résolution: requête normalisée et termes."""

    coordinate: Coordinate
    region: BasinRegion | None
    model: BasinModel | None
    z1p0: BasinTerm
    z2p5: BasinTerm
    upstream: PointValueResult | None = None


class BasinTermResolver:
    """Service métier de calcul des termes de bassin.

    Responsabilités:
    - Localiser la région via `regions`.
    - Valider/choisir le modèle via `models`.
    - Interroger `client` uniquement pour un point situé dans une région.
    """

    def __init__(self, regions: RegionIndex, models: BasinModelTable, client: PointValueClient):
        self.regions = regions
        self.models = models
        self.client = client

    def select_model(self, region: BasinRegion, model_id: str | None) -> BasinModel:
        """Modèle explicite s'il est fourni, sinon modèle par défaut de la région."""
        if model_id is None:
            return region.default_model
        return self.models.from_id(model_id)

    def resolve(
        self, latitude: float, longitude: float, model_id: str | None = None
    ) -> BasinTermResult:
        """Calcule les termes z1.0/z2.5 (km) au point donné.

        Raises:
            ValidationError: coordonnée hors bornes ou modèle inconnu.
            UpstreamUnavailableError, UpstreamEmptyError: échec du service amont,
                propagé sans retry ni valeur de repli.
        """
        coord = Coordinate.create(latitude, longitude).rounded()
        region = self.regions.find_region(coord)
        if region is None:
            log.info("basin_region_miss", latitude=coord.latitude, longitude=coord.longitude)
            return BasinTermResult(
                coordinate=coord, region=None, model=None, z1p0=NULL_TERM, z2p5=NULL_TERM
            )

        model = self.select_model(region, model_id)
        raw = self.client.lookup(coord)

        z2p5 = to_kilometers(raw.get(model.z2p5))
        if region.id == PUGET_LOWLAND_ID:
            # z1.0 amont peu fiable dans ce bassin: dérivé de z2.5
            z1p0 = puget_lowland_z1p0(z2p5)
        else:
            z1p0 = to_kilometers(raw.get(model.z1p0))

        log.info(
            "basin_terms_resolved",
            region=region.id,
            model=model.id,
            z1p0=z1p0,
            z2p5=z2p5,
        )
        return BasinTermResult(
            coordinate=coord,
            region=region,
            model=model,
            z1p0=BasinTerm(model.z1p0, z1p0),
            z2p5=BasinTerm(model.z2p5, z2p5),
            upstream=raw,
        )
