"""
Routes du service de termes de bassin.

Endpoints `/basin`:
- sans paramètre: description du service (modèles, régions, syntaxe)
- `?latitude=..&longitude=..[&model=..]`: termes z1.0/z2.5 au point
- `/geojson`: FeatureCollection des régions, telle que chargée
- `/regions`: liste des régions (id, titre, modèle par défaut, frontière)
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from basin_service.api.deps import get_container, request_url
from basin_service.api.schemas import BasinTermsResponse, ErrorResponse, RegionOut
from basin_service.app.metrics import BASIN_LOOKUPS
from basin_service.core.container import Container
from basin_service.core.http_constants import HTTP_BAD_GATEWAY, HTTP_BAD_REQUEST
from basin_service.domain.coordinates import parse_coordinate_value
from basin_service.domain.errors import ValidationError

router = APIRouter(prefix="/basin", tags=["basin"])
container_dep = Depends(get_container)


def _read_model(raw: str | None) -> str | None:
    if raw is None:
        return None
    if not raw.strip():
        raise ValidationError("Empty value for key: model")
    return raw.strip()


@router.get(
    "",
    response_model=None,
    responses={
        200: {"model": BasinTermsResponse},
        HTTP_BAD_REQUEST: {"model": ErrorResponse},
        HTTP_BAD_GATEWAY: {"model": ErrorResponse},
    },
)
def basin_terms(
    request: Request,
    latitude: str | None = None,
    longitude: str | None = None,
    model: str | None = None,
    container: Container = container_dep,
) -> dict:
    """
    Retourne les termes de bassin au point demandé.

    Paramètres:
    - latitude, longitude: degrés décimaux (obligatoires)
    - model: identifiant de modèle de bassin (optionnel; défaut de la région)

    Sans aucun paramètre, retourne la description d'usage du service.
    """
    if not request.query_params:
        return container.responses.usage(
            request_url(request, with_query=False), container.models, container.regions
        )
    lat = parse_coordinate_value("latitude", latitude)
    lon = parse_coordinate_value("longitude", longitude)
    result = container.resolver.resolve(lat, lon, _read_model(model))
    if result.region is not None:
        BASIN_LOOKUPS.labels(result.region.id, result.model.id).inc()
    return container.responses.success(result, request_url(request))


@router.get("/geojson")
def basin_geojson(container: Container = container_dep) -> Response:
    """Retourne la FeatureCollection GeoJSON des régions de bassin."""
    return Response(content=container.regions.geojson, media_type="application/geo+json")


@router.get("/regions", response_model=list[RegionOut])
def basin_regions(container: Container = container_dep) -> list[dict]:
    """Liste les régions de bassin dans l'ordre de recherche."""
    return [region.to_dict() for region in container.regions.all_regions()]
