"""
Endpoint de santé pour vérifier la disponibilité de l'API.

Expose `/health`: nombre de régions et de modèles chargés et hôte du service amont.
"""

from fastapi import APIRouter, Depends

from basin_service.api.deps import get_container
from basin_service.api.schemas import HealthResponse
from basin_service.core.container import Container

router = APIRouter(tags=["health"])
container_dep = Depends(get_container)


@router.get("/health", response_model=HealthResponse)
def health(container: Container = container_dep):
    """Vérifie que la configuration statique est chargée."""
    return {
        "status": "ok",
        "regions": len(container.regions),
        "models": len(container.models),
        "upstream": container.upstream_host,
    }
