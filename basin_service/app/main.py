"""
Application principale FastAPI.

Ce module assemble tous les composants du service de termes de bassin : middlewares, routes,
gestion des erreurs, métriques et conteneur de dépendances.

Responsabilités du module:
- Initialiser le logging structuré
- Construire le conteneur (échec immédiat si la configuration est invalide)
- Ajouter les middlewares (request id, Prometheus)
- Monter les routers (santé, bassins, métriques)
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from basin_service.api.errors import register_error_handlers
from basin_service.api.routes_basin import router as basin_router
from basin_service.api.routes_health import router as health_router
from basin_service.app.metrics import PrometheusMiddleware, metrics_router
from basin_service.core.container import Container
from basin_service.core.logging import setup_logging
from basin_service.core.settings import get_settings
from basin_service.middlewares.request_id import RequestIDMiddleware


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Ferme le collaborateur amont à l'arrêt du serveur."""
    yield
    app.state.container.close()


def create_app(container: Container | None = None) -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog)
    - Construit le conteneur si aucun n'est fourni
    - Ajoute les middlewares utiles au debug/traçabilité
    - Publie les routes de santé, de bassin et de métriques
    """
    settings = container.settings if container is not None else get_settings()
    setup_logging(settings.LOG_LEVEL)
    if container is None:
        container = Container(settings=settings)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG, lifespan=_lifespan)
    app.state.container = container
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(basin_router)
    app.include_router(metrics_router)
    return app


def run() -> None:
    """Lance le serveur uvicorn avec l'hôte/port configurés."""
    import uvicorn  # noqa: PLC0415

    settings = get_settings()
    uvicorn.run(
        "basin_service.app.main:create_app",
        factory=True,
        host=settings.APP_HOST,
        port=settings.APP_PORT,
    )
