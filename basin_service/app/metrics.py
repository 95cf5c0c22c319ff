"""
Métriques Prometheus pour l'application.

Ce module définit les métriques Prometheus du service de termes de bassin: trafic HTTP, résolutions
par région/modèle et santé du service amont ArcGIS.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

metrics_router = APIRouter()

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

# Basin-specific metrics
BASIN_LOOKUPS = Counter(
    "basin_lookups_total",
    "Basin term resolutions that reached the upstream service",
    ["region", "model"],
)
UPSTREAM_ERRORS = Counter(
    "upstream_errors_total",
    "Upstream point-value service failures",
    ["kind"],
)
UPSTREAM_LATENCY = Histogram(
    "upstream_latency_seconds",
    "Latency of upstream point-value requests",
    buckets=[0.05, 0.1, 0.2, 0.4, 0.8, 1.6, 3.2, 6.4],
)


@metrics_router.get("/metrics")
def metrics():
    """
    Expose les métriques Prometheus au format texte.

    Returns:
        Response: Réponse HTTP contenant les métriques au format Prometheus.
    """
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


def route_label(request: Request) -> str:
    """Gabarit de la route résolue (ex: `/basin/regions`), `unmatched` sinon."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware Prometheus pour mesurer les métriques HTTP.

    Collecte les métriques de comptage des requêtes et de latence par route pour l'exposition
    Prometheus.
    """

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response: Response = await call_next(request)
        route = route_label(request)
        REQUEST_COUNT.labels(request.method, route, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(route).observe(time.perf_counter() - start)
        return response
