# ============================================================
# Module : basin_service/infra/arcgis_client.py
# Objet  : Client du service ArcGIS "identify" des bassins.
# Invariants :
#  - Une requête = un point (pas de requête par enveloppe).
#  - Aucun retry: les échecs remontent tels quels à l'appelant.
# ============================================================
"""Client HTTP du service ArcGIS Online des données de bassin.

Le service `MapServer/identify` retourne, pour un point, un tableau `results`
dont le premier élément porte les `attributes`: profondeurs `Z1p0<model>` et
`Z2p5<model>` (en mètres), `Vs30`, `Lat` et `Lon`.
"""

from __future__ import annotations

import math
import time
from typing import Any

import httpx
import structlog

from basin_service.app.metrics import UPSTREAM_ERRORS, UPSTREAM_LATENCY
from basin_service.core.http_constants import HTTP_BAD_REQUEST
from basin_service.domain.coordinates import Coordinate
from basin_service.domain.errors import UpstreamEmptyError, UpstreamUnavailableError
from basin_service.domain.point_values import PointValueClient, PointValueResult

IDENTIFY_PATH = "/arcgis/rest/services/haz/basin/MapServer/identify"

Z1P0_ATTRIBUTE = "Z1p0"
Z2P5_ATTRIBUTE = "Z2p5"
VS30_ATTRIBUTE = "Vs30"
LAT_ATTRIBUTE = "Lat"
LON_ATTRIBUTE = "Lon"
NULL_MARKER = "Null"


def read_arc_value(attributes: dict[str, Any], key: str) -> float | None:
    """Lit un attribut numérique ArcGIS; `null`, "Null" et NaN donnent `None`.

    Raises:
        ValueError: valeur non numérique ou infinie.
    """
    raw = attributes.get(key)
    if raw is None or raw == NULL_MARKER:
        return None
    value = float(raw)
    if math.isnan(value):
        return None
    if math.isinf(value):
        raise ValueError(f"Non-finite value for [{key}]: {raw}")
    return value


def parse_identify_response(data: Any, url: str) -> PointValueResult:
    """Convertit la réponse JSON d'`identify` en `PointValueResult`.

    Raises:
        UpstreamEmptyError: `results` vide/absent, attributs manquants ou
            valeurs non numériques.
    """
    try:
        attributes = data["results"][0]["attributes"]
    except (KeyError, IndexError, TypeError) as err:
        raise UpstreamEmptyError(f"Empty results array returned from: {url}", url=url) from err
    if not isinstance(attributes, dict):
        raise UpstreamEmptyError(f"Empty results array returned from: {url}", url=url)

    try:
        basin_values = {
            key: read_arc_value(attributes, key)
            for key in attributes
            if Z1P0_ATTRIBUTE in key or Z2P5_ATTRIBUTE in key
        }
        return PointValueResult(
            latitude=read_arc_value(attributes, LAT_ATTRIBUTE),
            longitude=read_arc_value(attributes, LON_ATTRIBUTE),
            vs30=read_arc_value(attributes, VS30_ATTRIBUTE),
            basin_values=basin_values,
            url=url,
        )
    except (TypeError, ValueError) as err:
        raise UpstreamEmptyError(f"Unreadable values returned from: {url}", url=url) from err


class ArcGisPointClient(PointValueClient):
    """Adaptateur ArcGIS via API HTTP (identify, géométrie ponctuelle).

    Paramètres:
      - host: racine du serveur ArcGIS (ex: https://arcgis.example.org)
      - timeout_s: délai global d'un appel; un dépassement est une
        indisponibilité.
      - client: `httpx.Client` injectable (tests, transport simulé).
    """

    def __init__(
        self,
        host: str,
        timeout_s: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.host = host.rstrip("/")
        self.service_url = self.host + IDENTIFY_PATH
        self._log = structlog.get_logger(__name__).bind(component="arcgis_client")
        if client is None:
            timeout = httpx.Timeout(timeout_s)
            limits = httpx.Limits(max_keepalive_connections=20, max_connections=50)
            client = httpx.Client(timeout=timeout, limits=limits)
        self._client = client

    def build_params(self, coord: Coordinate) -> dict[str, str]:
        return {
            "geometryType": "esriGeometryPoint",
            "geometry": f"{coord.longitude},{coord.latitude}",
            "tolerance": "1",
            "mapExtent": "1",
            "imageDisplay": "1",
            "f": "json",
        }

    def lookup(self, coord: Coordinate) -> PointValueResult:
        """Interroge ArcGIS pour un point et retourne les attributs bruts."""
        params = self.build_params(coord)
        url = str(httpx.URL(self.service_url, params=params))
        self._log.debug("arcgis_request", url=url)

        start = time.perf_counter()
        try:
            resp = self._client.get(self.service_url, params=params)
        except httpx.HTTPError as exc:
            UPSTREAM_ERRORS.labels("unavailable").inc()
            self._log.warning("arcgis_unreachable", url=url, error=str(exc))
            raise UpstreamUnavailableError(f"Could not reach: {url}", url=url) from exc
        finally:
            UPSTREAM_LATENCY.observe(time.perf_counter() - start)

        if resp.status_code >= HTTP_BAD_REQUEST:
            UPSTREAM_ERRORS.labels("unavailable").inc()
            self._log.warning("arcgis_http_error", url=url, status_code=resp.status_code)
            raise UpstreamUnavailableError(
                f"Could not reach: {url} (HTTP {resp.status_code})", url=url
            )

        try:
            data = resp.json()
        except ValueError as exc:
            UPSTREAM_ERRORS.labels("empty").inc()
            raise UpstreamEmptyError(f"Empty results array returned from: {url}", url=url) from exc

        try:
            return parse_identify_response(data, url)
        except UpstreamEmptyError:
            UPSTREAM_ERRORS.labels("empty").inc()
            self._log.warning("arcgis_empty_result", url=url)
            raise

    def close(self) -> None:
        self._client.close()
