"""Assemblage des réponses JSON du service de termes de bassin.

Chaque charge utile est encodée champ par champ (pas de sérialisation par
réflexion). Le seul champ non déterministe est `date`.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from basin_service.domain.basin_models import BasinModelTable
from basin_service.domain.basin_terms import BasinTermResult
from basin_service.domain.regions import RegionIndex

SERVICE_NAME = "Basin Term Service"
SERVICE_DESCRIPTION = "Get basin terms"

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"
STATUS_USAGE = "usage"


def _now() -> str:
    return datetime.now(UTC).isoformat()


class ResponseAssembler:
    """Construit les charges utiles `success`, `error` et `usage`."""

    def __init__(self, name: str = SERVICE_NAME):
        self.name = name

    def success(self, result: BasinTermResult, url: str) -> dict[str, Any]:
        region = result.region
        return {
            "status": STATUS_SUCCESS,
            "name": self.name,
            "date": _now(),
            "url": url,
            "request": {
                "latitude": result.coordinate.latitude,
                "longitude": result.coordinate.longitude,
                "region": None if region is None else {"title": region.title, "id": region.id},
                "model": None if result.model is None else result.model.id,
            },
            "response": {
                "z1p0": result.z1p0.to_dict(),
                "z2p5": result.z2p5.to_dict(),
            },
        }

    def error(self, url: str, message: str) -> dict[str, Any]:
        return {
            "status": STATUS_ERROR,
            "name": self.name,
            "date": _now(),
            "request": url,
            "message": message,
        }

    def usage(
        self, base_url: str, models: BasinModelTable, regions: RegionIndex
    ) -> dict[str, Any]:
        """Décrit le service: syntaxe, modèles disponibles et régions."""
        return {
            "status": STATUS_USAGE,
            "name": self.name,
            "description": SERVICE_DESCRIPTION,
            "usage": base_url,
            "geojson": f"{base_url}/geojson",
            "syntax": f"{base_url}?latitude={{latitude}}&longitude={{longitude}}&model={{basinModel}}",
            "basinModels": {
                "label": "Basin models",
                "values": [m.to_dict() for m in models],
            },
            "basinRegions": [r.to_dict() for r in regions],
        }
