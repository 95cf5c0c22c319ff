"""
Quick smoke test for the basin endpoints using TestClient.

Checks, with a deterministic point-value collaborator (no network):
- GET /health
- GET /basin (usage)
- GET /basin?latitude=..&longitude=.. for sites inside each basin and one outside
"""

from fastapi.testclient import TestClient

from basin_service.app.main import create_app
from basin_service.core.container import Container
from basin_service.domain.basin_models import BASIN_MODEL_IDS, BasinModel
from basin_service.infra.static_point_values import StaticPointValueClient

SITES = {
    "Los Angeles CA": (34.05, -118.25),
    "Northridge CA": (34.2, -118.55),
    "San Francisco CA": (37.75, -122.4),
    "San Jose CA": (37.35, -121.9),
    "Oakland CA": (37.8, -122.25),
    "Salt Lake City UT": (40.75, -111.9),
    "Provo UT": (40.25, -111.65),
    "Seattle WA": (47.6, -122.3),
    "Tacoma WA": (47.25, -122.45),
    "Elko NV": (40.85, -115.75),
}


def _static_values() -> dict[str, float]:
    values: dict[str, float] = {}
    for model_id in BASIN_MODEL_IDS:
        model = BasinModel.from_model_id(model_id)
        values[model.z1p0] = 500.0
        values[model.z2p5] = 2500.0
    return values


def main() -> None:
    """
    Point d'entrée principal pour les tests de fumée.

    Exécute une série d'appels de base pour vérifier que l'application fonctionne avec un
    collaborateur amont déterministe.
    """
    client_stub = StaticPointValueClient(_static_values())
    client = TestClient(create_app(Container(point_client=client_stub)))

    r = client.get("/health")
    print("/health:", r.status_code, r.json())

    r = client.get("/basin")
    print("/basin usage:", r.status_code, len(r.json().get("basinRegions", [])), "regions")

    for name, (lat, lon) in SITES.items():
        r = client.get("/basin", params={"latitude": lat, "longitude": lon})
        data = r.json()
        region = data["request"]["region"]
        print(
            f"{name}:",
            r.status_code,
            region["id"] if region else None,
            data["response"]["z1p0"]["value"],
            data["response"]["z2p5"]["value"],
        )
    print("upstream calls:", client_stub.call_count)


if __name__ == "__main__":
    main()
