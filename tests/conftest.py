"""Configuration de test pour pytest avec gestion des chemins.

Ce module ajoute la racine du projet au sys.path et fournit les fixtures communes: table des
modèles, index des régions de référence, collaborateur amont factice et client HTTP de test.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from basin_service...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fastapi.testclient import TestClient  # noqa: E402

from basin_service.app.main import create_app  # noqa: E402
from basin_service.core.container import Container  # noqa: E402
from basin_service.core.settings import DEFAULT_BASINS_GEOJSON, Settings  # noqa: E402
from basin_service.domain.basin_models import BasinModelTable  # noqa: E402
from basin_service.domain.basin_terms import BasinTermResolver  # noqa: E402
from basin_service.domain.regions import load_region_index  # noqa: E402
from basin_service.infra.static_point_values import StaticPointValueClient  # noqa: E402
from tests.fakes import RAW_VALUES  # noqa: E402


@pytest.fixture()
def models() -> BasinModelTable:
    return BasinModelTable()


@pytest.fixture()
def regions(models):
    return load_region_index(DEFAULT_BASINS_GEOJSON, models)


@pytest.fixture()
def point_client() -> StaticPointValueClient:
    return StaticPointValueClient(RAW_VALUES)


@pytest.fixture()
def resolver(regions, models, point_client) -> BasinTermResolver:
    return BasinTermResolver(regions, models, point_client)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        BASINS_GEOJSON=str(DEFAULT_BASINS_GEOJSON),
        ARCGIS_HOST="https://arcgis.test",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def container(settings, point_client) -> Container:
    return Container(settings=settings, point_client=point_client)


@pytest.fixture()
def client(container) -> TestClient:
    return TestClient(create_app(container))
