"""
Tests pour le conteneur de dépendances et la résolution des settings.

Ce module vérifie que la configuration statique invalide est fatale au démarrage et que les
paramètres sont lus depuis un fichier .env personnalisé.
"""

from __future__ import annotations

import importlib
import json
from pathlib import Path

import pytest

from basin_service.core.container import Container
from basin_service.core.settings import Settings
from basin_service.domain.errors import ConfigurationError
from basin_service.infra.arcgis_client import ArcGisPointClient
from basin_service.infra.static_point_values import StaticPointValueClient


def test_default_point_client_is_arcgis(settings) -> None:
    container = Container(settings=settings)
    assert isinstance(container.point_client, ArcGisPointClient)
    assert container.upstream_host == "https://arcgis.test"
    container.point_client.close()


def test_missing_regions_file_is_fatal(tmp_path: Path) -> None:
    settings = Settings(BASINS_GEOJSON=str(tmp_path / "absent.geojson"))
    with pytest.raises(ConfigurationError):
        Container(settings=settings, point_client=StaticPointValueClient())


def test_unknown_default_model_is_fatal(tmp_path: Path) -> None:
    path = tmp_path / "basins.geojson"
    feature = {
        "type": "Feature",
        "geometry": {
            "type": "Polygon",
            "coordinates": [[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0], [0.0, 0.0]]],
        },
        "properties": {"title": "Nowhere", "id": "nowhere", "defaultModel": "missing"},
    }
    path.write_text(
        json.dumps({"type": "FeatureCollection", "features": [feature]}), encoding="utf-8"
    )
    with pytest.raises(ConfigurationError, match="unknown model"):
        Container(
            settings=Settings(BASINS_GEOJSON=str(path)), point_client=StaticPointValueClient()
        )


def test_settings_reads_env_file(tmp_path: Path, monkeypatch) -> None:
    """
    Teste que les settings lisent correctement les fichiers d'environnement.

    Vérifie que les variables définies dans un fichier .env personnalisé (désigné par ENV_FILE)
    sont appliquées aux settings.
    """
    env = tmp_path / ".env.custom"
    env.write_text(
        "ARCGIS_HOST=https://arcgis.custom\nARCGIS_TIMEOUT_S=2.5\n", encoding="utf-8"
    )
    monkeypatch.setenv("ENV_FILE", str(env))

    settings_mod = importlib.import_module("basin_service.core.settings")
    importlib.reload(settings_mod)
    try:
        s = settings_mod.get_settings()
        assert s.ARCGIS_HOST == "https://arcgis.custom"
        assert s.ARCGIS_TIMEOUT_S == 2.5
    finally:
        monkeypatch.delenv("ENV_FILE")
        importlib.reload(settings_mod)
