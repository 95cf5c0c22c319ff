"""Tests pour le client ArcGIS identify.

Les appels HTTP sont simulés par `httpx.MockTransport`: aucune requête réseau réelle.
"""

from __future__ import annotations

import math

import httpx
import pytest

from basin_service.domain.coordinates import Coordinate
from basin_service.domain.errors import UpstreamEmptyError, UpstreamUnavailableError
from basin_service.infra.arcgis_client import (
    IDENTIFY_PATH,
    ArcGisPointClient,
    parse_identify_response,
    read_arc_value,
)

HOST = "https://arcgis.test"

IDENTIFY_PAYLOAD = {
    "results": [
        {
            "layerId": 0,
            "attributes": {
                "OBJECTID": "12",
                "Lat": "47.6",
                "Lon": "-122.3",
                "Vs30": "420.5",
                "Z1p0Seattle": "Null",
                "Z2p5Seattle": "2000",
                "Z1p0bayarea": None,
                "Z2p5bayarea": 1800.0,
                "Shape": "Point",
            },
        }
    ]
}


def _client(handler) -> ArcGisPointClient:
    return ArcGisPointClient(HOST, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_lookup_sends_point_query_and_parses_attributes() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=IDENTIFY_PAYLOAD)

    client = _client(handler)
    result = client.lookup(Coordinate(47.6, -122.3))

    assert len(seen) == 1
    request = seen[0]
    assert request.url.host == "arcgis.test"
    assert request.url.path == IDENTIFY_PATH
    assert request.url.params["geometryType"] == "esriGeometryPoint"
    assert request.url.params["geometry"] == "-122.3,47.6"
    assert request.url.params["tolerance"] == "1"
    assert request.url.params["f"] == "json"

    assert result.latitude == 47.6
    assert result.longitude == -122.3
    assert result.vs30 == 420.5
    assert result.basin_values == {
        "Z1p0Seattle": None,
        "Z2p5Seattle": 2000.0,
        "Z1p0bayarea": None,
        "Z2p5bayarea": 1800.0,
    }
    assert result.url is not None and result.url.startswith(HOST + IDENTIFY_PATH)


def test_host_trailing_slash_is_ignored() -> None:
    client = ArcGisPointClient(HOST + "/")
    assert client.service_url == HOST + IDENTIFY_PATH
    client.close()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("Null", None), (None, None), ("NaN", None), (math.nan, None), ("12.5", 12.5), (0, 0.0)],
)
def test_read_arc_value(raw, expected) -> None:
    assert read_arc_value({"Z1p0x": raw}, "Z1p0x") == expected


@pytest.mark.parametrize("raw", ["Infinity", "-Infinity", math.inf, -math.inf])
def test_read_arc_value_rejects_infinite(raw) -> None:
    with pytest.raises(ValueError):
        read_arc_value({"Z2p5x": raw}, "Z2p5x")


def test_read_arc_value_absent_key() -> None:
    assert read_arc_value({}, "Vs30") is None


@pytest.mark.parametrize(
    "payload",
    [{"results": []}, {}, {"results": [{}]}, {"results": [{"attributes": "x"}]}, []],
)
def test_empty_results_are_reported(payload) -> None:
    with pytest.raises(UpstreamEmptyError, match="Empty results array returned from"):
        parse_identify_response(payload, "https://arcgis.test/identify")


@pytest.mark.parametrize("raw", ["deep", "Infinity", "-Infinity", math.inf])
def test_non_numeric_attribute_is_reported(raw) -> None:
    payload = {"results": [{"attributes": {"Z2p5Seattle": raw}}]}
    with pytest.raises(UpstreamEmptyError):
        parse_identify_response(payload, "https://arcgis.test/identify")


def test_empty_response_from_server() -> None:
    client = _client(lambda request: httpx.Response(200, json={"results": []}))
    with pytest.raises(UpstreamEmptyError) as excinfo:
        client.lookup(Coordinate(47.6, -122.3))
    assert excinfo.value.url is not None


def test_invalid_json_is_reported_as_empty() -> None:
    client = _client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    with pytest.raises(UpstreamEmptyError):
        client.lookup(Coordinate(47.6, -122.3))


def test_connection_error_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    with pytest.raises(UpstreamUnavailableError, match="Could not reach"):
        client.lookup(Coordinate(47.6, -122.3))


def test_timeout_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = _client(handler)
    with pytest.raises(UpstreamUnavailableError):
        client.lookup(Coordinate(47.6, -122.3))


def test_server_error_is_unavailable() -> None:
    client = _client(lambda request: httpx.Response(500, text="boom"))
    with pytest.raises(UpstreamUnavailableError, match="HTTP 500"):
        client.lookup(Coordinate(47.6, -122.3))
