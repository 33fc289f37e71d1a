from collections.abc import Callable
from typing import Any

import httpx
import pytest

from devcamper.exceptions import GeocoderError
from devcamper.geocoder import MapQuestGeocoder

BOSTON_RESPONSE = {
    "info": {"statuscode": 0},
    "results": [
        {
            "locations": [
                {
                    "street": "233 Bay State Rd",
                    "adminArea5": "Boston",
                    "adminArea3": "MA",
                    "postalCode": "02215",
                    "adminArea1": "US",
                    "latLng": {"lat": 42.3505, "lng": -71.1054},
                },
                {
                    "street": "",
                    "adminArea5": "Boston",
                    "adminArea3": "MA",
                    "postalCode": "",
                    "adminArea1": "US",
                    "latLng": {"lat": 42.36, "lng": -71.06},
                },
            ]
        }
    ],
}


def _geocoder(handler: Callable[[httpx.Request], httpx.Response]) -> MapQuestGeocoder:
    client = httpx.AsyncClient(
        base_url="https://geocoder.test", transport=httpx.MockTransport(handler)
    )
    return MapQuestGeocoder(client, api_key="secret-key")


def _json(body: dict[str, Any], status: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=body)

    return handler


@pytest.mark.asyncio
async def test_geocode_sends_key_and_location() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=BOSTON_RESPONSE)

    geocoder = _geocoder(handler)
    await geocoder.geocode("233 Bay State Rd Boston MA 02215")
    await geocoder.aclose()

    [request] = seen
    assert request.url.path == "/geocoding/v1/address"
    assert request.url.params["key"] == "secret-key"
    assert request.url.params["location"] == "233 Bay State Rd Boston MA 02215"


@pytest.mark.asyncio
async def test_geocode_parses_locations_in_order() -> None:
    geocoder = _geocoder(_json(BOSTON_RESPONSE))
    first, second = await geocoder.geocode("02215")

    assert (first.latitude, first.longitude) == (42.3505, -71.1054)
    assert first.formatted_address == "233 Bay State Rd, Boston, MA 02215, US"
    assert first.street == "233 Bay State Rd"
    assert first.zipcode == "02215"
    assert second.street is None
    assert second.formatted_address == "Boston, MA, US"


@pytest.mark.asyncio
async def test_geocode_no_results() -> None:
    geocoder = _geocoder(_json({"info": {"statuscode": 0}, "results": [{"locations": []}]}))
    assert await geocoder.geocode("99999") == []


@pytest.mark.asyncio
async def test_geocode_http_error_raises() -> None:
    geocoder = _geocoder(_json({"message": "unavailable"}, status=503))
    with pytest.raises(GeocoderError) as excinfo:
        await geocoder.geocode("02118")
    assert excinfo.value.status_code == 502


@pytest.mark.asyncio
async def test_geocode_provider_status_raises() -> None:
    geocoder = _geocoder(_json({"info": {"statuscode": 403, "messages": ["bad key"]}}))
    with pytest.raises(GeocoderError, match="status 403"):
        await geocoder.geocode("02118")


@pytest.mark.asyncio
async def test_geocode_transport_error_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GeocoderError, match="unreachable"):
        await _geocoder(handler).geocode("02118")
