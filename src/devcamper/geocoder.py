"""Postal address / code to coordinates.

Services depend on the ``Geocoder`` protocol; the app wires in
``MapQuestGeocoder`` at startup and tests substitute a fake through
FastAPI dependency overrides.
"""

from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from devcamper.config import Settings
from devcamper.exceptions import GeocoderError
from devcamper.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeoLocation:
    latitude: float
    longitude: float
    formatted_address: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    country: str | None = None


class Geocoder(Protocol):
    async def geocode(self, query: str) -> list[GeoLocation]:
        """Return candidate locations for ``query``, best match first."""
        ...


def _format_address(street: str, city: str, state: str, zipcode: str, country: str) -> str:
    region = " ".join(part for part in (state, zipcode) if part)
    return ", ".join(part for part in (street, city, region, country) if part)


def _to_location(raw: dict[str, Any]) -> GeoLocation:
    street = raw.get("street") or ""
    city = raw.get("adminArea5") or ""
    state = raw.get("adminArea3") or ""
    zipcode = raw.get("postalCode") or ""
    country = raw.get("adminArea1") or ""
    return GeoLocation(
        latitude=float(raw["latLng"]["lat"]),
        longitude=float(raw["latLng"]["lng"]),
        formatted_address=_format_address(street, city, state, zipcode, country) or None,
        street=street or None,
        city=city or None,
        state=state or None,
        zipcode=zipcode or None,
        country=country or None,
    )


class MapQuestGeocoder:
    """Client for the MapQuest Geocoding API v1 ``/address`` endpoint."""

    ADDRESS_PATH = "/geocoding/v1/address"

    def __init__(self, client: httpx.AsyncClient, api_key: str) -> None:
        self._client = client
        self._api_key = api_key

    @classmethod
    def from_settings(cls, settings: Settings) -> "MapQuestGeocoder":
        client = httpx.AsyncClient(
            base_url=settings.geocoder_base_url,
            timeout=httpx.Timeout(settings.geocoder_timeout),
        )
        return cls(client, settings.geocoder_api_key)

    async def geocode(self, query: str) -> list[GeoLocation]:
        try:
            response = await self._client.get(
                self.ADDRESS_PATH,
                params={"key": self._api_key, "location": query, "maxResults": 5},
            )
        except httpx.TransportError as exc:
            logger.error("geocode_failed", query=query, error=str(exc))
            raise GeocoderError("Geocoding service is unreachable") from exc
        if response.is_error:
            logger.error("geocode_failed", query=query, status=response.status_code)
            raise GeocoderError(f"Geocoding request failed with status {response.status_code}")

        body = response.json()
        status = body.get("info", {}).get("statuscode", 0)
        if status != 0:
            # MapQuest reports key and quota problems in the body with HTTP 200
            logger.error("geocode_failed", query=query, provider_status=status)
            raise GeocoderError(f"Geocoding provider returned status {status}")

        results = body.get("results") or [{}]
        return [_to_location(raw) for raw in results[0].get("locations", [])]

    async def aclose(self) -> None:
        await self._client.aclose()
