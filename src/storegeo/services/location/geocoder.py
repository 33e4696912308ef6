"""Reverse geocoding against a Nominatim-compatible HTTP endpoint."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from ...config import settings
from ...errors import GeocodingFailed
from ...models.domain import Address, Coordinate

logger = logging.getLogger(__name__)

# Most specific provider key first; the first non-empty value wins.
LINE1_KEYS = ("road", "neighbourhood")
LINE2_KEYS = ("suburb", "hamlet")
CITY_KEYS = ("city", "town", "village")
STATE_KEYS = ("state",)
POSTAL_CODE_KEYS = ("postcode",)
COUNTRY_KEYS = ("country",)


def _first_present(details: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = details.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def address_from_details(details: Mapping[str, Any], default_country: str | None = None) -> Address:
    """Map a provider ``address`` object onto an Address."""
    return Address(
        line1=_first_present(details, LINE1_KEYS),
        line2=_first_present(details, LINE2_KEYS),
        city=_first_present(details, CITY_KEYS),
        state=_first_present(details, STATE_KEYS),
        postal_code=_first_present(details, POSTAL_CODE_KEYS),
        country=_first_present(details, COUNTRY_KEYS) or default_country,
    )


class ReverseGeocoder:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        accept_language: str | None = None,
        user_agent: str | None = None,
        timeout_seconds: float | None = None,
        default_country: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.geocoder_base_url).rstrip("/")
        self.accept_language = accept_language or settings.geocoder_accept_language
        self.user_agent = user_agent or settings.geocoder_user_agent
        self.timeout_seconds = timeout_seconds if timeout_seconds is not None else settings.geocoder_timeout_seconds
        self.default_country = default_country if default_country is not None else settings.default_country
        self._transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_seconds),
            transport=self._transport,
            headers={
                "Accept-Language": self.accept_language,
                "User-Agent": self.user_agent,
            },
        )

    async def reverse_geocode(self, coordinate: Coordinate) -> Address:
        """Resolve ``coordinate`` to an Address. One round trip, no retry, no cache."""
        params = {
            "format": "json",
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "addressdetails": 1,
        }
        url = f"{self.base_url}/reverse"

        try:
            async with self._get_client() as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(f"Reverse geocoding failed for ({coordinate.latitude}, {coordinate.longitude}): {exc}")
            raise GeocodingFailed(cause=exc) from exc

        details = payload.get("address") if isinstance(payload, dict) else None
        if not isinstance(details, dict):
            exc = ValueError("Geocoder response has no address object")
            logger.warning(f"Reverse geocoding returned malformed payload: {payload!r}")
            raise GeocodingFailed(cause=exc) from exc

        return address_from_details(details, self.default_country)
