import asyncio

import httpx
import pytest

from src.storegeo.errors import GeocodingFailed
from src.storegeo.models.domain import Address, Coordinate
from src.storegeo.services.location.geocoder import ReverseGeocoder, address_from_details


def _geocoder(handler, **kwargs) -> ReverseGeocoder:
    return ReverseGeocoder("https://geo.test", transport=httpx.MockTransport(handler), **kwargs)


def test_reverse_geocode_sends_expected_request() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"address": {"road": "MG Road", "city": "Bengaluru"}})

    address = asyncio.run(_geocoder(handler).reverse_geocode(Coordinate(12.97, 77.59)))

    assert address.line1 == "MG Road"
    assert address.city == "Bengaluru"
    request = seen[0]
    assert request.url.path == "/reverse"
    assert request.url.params["format"] == "json"
    assert request.url.params["lat"] == "12.97"
    assert request.url.params["lon"] == "77.59"
    assert request.url.params["addressdetails"] == "1"
    assert request.headers["Accept-Language"] == "en"


def test_town_used_when_city_missing() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"address": {"town": "Hosur", "village": "Bagalur", "state": "Tamil Nadu"}})

    address = asyncio.run(_geocoder(handler).reverse_geocode(Coordinate(12.74, 77.83)))
    assert address.city == "Hosur"
    assert address.state == "Tamil Nadu"


def test_field_priority_order() -> None:
    address = address_from_details(
        {
            "neighbourhood": "Indiranagar",
            "hamlet": "Doddanekundi",
            "village": "Marathahalli",
            "postcode": "560037",
            "country": "India",
        }
    )
    assert address == Address(
        line1="Indiranagar",
        line2="Doddanekundi",
        city="Marathahalli",
        state=None,
        postal_code="560037",
        country="India",
    )


def test_blank_values_fall_through() -> None:
    address = address_from_details({"road": "  ", "neighbourhood": "Koramangala", "suburb": "", "hamlet": "Ejipura"})
    assert address.line1 == "Koramangala"
    assert address.line2 == "Ejipura"


def test_default_country_applies_only_when_missing() -> None:
    assert address_from_details({}, default_country="India").country == "India"
    assert address_from_details({"country": "Nepal"}, default_country="India").country == "Nepal"


def test_server_error_raises_geocoding_failed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="busy")

    with pytest.raises(GeocodingFailed) as excinfo:
        asyncio.run(_geocoder(handler).reverse_geocode(Coordinate(0, 0)))
    assert isinstance(excinfo.value.cause, httpx.HTTPStatusError)
    assert excinfo.value.__cause__ is excinfo.value.cause


def test_transport_error_raises_geocoding_failed() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(GeocodingFailed):
        asyncio.run(_geocoder(handler).reverse_geocode(Coordinate(0, 0)))


@pytest.mark.parametrize("body", [b"not json", b"[]", b'{"error": "Unable to geocode"}', b'{"address": "x"}'])
def test_malformed_payload_raises_geocoding_failed(body: bytes) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body, headers={"Content-Type": "application/json"})

    with pytest.raises(GeocodingFailed):
        asyncio.run(_geocoder(handler).reverse_geocode(Coordinate(0, 0)))


def test_every_call_hits_the_network() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"address": {"city": "Mysuru"}})

    geocoder = _geocoder(handler)
    asyncio.run(geocoder.reverse_geocode(Coordinate(12.3, 76.6)))
    asyncio.run(geocoder.reverse_geocode(Coordinate(12.3, 76.6)))
    assert len(calls) == 2
