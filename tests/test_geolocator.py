import asyncio
import threading

import pytest

from src.storegeo.errors import (
    LocationError,
    LocationTimeout,
    LocationUnsupported,
    PermissionDenied,
    PositionUnavailable,
)
from src.storegeo.models.domain import Coordinate
from src.storegeo.services.location.geolocator import (
    GeoLocator,
    PositionErrorCode,
    PositionOptions,
    StaticLocationProvider,
)


class FailingProvider:
    def __init__(self, code: int) -> None:
        self.code = code

    def get_current_position(self, on_success, on_error, options):
        on_error(self.code, "boom")


class SilentProvider:
    def __init__(self) -> None:
        self.options = None

    def get_current_position(self, on_success, on_error, options):
        self.options = options


class ThreadedProvider:
    def __init__(self, coordinate: Coordinate) -> None:
        self.coordinate = coordinate

    def get_current_position(self, on_success, on_error, options):
        threading.Thread(target=on_success, args=(self.coordinate,)).start()


class ChattyProvider:
    def get_current_position(self, on_success, on_error, options):
        on_success(Coordinate(1.0, 2.0))
        on_error(PositionErrorCode.TIMEOUT, "late")
        on_success(Coordinate(3.0, 4.0))


def test_static_provider_returns_coordinate() -> None:
    locator = GeoLocator(StaticLocationProvider(Coordinate(12.97, 77.59)))
    assert asyncio.run(locator.get_current_location()) == Coordinate(12.97, 77.59)


def test_missing_provider_is_unsupported() -> None:
    with pytest.raises(LocationUnsupported, match="not supported"):
        asyncio.run(GeoLocator(None).get_current_location())


@pytest.mark.parametrize(
    "code, expected",
    [
        (PositionErrorCode.PERMISSION_DENIED, PermissionDenied),
        (PositionErrorCode.POSITION_UNAVAILABLE, PositionUnavailable),
        (PositionErrorCode.TIMEOUT, LocationTimeout),
    ],
)
def test_provider_error_codes_map_to_errors(code, expected) -> None:
    with pytest.raises(expected):
        asyncio.run(GeoLocator(FailingProvider(code)).get_current_location())


def test_unknown_error_code_uses_generic_message() -> None:
    with pytest.raises(LocationError) as excinfo:
        asyncio.run(GeoLocator(FailingProvider(99)).get_current_location())
    assert type(excinfo.value) is LocationError
    assert str(excinfo.value) == "Unable to retrieve your location"


def test_permission_denied_message() -> None:
    with pytest.raises(PermissionDenied) as excinfo:
        asyncio.run(GeoLocator(FailingProvider(1)).get_current_location())
    assert "enable location access" in str(excinfo.value)


def test_unconfigured_static_provider_reports_unavailable() -> None:
    with pytest.raises(PositionUnavailable):
        asyncio.run(GeoLocator(StaticLocationProvider()).get_current_location())


def test_silent_provider_times_out_and_receives_options() -> None:
    provider = SilentProvider()
    options = PositionOptions(enable_high_accuracy=True, timeout_ms=20, maximum_age_ms=0)
    with pytest.raises(LocationTimeout):
        asyncio.run(GeoLocator(provider, options).get_current_location())
    assert provider.options is options


def test_callback_from_worker_thread() -> None:
    locator = GeoLocator(ThreadedProvider(Coordinate(-33.86, 151.21)))
    assert asyncio.run(locator.get_current_location()) == Coordinate(-33.86, 151.21)


def test_first_callback_wins() -> None:
    assert asyncio.run(GeoLocator(ChattyProvider()).get_current_location()) == Coordinate(1.0, 2.0)


def test_default_options_request_fresh_high_accuracy_fix() -> None:
    options = PositionOptions.from_settings()
    assert options == PositionOptions(enable_high_accuracy=True, timeout_ms=10_000, maximum_age_ms=0)


def test_device_errors_are_separate_from_lookup_errors() -> None:
    from src.storegeo.errors import GeocodingFailed, InvalidCoordinate, ResolutionFailed, StoreGeoError

    for error_cls in (GeocodingFailed, InvalidCoordinate, ResolutionFailed):
        assert not issubclass(error_cls, LocationError)
        assert issubclass(error_cls, StoreGeoError)
    assert issubclass(PermissionDenied, StoreGeoError)
    assert str(ResolutionFailed()) == "Failed to resolve store locations"
