"""Current-position lookup on top of a device location provider."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional, Protocol

from ...config import settings
from ...errors import (
    LocationError,
    LocationTimeout,
    LocationUnsupported,
    PermissionDenied,
    PositionUnavailable,
)
from ...models.domain import Coordinate

logger = logging.getLogger(__name__)


class PositionErrorCode(IntEnum):
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


_ERRORS_BY_CODE: dict[int, type[LocationError]] = {
    PositionErrorCode.PERMISSION_DENIED: PermissionDenied,
    PositionErrorCode.POSITION_UNAVAILABLE: PositionUnavailable,
    PositionErrorCode.TIMEOUT: LocationTimeout,
}


@dataclass(frozen=True)
class PositionOptions:
    enable_high_accuracy: bool = True
    timeout_ms: int = 10_000
    maximum_age_ms: int = 0

    @classmethod
    def from_settings(cls) -> "PositionOptions":
        return cls(
            enable_high_accuracy=settings.geolocation_high_accuracy,
            timeout_ms=settings.geolocation_timeout_ms,
            maximum_age_ms=settings.geolocation_maximum_age_ms,
        )


SuccessCallback = Callable[[Coordinate], None]
ErrorCallback = Callable[[int, Optional[str]], None]


class LocationProvider(Protocol):
    """Callback-style position source, shaped like the browser geolocation API."""

    def get_current_position(
        self,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        options: PositionOptions,
    ) -> None:
        ...


class StaticLocationProvider:
    """Provider that always reports the same coordinate (or no fix at all)."""

    def __init__(self, coordinate: Coordinate | None = None) -> None:
        self.coordinate = coordinate

    def get_current_position(
        self,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        options: PositionOptions,
    ) -> None:
        if self.coordinate is None:
            on_error(PositionErrorCode.POSITION_UNAVAILABLE, "No fixed location configured")
            return
        on_success(self.coordinate)


def error_for_code(code: int) -> LocationError:
    """Map a provider error code to the matching exception instance."""
    error_cls = _ERRORS_BY_CODE.get(code, LocationError)
    return error_cls()


class GeoLocator:
    """Resolve the caller's current coordinate. Never retries."""

    def __init__(self, provider: LocationProvider | None, options: PositionOptions | None = None) -> None:
        self.provider = provider
        self.options = options or PositionOptions.from_settings()

    async def get_current_location(self) -> Coordinate:
        if self.provider is None:
            raise LocationUnsupported()

        loop = asyncio.get_running_loop()
        future: asyncio.Future[Coordinate] = loop.create_future()

        def _resolve(coordinate: Coordinate) -> None:
            if not future.done():
                future.set_result(Coordinate(latitude=coordinate.latitude, longitude=coordinate.longitude))

        def _reject(code: int, message: Optional[str]) -> None:
            if not future.done():
                logger.debug(f"Location provider reported error {code}: {message}")
                future.set_exception(error_for_code(code))

        # Providers may answer synchronously or from another thread.
        def on_success(coordinate: Coordinate) -> None:
            loop.call_soon_threadsafe(_resolve, coordinate)

        def on_error(code: int, message: Optional[str] = None) -> None:
            loop.call_soon_threadsafe(_reject, code, message)

        self.provider.get_current_position(on_success, on_error, self.options)

        try:
            return await asyncio.wait_for(future, timeout=self.options.timeout_ms / 1000)
        except asyncio.TimeoutError as exc:
            raise LocationTimeout() from exc
