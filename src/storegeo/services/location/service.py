"""Composition helpers used by the API layer and by library callers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TypeVar, Union

from ...config import settings
from ...data.store_repository import SupabaseStoreLocationSource
from ...models.domain import Address, Coordinate
from .geocoder import ReverseGeocoder
from .geolocator import GeoLocator, LocationProvider, PositionOptions
from .index import StoreLocationIndex, StoreLocationSource
from .pipeline import ErrorSink, FilterOutcome, LocationFilterPipeline, StoreRefAccessor

T = TypeVar("T")


@dataclass(frozen=True)
class LocatedAddress:
    location: Coordinate
    address: Address


def build_location_pipeline(
    source: StoreLocationSource | None = None,
    *,
    error_sink: ErrorSink | None = None,
) -> LocationFilterPipeline:
    index = StoreLocationIndex(source or SupabaseStoreLocationSource())
    return LocationFilterPipeline(index, error_sink=error_sink)


def build_geocoder() -> ReverseGeocoder:
    return ReverseGeocoder()


def build_geolocator(provider: LocationProvider | None = None) -> GeoLocator:
    return GeoLocator(provider, PositionOptions.from_settings())


async def locate_with_address(locator: GeoLocator, geocoder: ReverseGeocoder) -> LocatedAddress:
    """Current position plus its address, for pre-filling an address form.

    Errors from either step propagate so the caller can offer a retry.
    """
    location = await locator.get_current_location()
    address = await geocoder.reverse_geocode(location)
    return LocatedAddress(location=location, address=address)


async def filter_listing(
    items: Sequence[T],
    store_ref: Union[str, StoreRefAccessor],
    current_location: Coordinate | None,
    max_distance_km: float | None = None,
    *,
    enabled: bool = True,
    pipeline: LocationFilterPipeline | None = None,
) -> FilterOutcome[T]:
    """Listing-level entry point; a disabled filter behaves like an unknown location."""
    radius = settings.default_max_distance_km if max_distance_km is None else max_distance_km
    pipeline = pipeline or build_location_pipeline()
    return await pipeline.run(items, store_ref, current_location if enabled else None, radius)


def radius_options() -> dict:
    return {
        "options_km": list(settings.radius_options_km),
        "default_km": settings.default_max_distance_km,
    }
