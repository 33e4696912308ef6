"""Store proximity services: device location, reverse geocoding and radius filtering."""

from .geocoder import ReverseGeocoder, address_from_details
from .geolocator import (
    GeoLocator,
    LocationProvider,
    PositionErrorCode,
    PositionOptions,
    StaticLocationProvider,
)
from .index import StoreLocationIndex, StoreLocationSource
from .pipeline import FilterOutcome, LocationFilterPipeline, path_accessor
from .service import (
    LocatedAddress,
    build_geocoder,
    build_geolocator,
    build_location_pipeline,
    filter_listing,
    locate_with_address,
    radius_options,
)

__all__ = [
    "FilterOutcome",
    "GeoLocator",
    "LocatedAddress",
    "LocationFilterPipeline",
    "LocationProvider",
    "PositionErrorCode",
    "PositionOptions",
    "ReverseGeocoder",
    "StaticLocationProvider",
    "StoreLocationIndex",
    "StoreLocationSource",
    "address_from_details",
    "build_geocoder",
    "build_geolocator",
    "build_location_pipeline",
    "filter_listing",
    "locate_with_address",
    "radius_options",
]
