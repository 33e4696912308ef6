"""Location endpoints: reverse geocoding, distances and proximity filtering."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ...errors import GeocodingFailed
from ...schemas.location import (
    AddressModel,
    CoordinateModel,
    DistanceRequest,
    DistanceResponse,
    FilterRequest,
    FilterResponse,
    RadiusOptionsResponse,
)
from ...services import geospatial
from ...services.location import service as location_service

router = APIRouter(prefix="/location", tags=["location"])


@router.post("/reverse-geocode", response_model=AddressModel, status_code=status.HTTP_200_OK)
async def reverse_geocode(payload: CoordinateModel) -> AddressModel:
    geocoder = location_service.build_geocoder()
    try:
        address = await geocoder.reverse_geocode(payload.to_domain())
    except GeocodingFailed as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return AddressModel.from_domain(address)


@router.post("/distance", response_model=DistanceResponse, status_code=status.HTTP_200_OK)
def compute_distance(payload: DistanceRequest) -> DistanceResponse:
    distance = geospatial.distance_km(payload.origin.to_domain(), payload.destination.to_domain())
    return DistanceResponse(distance_km=distance)


@router.post("/filter", response_model=FilterResponse, status_code=status.HTTP_200_OK)
async def filter_items(payload: FilterRequest) -> FilterResponse:
    try:
        outcome = await location_service.filter_listing(
            payload.items,
            payload.store_id_path,
            payload.current_location.to_domain() if payload.current_location else None,
            payload.max_distance_km,
            enabled=payload.enabled,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return FilterResponse(
        items=outcome.items,
        applied=outcome.applied,
        distances_km=outcome.distances_km,
        error=outcome.error,
    )


@router.get("/radius-options", response_model=RadiusOptionsResponse, status_code=status.HTTP_200_OK)
def get_radius_options() -> RadiusOptionsResponse:
    return RadiusOptionsResponse(**location_service.radius_options())
