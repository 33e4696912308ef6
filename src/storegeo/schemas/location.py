"""Pydantic request/response models for location endpoints."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Address, Coordinate


class CoordinateModel(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    def to_domain(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class AddressModel(BaseModel):
    line1: Optional[str] = None
    line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_domain(cls, address: Address) -> "AddressModel":
        return cls(**address.as_dict())

    def to_domain(self) -> Address:
        return Address(**self.model_dump())


class DistanceRequest(BaseModel):
    origin: CoordinateModel
    destination: CoordinateModel


class DistanceResponse(BaseModel):
    distance_km: float


class FilterRequest(BaseModel):
    items: List[dict[str, Any]] = Field(default_factory=list, description="Listing records to filter.")
    store_id_path: str = Field(
        default="store_id",
        description="Field holding the store id; one level of nesting allowed (e.g. 'stores.id').",
    )
    current_location: Optional[CoordinateModel] = Field(
        default=None, description="Caller position; omit to return the listing unfiltered."
    )
    max_distance_km: Optional[float] = Field(default=None, ge=0.0, description="Radius in kilometres.")
    enabled: bool = Field(default=True, description="Whether the proximity filter is switched on.")


class FilterResponse(BaseModel):
    items: List[dict[str, Any]]
    applied: bool
    distances_km: dict[str, float]
    error: Optional[str] = None


class RadiusOptionsResponse(BaseModel):
    options_km: List[float]
    default_km: float


class WarehouseLocationRequest(BaseModel):
    label: str = Field(default="Warehouse")
    address: AddressModel
    location: Optional[CoordinateModel] = None


class WarehouseLocationResponse(BaseModel):
    store_id: str
    address_id: str
