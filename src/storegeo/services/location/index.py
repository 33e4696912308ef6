"""Batched lookup of store warehouse coordinates."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Protocol, Sequence

from ...errors import InvalidCoordinate, ResolutionFailed
from ...models.domain import Coordinate, StoreLocation
from ..geospatial import distance_km, validate_coordinate

logger = logging.getLogger(__name__)


class StoreLocationSource(Protocol):
    """Datastore collaborator returning warehouse rows for a batch of stores.

    Rows look like ``{"id": ..., "warehouse_address_id": ..., "address": {"lat": ..., "lng": ...}}``.
    """

    async def fetch_warehouse_rows(self, store_ids: Sequence[str]) -> list[dict[str, Any]]:
        ...


def _parse_coordinate(row: dict[str, Any]) -> Coordinate | None:
    address = row.get("address")
    if isinstance(address, list):
        address = address[0] if address else None
    if not isinstance(address, Mapping):
        return None
    lat, lng = address.get("lat"), address.get("lng")
    if lat is None or lng is None or lat == "" or lng == "":
        return None
    try:
        return validate_coordinate(lat, lng)
    except InvalidCoordinate as exc:
        logger.warning(f"Ignoring warehouse coordinate for store {row.get('id')}: {exc}")
        return None


class StoreLocationIndex:
    def __init__(self, source: StoreLocationSource) -> None:
        self.source = source

    async def resolve(self, store_ids: Iterable[str]) -> dict[str, StoreLocation]:
        """Resolve every id with a single batched query.

        Every requested id is present in the result; stores without a usable
        warehouse coordinate map to a StoreLocation whose coordinate is None.
        """
        ids = list(dict.fromkeys(store_ids))
        if not ids:
            return {}

        try:
            rows = await self.source.fetch_warehouse_rows(ids)
        except ResolutionFailed:
            raise
        except Exception as exc:
            raise ResolutionFailed(f"Store location lookup failed: {exc}", cause=exc) from exc

        locations = {store_id: StoreLocation(store_id=store_id) for store_id in ids}
        try:
            self._apply_rows(locations, rows)
        except Exception as exc:
            raise ResolutionFailed(f"Store location rows could not be read: {exc}", cause=exc) from exc
        return locations

    @staticmethod
    def _apply_rows(locations: dict[str, StoreLocation], rows: Any) -> None:
        for row in rows or []:
            if not isinstance(row, Mapping):
                logger.warning(f"Ignoring malformed store location row: {row!r}")
                continue
            store_id = row.get("id")
            if store_id is None:
                continue
            store_id = str(store_id)
            if store_id not in locations:
                continue
            coordinate = _parse_coordinate(row)
            if coordinate is None:
                logger.debug(f"Store {store_id} has no warehouse address")
                continue
            locations[store_id] = StoreLocation(store_id=store_id, coordinate=coordinate)

    async def distances_from(self, origin: Coordinate, store_ids: Iterable[str]) -> dict[str, float]:
        """Build the id -> distance map for stores with a known coordinate."""
        locations = await self.resolve(store_ids)
        distances: dict[str, float] = {}
        for store_id, location in locations.items():
            if location.coordinate is None:
                continue
            distance = distance_km(origin, location.coordinate)
            logger.debug(f"Store {store_id} distance: {distance:.2f} km")
            distances[store_id] = distance
        return distances
