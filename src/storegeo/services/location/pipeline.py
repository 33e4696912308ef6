"""Reduce a listing to the items whose store lies within a radius of the caller.

The pipeline holds no state between calls. Each invocation:

1. collects the distinct store references of the items,
2. resolves them with one batched lookup,
3. computes a distance per resolved store,
4. keeps the items whose store is within ``max_distance_km`` (inclusive), in input order.

Two degradation paths exist:

- no current location, or the batched lookup fails as a whole: items come back
  unchanged (``applied`` is False);
- an individual store without a usable coordinate: its items are dropped.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Optional, Sequence, TypeVar, Union

from ...errors import ResolutionFailed
from ...models.domain import Coordinate
from ..geospatial import validate_coordinate
from .index import StoreLocationIndex

logger = logging.getLogger(__name__)

T = TypeVar("T")

StoreRefAccessor = Callable[[Any], Optional[str]]
ErrorSink = Callable[[Exception], None]


def _pluck(value: Any, key: str) -> Any:
    if value is None:
        return None
    if isinstance(value, Mapping):
        return value.get(key)
    return getattr(value, key, None)


def path_accessor(path: str) -> StoreRefAccessor:
    """Build an accessor from ``"store_id"`` or a nested ``"stores.id"`` path."""
    keys = path.split(".")
    if any(not segment for segment in keys) or len(keys) > 2:
        raise ValueError(f"Store reference path must have one or two segments, got {path!r}")

    def accessor(item: Any) -> Optional[str]:
        value = item
        for key in keys:
            value = _pluck(value, key)
        return value

    return accessor


def _as_accessor(store_ref: Union[str, StoreRefAccessor]) -> StoreRefAccessor:
    if isinstance(store_ref, str):
        return path_accessor(store_ref)
    return store_ref


@dataclass
class FilterOutcome(Generic[T]):
    """Result of one filter run.

    ``applied`` is False when the filter fell back to returning the input as-is.
    """

    items: list[T]
    applied: bool
    distances_km: dict[str, float] = field(default_factory=dict)
    error: Optional[str] = None


class LocationFilterPipeline:
    def __init__(self, index: StoreLocationIndex, *, error_sink: ErrorSink | None = None) -> None:
        self.index = index
        self.error_sink = error_sink

    async def filter_by_location(
        self,
        items: Sequence[T],
        store_ref: Union[str, StoreRefAccessor],
        current_location: Coordinate | None,
        max_distance_km: float,
    ) -> list[T]:
        outcome = await self.run(items, store_ref, current_location, max_distance_km)
        return outcome.items

    async def run(
        self,
        items: Sequence[T],
        store_ref: Union[str, StoreRefAccessor],
        current_location: Coordinate | None,
        max_distance_km: float,
    ) -> FilterOutcome[T]:
        if current_location is None:
            return FilterOutcome(items=list(items), applied=False)

        if max_distance_km is None or math.isnan(max_distance_km) or max_distance_km < 0:
            raise ValueError(f"max_distance_km must be a non-negative number, got {max_distance_km!r}")

        accessor = _as_accessor(store_ref)
        origin = validate_coordinate(current_location.latitude, current_location.longitude)

        refs = [accessor(item) for item in items]
        store_ids = list(dict.fromkeys(str(ref) for ref in refs if ref))

        try:
            distances = await self.index.distances_from(origin, store_ids)
        except ResolutionFailed as exc:
            logger.exception("Error filtering by location")
            self._report(exc)
            return FilterOutcome(items=list(items), applied=False, error=str(exc))

        survivors: list[T] = []
        for item, ref in zip(items, refs):
            distance = distances.get(str(ref)) if ref else None
            if distance is None:
                continue
            if distance <= max_distance_km:
                survivors.append(item)
            else:
                logger.debug(f"Store {ref} filtered out: {distance:.2f} km > {max_distance_km} km")

        logger.debug(f"Filtered {len(items)} items to {len(survivors)} items (max {max_distance_km} km)")
        return FilterOutcome(items=survivors, applied=True, distances_km=distances)

    def _report(self, exc: Exception) -> None:
        if self.error_sink is None:
            return
        try:
            self.error_sink(exc)
        except Exception:
            logger.warning("Location filter error sink failed", exc_info=True)
