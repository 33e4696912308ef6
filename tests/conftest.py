from __future__ import annotations

from typing import Any, Sequence

import pytest

BANGALORE = (12.97, 77.59)


class FakeStoreSource:
    """In-memory stand-in for the Supabase `stores` query."""

    def __init__(self, rows: list[dict[str, Any]] | None = None, error: Exception | None = None) -> None:
        self.rows = rows or []
        self.error = error
        self.calls: list[list[str]] = []

    async def fetch_warehouse_rows(self, store_ids: Sequence[str]) -> list[dict[str, Any]]:
        self.calls.append(list(store_ids))
        if self.error is not None:
            raise self.error
        wanted = set(store_ids)
        return [row for row in self.rows if row["id"] in wanted]


def warehouse_row(store_id: str, lat: Any, lng: Any) -> dict[str, Any]:
    return {"id": store_id, "warehouse_address_id": f"addr-{store_id}", "address": {"lat": lat, "lng": lng}}


@pytest.fixture
def bangalore_source() -> FakeStoreSource:
    # A is ~5 km north of the caller, B ~50 km north, C has no warehouse row.
    return FakeStoreSource(
        rows=[
            warehouse_row("A", "13.015", "77.59"),
            warehouse_row("B", "13.42", "77.59"),
        ]
    )
