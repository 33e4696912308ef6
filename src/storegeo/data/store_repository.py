"""Store warehouse locations backed by the Supabase `stores` and `addresses` tables."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from supabase import AsyncClient

from ..db.supabase import get_supabase_client
from ..errors import NotAuthenticated, ResolutionFailed, StoreNotFound
from ..models.domain import Address, Coordinate, UserSession

logger = logging.getLogger(__name__)

WAREHOUSE_SELECT = "id, warehouse_address_id, address:warehouse_address_id(lat, lng)"
REQUIRED_ADDRESS_FIELDS = ("line1", "city", "state", "postal_code")


class DatastoreUnavailable(RuntimeError):
    """Raised when Supabase is not configured for a write that needs it."""


class SupabaseStoreLocationSource:
    """Fetch warehouse coordinates for many stores in one `in` query."""

    def __init__(self, client: AsyncClient | None = None) -> None:
        self._client = client

    async def _resolve_client(self) -> AsyncClient:
        client = self._client or await get_supabase_client()
        if client is None:
            raise ResolutionFailed("Supabase not configured. Set STOREGEO_SUPABASE_URL and STOREGEO_SUPABASE_KEY.")
        return client

    async def fetch_warehouse_rows(self, store_ids: Sequence[str]) -> list[dict[str, Any]]:
        client = await self._resolve_client()
        response = await (
            client.table("stores")
            .select(WAREHOUSE_SELECT)
            .in_("id", list(store_ids))
            .not_.is_("warehouse_address_id", "null")
            .execute()
        )
        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} stores with warehouse addresses for {len(store_ids)} ids")
        return rows


async def register_warehouse_location(
    session: UserSession,
    store_id: str,
    address: Address,
    coordinate: Coordinate | None,
    *,
    label: str = "Warehouse",
    client: AsyncClient | None = None,
) -> str:
    """Save ``address`` as the store's warehouse and return the new address id.

    Raises:
        ValueError: If a required address field is missing.
        DatastoreUnavailable: If Supabase is not configured.
        StoreNotFound: If the caller owns no store with ``store_id``.
    """
    missing = [name for name in REQUIRED_ADDRESS_FIELDS if not getattr(address, name)]
    if missing:
        raise ValueError(f"Warehouse address is missing required fields: {', '.join(missing)}")

    client = client or await get_supabase_client()
    if client is None:
        raise DatastoreUnavailable("Supabase not configured. Set STOREGEO_SUPABASE_URL and STOREGEO_SUPABASE_KEY.")

    row = {
        "user_id": session.user_id,
        "label": label,
        "line1": address.line1,
        "line2": address.line2,
        "city": address.city,
        "state": address.state,
        "pincode": address.postal_code,
        "lat": coordinate.latitude if coordinate else None,
        "lng": coordinate.longitude if coordinate else None,
    }
    if address.country:
        row["country"] = address.country

    inserted = await client.table("addresses").insert(row).execute()
    if not inserted.data:
        raise RuntimeError(f"Address insert for store {store_id} returned no row")
    address_id = str(inserted.data[0]["id"])

    updated = await (
        client.table("stores")
        .update({"warehouse_address_id": address_id})
        .eq("id", store_id)
        .eq("owner_id", session.user_id)
        .execute()
    )
    if not updated.data:
        await _discard_address(client, address_id)
        raise StoreNotFound(f"Store {store_id} not found for user {session.user_id}")

    logger.info(f"Store {store_id} warehouse location set to address {address_id}")
    return address_id


async def _discard_address(client: AsyncClient, address_id: str) -> None:
    try:
        await client.table("addresses").delete().eq("id", address_id).execute()
    except Exception as e:
        logger.warning(f"Failed to remove unused address {address_id}: {e}")


async def session_from_token(access_token: str, *, client: AsyncClient | None = None) -> UserSession:
    """Verify a Supabase access token and return the signed-in caller.

    Raises:
        NotAuthenticated: If the token is missing, expired or rejected.
        DatastoreUnavailable: If Supabase is not configured.
    """
    if not access_token:
        raise NotAuthenticated()

    client = client or await get_supabase_client()
    if client is None:
        raise DatastoreUnavailable("Supabase not configured. Set STOREGEO_SUPABASE_URL and STOREGEO_SUPABASE_KEY.")

    try:
        response = await client.auth.get_user(access_token)
    except Exception as e:
        logger.info(f"Rejected access token: {e}")
        raise NotAuthenticated() from e

    user = getattr(response, "user", None)
    if user is None:
        raise NotAuthenticated()
    return UserSession(user_id=str(user.id), email=getattr(user, "email", None))
