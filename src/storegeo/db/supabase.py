"""Supabase client for the store location backend."""

from __future__ import annotations

import logging

from supabase import AsyncClient, acreate_client

from ..config import settings

_client: AsyncClient | None = None


async def get_supabase_client() -> AsyncClient | None:
    """Get the shared async Supabase client, creating it on first use.

    Returns:
        AsyncClient instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    global _client
    if _client is not None:
        return _client

    if not settings.supabase_url or not settings.supabase_key:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        _client = await acreate_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None
    return _client


def reset_supabase_client() -> None:
    """Drop the shared client so the next call rebuilds it from settings."""
    global _client
    _client = None


# Example usage patterns:
#
# client = await get_supabase_client()
#
# # Stores with a registered warehouse
# result = await client.table("stores") \
#     .select("id, warehouse_address_id, address:warehouse_address_id(lat, lng)") \
#     .in_("id", ["store-1", "store-2"]) \
#     .not_.is_("warehouse_address_id", "null") \
#     .execute()
#
# # Point a store at a new warehouse address
# result = await client.table("stores") \
#     .update({"warehouse_address_id": address_id}) \
#     .eq("id", store_id) \
#     .execute()
