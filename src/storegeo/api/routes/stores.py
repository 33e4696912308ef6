"""Store warehouse location endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path, status

from ...data import store_repository
from ...errors import StoreNotFound
from ...models.domain import UserSession
from ...schemas.location import WarehouseLocationRequest, WarehouseLocationResponse
from ..deps import get_current_session

router = APIRouter(prefix="/stores", tags=["stores"])


@router.put(
    "/{store_id}/warehouse-location",
    response_model=WarehouseLocationResponse,
    status_code=status.HTTP_200_OK,
)
async def set_warehouse_location(
    payload: WarehouseLocationRequest,
    store_id: str = Path(..., description="Store whose warehouse is being set"),
    session: UserSession = Depends(get_current_session),
) -> WarehouseLocationResponse:
    try:
        address_id = await store_repository.register_warehouse_location(
            session,
            store_id,
            payload.address.to_domain(),
            payload.location.to_domain() if payload.location else None,
            label=payload.label,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except StoreNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except store_repository.DatastoreUnavailable as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return WarehouseLocationResponse(store_id=store_id, address_id=address_id)
