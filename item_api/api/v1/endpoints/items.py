"""
Item CRUD endpoints - RESTful resource (GET/POST/PUT/DELETE).
Design: Thin controller. The raw Authorization header goes straight to the
service, which authorizes before touching the store.
"""

from typing import Annotated

from fastapi import APIRouter, Header, Query, status

from item_api.core.dependencies import ItemServiceDep
from item_api.schemas.item import ItemCreate, ItemResponse, ItemUpdate
from item_api.services.item_service import MAX_OFFSET

router = APIRouter()

Authorization = Annotated[str | None, Header(description="Bearer token")]


@router.get("", response_model=list[ItemResponse])
async def list_items(
    svc: ItemServiceDep,
    authorization: Authorization = None,
    offset: int = Query(0, ge=0, le=MAX_OFFSET),
):
    """List the caller's items, one fixed-size page at a time. REST: GET /items?offset=0."""
    return await svc.list_items(authorization, offset=offset)


@router.get("/{item_id}", response_model=ItemResponse)
async def get_item(svc: ItemServiceDep, item_id: str, authorization: Authorization = None):
    """Get a single owned item. Foreign and missing items are both 404."""
    return await svc.get_item(authorization, item_id)


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(svc: ItemServiceDep, data: ItemCreate, authorization: Authorization = None):
    """Create item owned by the token's subject."""
    return await svc.create_item(authorization, data.name, data.description)


@router.put("/{item_id}", response_model=ItemResponse)
async def update_item(
    svc: ItemServiceDep,
    item_id: str,
    data: ItemUpdate,
    authorization: Authorization = None,
):
    return await svc.update_item(authorization, item_id, name=data.name, description=data.description)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(svc: ItemServiceDep, item_id: str, authorization: Authorization = None):
    await svc.delete_item(authorization, item_id)
