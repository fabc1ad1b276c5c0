"""Item domain router.

Public catalog browsing, staff catalog management and the per-user
wishlist. Static paths (/wishlist, /archived) are declared before
/{item_id} so they are not captured by it.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from lenddesk.auth.dependencies import CurrentUserDep, require_staff
from lenddesk.core.constants import CommonResponses, Routes
from lenddesk.core.deps import SessionDep
from lenddesk.core.pagination import PageParamsDep
from lenddesk.core.schemas import MessageResponse
from lenddesk.item import service
from lenddesk.item.schemas import (
    ItemCreate,
    ItemListResponse,
    ItemRead,
    ItemResponse,
    ItemSortField,
    ItemUpdate,
    SortOrder,
    WishlistAdd,
)

router = APIRouter(
    prefix=Routes.ITEM.prefix,
    tags=[Routes.ITEM.tag],
    responses={**CommonResponses.BAD_REQUEST},
)

SearchQuery = Annotated[str | None, Query(max_length=100)]
SortByQuery = Annotated[ItemSortField, Query()]
SortOrderQuery = Annotated[SortOrder, Query()]


def _item_list_response(
    message: str,
    items,
    meta,
    *,
    sort_by: ItemSortField,
    sort_order: SortOrder,
    search: str | None,
) -> ItemListResponse:
    return ItemListResponse(
        message=message,
        items=[ItemRead.model_validate(item) for item in items],
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        **meta.model_dump(),
    )


@router.get("", response_model=ItemListResponse)
async def list_items(
    session: SessionDep,
    params: PageParamsDep,
    search: SearchQuery = None,
    sort_by: SortByQuery = ItemSortField.created_at,
    sort_order: SortOrderQuery = SortOrder.desc,
):
    """Browse the active catalog. Public."""
    items, meta = service.list_items(
        session,
        params,
        active=True,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return _item_list_response(
        "Items retrieved successfully",
        items,
        meta,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
    )


@router.get(
    "/wishlist",
    response_model=ItemListResponse,
    responses={**CommonResponses.UNAUTHORIZED},
)
async def get_wishlist(user: CurrentUserDep, session: SessionDep, params: PageParamsDep):
    """The current user's saved items."""
    items, meta = service.list_wishlist(session, user.id, params)
    return ItemListResponse(
        message="Wishlist retrieved successfully",
        items=[ItemRead.model_validate(item) for item in items],
        **meta.model_dump(),
    )


@router.post(
    "/wishlist",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.NOT_FOUND,
        **CommonResponses.CONFLICT,
    },
)
async def add_to_wishlist(payload: WishlistAdd, user: CurrentUserDep, session: SessionDep):
    item = service.add_to_wishlist(session, user.id, payload.item_id)
    return ItemResponse(
        message="Item added to wishlist successfully",
        item=ItemRead.model_validate(item),
    )


@router.delete(
    "/wishlist/{item_id}",
    response_model=MessageResponse,
    responses={**CommonResponses.UNAUTHORIZED},
)
async def remove_from_wishlist(
    item_id: uuid.UUID, user: CurrentUserDep, session: SessionDep
):
    service.remove_from_wishlist(session, user.id, item_id)
    return MessageResponse(message="Item removed from wishlist successfully")


@router.get(
    "/archived",
    response_model=ItemListResponse,
    dependencies=[Depends(require_staff)],
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)
async def list_archived_items(
    session: SessionDep,
    params: PageParamsDep,
    search: SearchQuery = None,
    sort_by: SortByQuery = ItemSortField.created_at,
    sort_order: SortOrderQuery = SortOrder.desc,
):
    """Browse archived items. Staff only."""
    items, meta = service.list_items(
        session,
        params,
        active=False,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return _item_list_response(
        "Archived items retrieved successfully",
        items,
        meta,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
    )


@router.get(
    "/{item_id}",
    response_model=ItemResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def get_item(item_id: uuid.UUID, session: SessionDep):
    item = service.get_item_or_404(session, item_id)
    return ItemResponse(
        message="Item retrieved successfully", item=ItemRead.model_validate(item)
    )


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_staff)],
    responses={**CommonResponses.UNAUTHORIZED, **CommonResponses.FORBIDDEN},
)
async def create_item(payload: ItemCreate, session: SessionDep):
    """Add an item to the catalog. Staff only."""
    item = service.create_item(session, payload)
    return ItemResponse(
        message="Item created successfully", item=ItemRead.model_validate(item)
    )


@router.put(
    "/{item_id}",
    response_model=ItemResponse,
    dependencies=[Depends(require_staff)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
        **CommonResponses.NOT_FOUND,
    },
)
async def update_item(item_id: uuid.UUID, payload: ItemUpdate, session: SessionDep):
    """Partially update an item. Staff only."""
    item = service.update_item(session, item_id, payload)
    return ItemResponse(
        message="Item updated successfully", item=ItemRead.model_validate(item)
    )


@router.delete(
    "/{item_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_staff)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
        **CommonResponses.NOT_FOUND,
    },
)
async def archive_item(item_id: uuid.UUID, session: SessionDep):
    """Archive an item. Staff only."""
    service.archive_item(session, item_id)
    return MessageResponse(message="Item archived successfully")
