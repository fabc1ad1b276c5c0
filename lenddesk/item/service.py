"""Catalog and wishlist operations.

Quantity rules for every write:
- both quantities are >= 0
- qty_available <= qty_total
A write that breaks either rule changes nothing.
"""

import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, or_, select

from lenddesk.core.pagination import PageMeta, PageParams, paginate
from lenddesk.item.exceptions import (
    ItemAlreadyInWishlistError,
    ItemNotFoundError,
    QuantityError,
)
from lenddesk.item.models import Item
from lenddesk.item.schemas import ItemCreate, ItemSortField, ItemUpdate, SortOrder
from lenddesk.user.models import WishlistEntry

logger = logging.getLogger(__name__)


def validate_quantities(qty_total: int, qty_available: int) -> tuple[int, int]:
    """Check a (total, available) pair and return it as ints."""
    total, available = int(qty_total), int(qty_available)
    if total < 0 or available < 0:
        raise QuantityError("Quantities must be >= 0")
    if available > total:
        raise QuantityError("qty_available cannot exceed qty_total")
    return total, available


def get_item_or_404(session: Session, item_id: uuid.UUID) -> Item:
    item = session.get(Item, item_id)
    if item is None:
        raise ItemNotFoundError()
    return item


def list_items(
    session: Session,
    params: PageParams,
    *,
    active: bool,
    search: str | None = None,
    sort_by: ItemSortField = ItemSortField.created_at,
    sort_order: SortOrder = SortOrder.desc,
) -> tuple[list[Item], PageMeta]:
    """Page through active (or archived) items.

    `search` matches name or description, case-insensitively.
    """
    statement = select(Item).where(Item.is_active == active)

    term = (search or "").strip()
    if term:
        statement = statement.where(
            or_(
                col(Item.name).icontains(term, autoescape=True),
                col(Item.description).icontains(term, autoescape=True),
            )
        )

    sort_column = col(getattr(Item, sort_by.value))
    if sort_order == SortOrder.desc:
        statement = statement.order_by(sort_column.desc(), col(Item.id).desc())
    else:
        statement = statement.order_by(sort_column.asc(), col(Item.id).asc())

    rows, meta = paginate(session, statement, params)
    return list(rows), meta


def create_item(session: Session, data: ItemCreate) -> Item:
    """Create an item. qty_total defaults to 0, qty_available to qty_total."""
    total = data.qty_total if data.qty_total is not None else 0
    available = data.qty_available if data.qty_available is not None else total
    total, available = validate_quantities(total, available)

    item = Item(
        name=data.name,
        description=data.description,
        photo_url=data.photo_url,
        qty_total=total,
        qty_available=available,
        is_active=data.is_active,
    )
    session.add(item)
    session.commit()
    session.refresh(item)
    logger.info("Item created", extra={"item_id": item.id})
    return item


def update_item(session: Session, item_id: uuid.UUID, data: ItemUpdate) -> Item:
    """Apply a partial update.

    When either quantity is sent, the pair is re-validated with the
    missing side taken from the stored item.
    """
    item = get_item_or_404(session, item_id)
    update_data = data.model_dump(exclude_unset=True)

    # Explicit nulls mean "unchanged" for quantities
    for key in ("qty_total", "qty_available"):
        if key in update_data and update_data[key] is None:
            del update_data[key]

    if "qty_total" in update_data or "qty_available" in update_data:
        total, available = validate_quantities(
            update_data.get("qty_total", item.qty_total),
            update_data.get("qty_available", item.qty_available),
        )
        update_data["qty_total"] = total
        update_data["qty_available"] = available

    for key, value in update_data.items():
        if value is None:
            continue
        setattr(item, key, value)

    session.add(item)
    session.commit()
    session.refresh(item)
    logger.info("Item updated", extra={"item_id": item.id})
    return item


def archive_item(session: Session, item_id: uuid.UUID) -> Item:
    """Hide an item from the public catalog. Idempotent."""
    item = get_item_or_404(session, item_id)
    if item.is_active:
        item.is_active = False
        session.add(item)
        session.commit()
        session.refresh(item)
        logger.info("Item archived", extra={"item_id": item.id})
    return item


def add_to_wishlist(session: Session, user_id: uuid.UUID, item_id: uuid.UUID) -> Item:
    """Save an active item to the user's wishlist."""
    item = session.get(Item, item_id)
    if item is None or not item.is_active:
        raise ItemNotFoundError()

    if session.get(WishlistEntry, (user_id, item_id)) is not None:
        raise ItemAlreadyInWishlistError()

    session.add(WishlistEntry(user_id=user_id, item_id=item_id))
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ItemAlreadyInWishlistError() from e
    return item


def remove_from_wishlist(
    session: Session, user_id: uuid.UUID, item_id: uuid.UUID
) -> None:
    """Drop an item from the wishlist. Removing an absent item is a no-op."""
    entry = session.get(WishlistEntry, (user_id, item_id))
    if entry is not None:
        session.delete(entry)
        session.commit()


def list_wishlist(
    session: Session, user_id: uuid.UUID, params: PageParams
) -> tuple[list[Item], PageMeta]:
    """The user's saved items, newest item first."""
    statement = (
        select(Item)
        .join(WishlistEntry, col(WishlistEntry.item_id) == col(Item.id))
        .where(WishlistEntry.user_id == user_id)
        .order_by(col(Item.created_at).desc(), col(Item.id).desc())
    )
    rows, meta = paginate(session, statement, params)
    return list(rows), meta
