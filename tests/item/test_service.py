"""Tests for lenddesk/item/service.py - quantity rules and wishlist."""

import uuid
from datetime import UTC, datetime, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st
from sqlmodel import Session

from lenddesk.core.pagination import PageParams
from lenddesk.item import service
from lenddesk.item.exceptions import (
    ItemAlreadyInWishlistError,
    ItemNotFoundError,
    QuantityError,
)
from lenddesk.item.models import Item
from lenddesk.item.schemas import ItemCreate, ItemSortField, ItemUpdate, SortOrder
from lenddesk.user.models import User


def _add_item(session: Session, name: str, **fields) -> Item:
    item = Item(name=name, **fields)
    session.add(item)
    session.commit()
    session.refresh(item)
    return item


class TestValidateQuantities:
    @given(
        total=st.integers(min_value=0, max_value=10_000),
        data=st.data(),
    )
    def test_accepts_every_valid_pair(self, total, data):
        available = data.draw(st.integers(min_value=0, max_value=total))

        assert service.validate_quantities(total, available) == (total, available)

    @given(
        total=st.integers(min_value=0, max_value=10_000),
        extra=st.integers(min_value=1, max_value=10_000),
    )
    def test_rejects_available_above_total(self, total, extra):
        with pytest.raises(QuantityError, match="cannot exceed"):
            service.validate_quantities(total, total + extra)

    @pytest.mark.parametrize("total,available", [(-1, 0), (5, -1), (-3, -3)])
    def test_rejects_negatives(self, total, available):
        with pytest.raises(QuantityError, match="Quantities must be >= 0"):
            service.validate_quantities(total, available)


class TestCreateItem:
    def test_available_defaults_to_total(self, session: Session):
        item = service.create_item(session, ItemCreate(name="Tent", qty_total=4))

        assert (item.qty_total, item.qty_available) == (4, 4)

    def test_quantities_default_to_zero(self, session: Session):
        item = service.create_item(session, ItemCreate(name="Tent"))

        assert (item.qty_total, item.qty_available) == (0, 0)

    def test_invalid_pair_creates_nothing(self, session: Session):
        with pytest.raises(QuantityError):
            service.create_item(
                session, ItemCreate(name="Tent", qty_total=2, qty_available=3)
            )

        items, meta = service.list_items(session, PageParams(), active=True)
        assert items == []
        assert meta.total == 0


class TestUpdateItem:
    def test_available_checked_against_stored_total(
        self, session: Session, item: Item
    ):
        with pytest.raises(QuantityError, match="cannot exceed"):
            service.update_item(session, item.id, ItemUpdate(qty_available=6))

        session.refresh(item)
        assert (item.qty_total, item.qty_available) == (5, 3)

    def test_lowering_total_below_stored_available_fails(
        self, session: Session, item: Item
    ):
        with pytest.raises(QuantityError):
            service.update_item(session, item.id, ItemUpdate(qty_total=2))

        session.refresh(item)
        assert item.qty_total == 5

    def test_failed_update_leaves_other_fields_unchanged(
        self, session: Session, item: Item
    ):
        with pytest.raises(QuantityError):
            service.update_item(
                session, item.id, ItemUpdate(name="Renamed", qty_total=-1)
            )

        session.refresh(item)
        assert item.name == "Cordless Drill"

    def test_partial_update(self, session: Session, item: Item):
        updated = service.update_item(
            session, item.id, ItemUpdate(qty_total=10, qty_available=10)
        )

        assert (updated.qty_total, updated.qty_available) == (10, 10)
        assert updated.name == "Cordless Drill"

    def test_null_quantity_means_unchanged(self, session: Session, item: Item):
        updated = service.update_item(
            session, item.id, ItemUpdate(qty_total=None, description="New")
        )

        assert updated.qty_total == 5
        assert updated.description == "New"

    def test_unknown_item(self, session: Session):
        with pytest.raises(ItemNotFoundError):
            service.update_item(session, uuid.uuid4(), ItemUpdate(name="x"))


class TestListItems:
    def test_search_matches_name_or_description(self, session: Session):
        _add_item(session, "Camping Stove", description="Two burners")
        _add_item(session, "Kayak", description="Comes with a paddle and STOVE bag")
        _add_item(session, "Ladder")

        items, meta = service.list_items(
            session, PageParams(), active=True, search="stove"
        )

        assert {i.name for i in items} == {"Camping Stove", "Kayak"}
        assert meta.total == 2

    def test_search_treats_wildcards_literally(self, session: Session):
        _add_item(session, "100% cotton sheet")
        _add_item(session, "Blanket")

        items, _ = service.list_items(session, PageParams(), active=True, search="%")

        assert [i.name for i in items] == ["100% cotton sheet"]

    def test_sort_by_name_ascending(self, session: Session):
        for name in ("Bike", "Axe", "Canoe"):
            _add_item(session, name)

        items, _ = service.list_items(
            session,
            PageParams(),
            active=True,
            sort_by=ItemSortField.name,
            sort_order=SortOrder.asc,
        )

        assert [i.name for i in items] == ["Axe", "Bike", "Canoe"]

    def test_default_is_newest_first(self, session: Session):
        base = datetime(2026, 1, 1, tzinfo=UTC)
        _add_item(session, "Old", created_at=base)
        _add_item(session, "New", created_at=base + timedelta(days=1))

        items, _ = service.list_items(session, PageParams(), active=True)

        assert [i.name for i in items] == ["New", "Old"]

    def test_archived_items_are_separate(self, session: Session, item: Item):
        service.archive_item(session, item.id)

        active, _ = service.list_items(session, PageParams(), active=True)
        archived, _ = service.list_items(session, PageParams(), active=False)

        assert active == []
        assert [i.id for i in archived] == [item.id]


class TestWishlist:
    def test_add_and_list(self, session: Session, test_user: User, item: Item):
        service.add_to_wishlist(session, test_user.id, item.id)

        items, meta = service.list_wishlist(session, test_user.id, PageParams())

        assert [i.id for i in items] == [item.id]
        assert meta.total == 1

    def test_duplicate_add_conflicts(
        self, session: Session, test_user: User, item: Item
    ):
        service.add_to_wishlist(session, test_user.id, item.id)

        with pytest.raises(ItemAlreadyInWishlistError):
            service.add_to_wishlist(session, test_user.id, item.id)

    def test_archived_item_cannot_be_added(
        self, session: Session, test_user: User, item: Item
    ):
        service.archive_item(session, item.id)

        with pytest.raises(ItemNotFoundError):
            service.add_to_wishlist(session, test_user.id, item.id)

    def test_remove_is_idempotent(self, session: Session, test_user: User, item: Item):
        service.add_to_wishlist(session, test_user.id, item.id)

        service.remove_from_wishlist(session, test_user.id, item.id)
        service.remove_from_wishlist(session, test_user.id, item.id)

        items, _ = service.list_wishlist(session, test_user.id, PageParams())
        assert items == []

    def test_wishlists_are_per_user(
        self, session: Session, test_user: User, other_user: User, item: Item
    ):
        service.add_to_wishlist(session, test_user.id, item.id)

        items, _ = service.list_wishlist(session, other_user.id, PageParams())

        assert items == []
