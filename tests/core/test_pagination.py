"""Tests for lenddesk/core/pagination.py."""

import math
from datetime import UTC, datetime, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st
from sqlmodel import Session, col, select

from lenddesk.core.pagination import PageMeta, PageParams, count_rows, paginate
from lenddesk.item.models import Item


class TestPageParams:
    def test_defaults(self):
        params = PageParams()
        assert params.page == 1
        assert params.limit == 10
        assert params.offset == 0

    def test_offset(self):
        assert PageParams(page=3, limit=20).offset == 40

    @pytest.mark.parametrize("page,limit", [(0, 10), (-1, 10), (1, 0)])
    def test_rejects_out_of_range(self, page, limit):
        with pytest.raises(ValueError):
            PageParams(page=page, limit=limit)


class TestPageMeta:
    @given(
        total=st.integers(min_value=0, max_value=10_000),
        page=st.integers(min_value=1, max_value=500),
        limit=st.integers(min_value=1, max_value=100),
    )
    def test_derived_fields(self, total, page, limit):
        meta = PageMeta.build(total, PageParams(page=page, limit=limit))

        assert meta.total_pages == math.ceil(total / limit)
        assert meta.has_next_page == (page < meta.total_pages)
        assert meta.has_prev_page == (page > 1)

    def test_empty_result_has_no_pages(self):
        meta = PageMeta.build(0, PageParams())
        assert meta.total_pages == 0
        assert meta.has_next_page is False
        assert meta.has_prev_page is False


def _add_items(session: Session, count: int) -> None:
    base = datetime(2026, 1, 1, tzinfo=UTC)
    for i in range(count):
        session.add(
            Item(name=f"item-{i:02d}", created_at=base + timedelta(minutes=i))
        )
    session.commit()


class TestPaginate:
    def test_pages_through_ordered_rows(self, session: Session):
        _add_items(session, 25)
        statement = select(Item).order_by(col(Item.created_at).desc())

        rows, meta = paginate(session, statement, PageParams(page=3, limit=10))

        assert [row.name for row in rows] == [f"item-{i:02d}" for i in range(4, -1, -1)]
        assert meta.total == 25
        assert meta.total_pages == 3
        assert meta.has_next_page is False
        assert meta.has_prev_page is True

    def test_page_past_the_end_is_empty(self, session: Session):
        _add_items(session, 3)

        rows, meta = paginate(session, select(Item), PageParams(page=5, limit=10))

        assert rows == []
        assert meta.total == 3

    def test_count_rows_ignores_ordering(self, session: Session):
        _add_items(session, 4)
        statement = select(Item).order_by(col(Item.name))

        assert count_rows(session, statement) == 4
