"""Pagination shared by every listing endpoint.

Listings are requested with `?page=&limit=` and answered with the rows
for that page plus a `PageMeta` block:

    total_pages   = ceil(total / limit)
    has_next_page = page < total_pages
    has_prev_page = page > 1
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends, Query
from pydantic import BaseModel
from sqlalchemy import func
from sqlmodel import Session, select
from sqlmodel.sql.expression import SelectOfScalar

from lenddesk.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


@dataclass(frozen=True)
class PageParams:
    """Validated page request."""

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, total: int, params: PageParams) -> "PageMeta":
        total_pages = math.ceil(total / params.limit)
        return cls(
            total=total,
            page=params.page,
            limit=params.limit,
            total_pages=total_pages,
            has_next_page=params.page < total_pages,
            has_prev_page=params.page > 1,
        )


def get_page_params(
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    limit: Annotated[
        int, Query(ge=1, le=MAX_PAGE_SIZE, description="Page size")
    ] = DEFAULT_PAGE_SIZE,
) -> PageParams:
    return PageParams(page=page, limit=limit)


PageParamsDep = Annotated[PageParams, Depends(get_page_params)]


def count_rows(session: Session, statement: SelectOfScalar[Any]) -> int:
    """Count the rows a select would return, ignoring its ordering."""
    subquery = statement.order_by(None).subquery()
    return session.exec(select(func.count()).select_from(subquery)).one()


def paginate[T](
    session: Session, statement: SelectOfScalar[T], params: PageParams
) -> tuple[Sequence[T], PageMeta]:
    """Run an ordered select for one page and describe the page."""
    total = count_rows(session, statement)
    rows = session.exec(statement.offset(params.offset).limit(params.limit)).all()
    return rows, PageMeta.build(total, params)
