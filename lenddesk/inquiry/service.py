"""Inquiry lifecycle.

    create_inquiry ──► pending ──reply_to_inquiry──► approved | rejected

A reply is terminal. Read flags (`is_read` for the owner,
`is_read_by_admin` for staff) flip independently of status.
"""

import logging
import uuid
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends
from sqlalchemy import func, not_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from lenddesk.auth.permissions import ensure_staff
from lenddesk.core.deps import SessionDep
from lenddesk.core.pagination import PageMeta, PageParams, count_rows, paginate
from lenddesk.inquiry.exceptions import (
    DuplicatePendingInquiryError,
    InquiryAlreadyRepliedError,
    InquiryNotFoundError,
    InquiryValidationError,
)
from lenddesk.inquiry.models import REPLY_STATUSES, Inquiry, InquiryStatus
from lenddesk.inquiry.schemas import InquiryStats
from lenddesk.item.exceptions import ItemNotFoundError
from lenddesk.item.models import Item
from lenddesk.user.exceptions import UserNotFoundError
from lenddesk.user.models import User

logger = logging.getLogger(__name__)


class InquiryService:
    """Inquiry operations bound to one database session."""

    def __init__(self, session: Session):
        self.session = session

    def _get(self, inquiry_id: uuid.UUID) -> Inquiry:
        inquiry = self.session.get(Inquiry, inquiry_id)
        if inquiry is None:
            raise InquiryNotFoundError()
        return inquiry

    def _has_pending(self, user_id: uuid.UUID, item_id: uuid.UUID) -> bool:
        statement = select(Inquiry.id).where(
            Inquiry.user_id == user_id,
            Inquiry.item_id == item_id,
            Inquiry.status == InquiryStatus.pending,
        )
        return self.session.exec(statement).first() is not None

    def create_inquiry(
        self,
        user_id: uuid.UUID,
        item_id: uuid.UUID | None,
        user_message: str | None,
    ) -> Inquiry:
        """Open a pending inquiry, snapshotting item and user names.

        Raises:
            InquiryValidationError: item id or message missing
            ItemNotFoundError / UserNotFoundError: referent absent
            DuplicatePendingInquiryError: a pending one already exists
        """
        message = (user_message or "").strip()
        if item_id is None or not message:
            raise InquiryValidationError("Item ID and message are required")

        item = self.session.get(Item, item_id)
        if item is None:
            raise ItemNotFoundError()

        user = self.session.get(User, user_id)
        if user is None:
            raise UserNotFoundError()

        if self._has_pending(user_id, item_id):
            raise DuplicatePendingInquiryError()

        inquiry = Inquiry(
            item_id=item.id,
            item_name=item.name,
            item_photo_url=item.photo_url,
            user_id=user.id,
            user_name=user.display_name,
            user_message=message,
            status=InquiryStatus.pending,
        )
        self.session.add(inquiry)
        try:
            self.session.commit()
        except IntegrityError as e:
            # Lost the race against a concurrent create for the same pair
            self.session.rollback()
            raise DuplicatePendingInquiryError() from e
        self.session.refresh(inquiry)

        logger.info(
            "Inquiry created",
            extra={"inquiry_id": inquiry.id, "user_id": user_id, "item_id": item_id},
        )
        return inquiry

    def reply_to_inquiry(
        self,
        inquiry_id: uuid.UUID,
        staff: User,
        admin_reply: str | None,
        status: str | None,
    ) -> Inquiry:
        """Record the staff decision on a pending inquiry.

        Raises:
            StaffRequiredError: caller is not admin/editor
            InquiryValidationError: reply or status missing, or status invalid
            InquiryNotFoundError: inquiry absent
            InquiryAlreadyRepliedError: inquiry is no longer pending
        """
        ensure_staff(staff)

        reply = (admin_reply or "").strip()
        if not reply or not status:
            raise InquiryValidationError("Admin reply and status are required")

        try:
            decision = InquiryStatus(status)
        except ValueError:
            decision = None
        if decision not in REPLY_STATUSES:
            raise InquiryValidationError(
                "Status must be either 'approved' or 'rejected'"
            )

        inquiry = self._get(inquiry_id)
        if inquiry.status != InquiryStatus.pending:
            raise InquiryAlreadyRepliedError()

        inquiry.admin_reply = reply
        inquiry.status = decision
        inquiry.replied_by = staff.id
        inquiry.replied_at = datetime.now(UTC)
        inquiry.is_read_by_admin = True

        self.session.add(inquiry)
        self.session.commit()
        self.session.refresh(inquiry)

        logger.info(
            "Inquiry %s",
            decision.value,
            extra={"inquiry_id": inquiry.id, "user_id": staff.id},
        )
        return inquiry

    def mark_read(self, inquiry_id: uuid.UUID, requesting_user_id: uuid.UUID) -> Inquiry:
        """Owner marks their inquiry read. Other users get 404."""
        inquiry = self.session.get(Inquiry, inquiry_id)
        if inquiry is None or inquiry.user_id != requesting_user_id:
            raise InquiryNotFoundError()

        if not inquiry.is_read:
            inquiry.is_read = True
            self.session.add(inquiry)
            self.session.commit()
            self.session.refresh(inquiry)
        return inquiry

    def mark_read_by_admin(self, inquiry_id: uuid.UUID) -> Inquiry:
        """Staff-side read flag. Role gating is the caller's job."""
        inquiry = self._get(inquiry_id)

        if not inquiry.is_read_by_admin:
            inquiry.is_read_by_admin = True
            self.session.add(inquiry)
            self.session.commit()
            self.session.refresh(inquiry)
        return inquiry

    def list_for_user(
        self, user_id: uuid.UUID, params: PageParams
    ) -> tuple[list[Inquiry], PageMeta]:
        statement = (
            select(Inquiry)
            .where(Inquiry.user_id == user_id)
            .order_by(col(Inquiry.created_at).desc(), col(Inquiry.id).desc())
        )
        rows, meta = paginate(self.session, statement, params)
        return list(rows), meta

    def list_all(self, params: PageParams) -> tuple[list[Inquiry], PageMeta]:
        statement = select(Inquiry).order_by(
            col(Inquiry.created_at).desc(), col(Inquiry.id).desc()
        )
        rows, meta = paginate(self.session, statement, params)
        return list(rows), meta

    def stats(self) -> InquiryStats:
        """Totals for the staff dashboard. Every status is present, zero if unused."""
        total = count_rows(self.session, select(Inquiry))
        unread_by_admin = count_rows(
            self.session, select(Inquiry).where(not_(col(Inquiry.is_read_by_admin)))
        )

        by_status = {status: 0 for status in InquiryStatus}
        grouped = self.session.exec(
            select(Inquiry.status, func.count()).group_by(Inquiry.status)
        ).all()
        for status, count in grouped:
            by_status[InquiryStatus(status)] = count

        return InquiryStats(
            total=total, unread_by_admin=unread_by_admin, by_status=by_status
        )


def get_inquiry_service(session: SessionDep) -> InquiryService:
    return InquiryService(session)


InquiryServiceDep = Annotated[InquiryService, Depends(get_inquiry_service)]
