"""Account review and listing helpers for the user routes."""

import logging
import uuid

from sqlmodel import Session, and_, col, select

from lenddesk.core.email import send_account_review_email
from lenddesk.core.pagination import PageMeta, PageParams, paginate
from lenddesk.user.exceptions import (
    AlreadyReviewedError,
    EmailExistsError,
    UserNotFoundError,
    UsernameExistsError,
)
from lenddesk.user.models import ApprovalStatus, User

logger = logging.getLogger(__name__)


def get_user_or_404(session: Session, user_id: uuid.UUID) -> User:
    user = session.get(User, user_id)
    if user is None:
        raise UserNotFoundError()
    return user


def list_users(
    session: Session,
    params: PageParams,
    approval_status: ApprovalStatus | None = None,
) -> tuple[list[User], PageMeta]:
    """Newest accounts first, optionally filtered by approval status."""
    statement = select(User)
    if approval_status is not None:
        statement = statement.where(User.approval_status == approval_status)
    statement = statement.order_by(col(User.created_at).desc(), col(User.id).desc())
    rows, meta = paginate(session, statement, params)
    return list(rows), meta


def ensure_unique_identity(
    session: Session, user: User, *, email: str | None, username: str | None
) -> None:
    """Raise 409 if another account already uses the new email or username."""
    if email is not None and email != user.email:
        taken = session.exec(
            select(User).where(and_(User.email == email, User.id != user.id))
        ).first()
        if taken:
            raise EmailExistsError("Email already in use")
    if username is not None and username != user.username:
        taken = session.exec(
            select(User).where(and_(User.username == username, User.id != user.id))
        ).first()
        if taken:
            raise UsernameExistsError()


def review_account(
    session: Session,
    user_id: uuid.UUID,
    decision: ApprovalStatus,
    reviewer: User,
) -> User:
    """Move a pending account to approved or rejected.

    Only pending accounts can be reviewed. The applicant is emailed the
    outcome; a failed email does not undo the review.
    """
    if decision == ApprovalStatus.pending:
        raise ValueError("decision must be approved or rejected")

    user = get_user_or_404(session, user_id)
    if user.approval_status != ApprovalStatus.pending:
        raise AlreadyReviewedError()

    user.approval_status = decision
    session.add(user)
    session.commit()
    session.refresh(user)

    logger.info(
        "Account %s by %s",
        decision.value,
        reviewer.id,
        extra={"user_id": user.id},
    )

    try:
        send_account_review_email(
            to_email=user.email,
            first_name=user.first_name or user.username,
            approval_status=decision.value,
        )
    except Exception:
        logger.warning(
            "Failed to send account review email",
            exc_info=True,
            extra={"user_id": user.id},
        )

    return user
