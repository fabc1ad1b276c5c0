"""Role and account-state checks shared by dependencies and routes."""

from lenddesk.auth.exceptions import AdminRequiredError, StaffRequiredError
from lenddesk.user.exceptions import (
    ApprovalPendingError,
    ApprovalRejectedError,
    UserInactiveError,
)
from lenddesk.user.models import STAFF_ROLES, ApprovalStatus, User, UserRole


def is_staff(user: User) -> bool:
    return user.role in STAFF_ROLES


def ensure_staff(user: User) -> None:
    if not is_staff(user):
        raise StaffRequiredError()


def ensure_admin(user: User) -> None:
    if user.role != UserRole.admin:
        raise AdminRequiredError()


def ensure_account_access(user: User) -> None:
    """Reject accounts that may not use the API.

    Checked in order: deactivated, awaiting review, rejected.
    """
    if not user.is_active:
        raise UserInactiveError()
    if user.approval_status == ApprovalStatus.pending:
        raise ApprovalPendingError()
    if user.approval_status == ApprovalStatus.rejected:
        raise ApprovalRejectedError()
