"""User domain exceptions.

Not found, account-state and conflict scenarios for user accounts.
"""

from lenddesk.core.exceptions import (
    AppException,
    ConflictError,
    InvalidStateError,
    NotFoundError,
)


class AccountAccessError(AppException):
    """Base class for accounts that exist but may not sign in."""

    status_code = 403
    error_type = "account_access_denied"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class UserNotFoundError(NotFoundError):
    """Raised when user cannot be found."""

    error_type = "user_not_found"

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class UserInactiveError(AccountAccessError):
    """Raised when the account has been deactivated."""

    error_type = "user_inactive"

    def __init__(
        self, message: str = "Your account is inactive. Please contact support."
    ):
        super().__init__(message)


class ApprovalPendingError(AccountAccessError):
    """Raised when a staff account has not been reviewed yet."""

    error_type = "approval_pending"

    def __init__(
        self,
        message: str = "Your account is pending approval. Please wait for admin approval.",  # noqa: E501
    ):
        super().__init__(message)


class ApprovalRejectedError(AccountAccessError):
    """Raised when a staff account application was rejected."""

    error_type = "approval_rejected"

    def __init__(
        self, message: str = "Your account has been rejected. Please contact support."
    ):
        super().__init__(message)


class AlreadyReviewedError(InvalidStateError):
    """Raised when approving or rejecting an account that is no longer pending."""

    error_type = "already_reviewed"

    def __init__(self, message: str = "This account has already been reviewed"):
        super().__init__(message)


class EmailExistsError(ConflictError):
    """Raised when attempting to register with an existing email."""

    error_type = "email_exists"

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message)


class UsernameExistsError(ConflictError):
    """Raised when attempting to register with an existing username."""

    error_type = "username_exists"

    def __init__(self, message: str = "Username already taken"):
        super().__init__(message)
